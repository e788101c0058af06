"""
Core compression implementation for the Image Compressor Lab.

This package contains:
- Quality normalization and loss-type inference
- PSNR over raw RGBA buffers
- Variant plan resolution
- The Pillow-backed codec and the per-image compression orchestrator
"""
from imagelab.core.errors import (
    ImageLabError,
    MissingImageError,
    ImageProcessingError
)

from imagelab.core.quality import (
    normalize_quality,
    classify_loss_type
)

from imagelab.core.psnr import (
    compute_mse,
    compute_psnr
)

from imagelab.core.plan import (
    DEFAULT_VARIANT_PLAN,
    ConfigStatus,
    ConfigParseResult,
    PlanSource,
    PlanResolution,
    parse_variant_config,
    resolve_variant_plan
)

from imagelab.core.orchestrator import (
    process_variant,
    compress_image_variants
)

__all__ = [
    # Errors
    'ImageLabError',
    'MissingImageError',
    'ImageProcessingError',

    # Quality
    'normalize_quality',
    'classify_loss_type',

    # PSNR
    'compute_mse',
    'compute_psnr',

    # Variant plan
    'DEFAULT_VARIANT_PLAN',
    'ConfigStatus',
    'ConfigParseResult',
    'PlanSource',
    'PlanResolution',
    'parse_variant_config',
    'resolve_variant_plan',

    # Orchestration
    'process_variant',
    'compress_image_variants'
]

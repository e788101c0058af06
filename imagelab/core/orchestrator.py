"""
Compression orchestration for one uploaded image.

Decodes the upload once, stores a lossless reference copy, resolves the
variant plan and encodes every supported variant, scoring each one against
the original. Variants run on a bounded pool of worker threads; results are
always returned in plan order.
"""
import asyncio
import logging
from typing import Any, List, Optional

from imagelab.core.codec import (
    RawImage,
    decode_image,
    decode_raw_rgba,
    encode_image,
    open_image,
)
from imagelab.core.errors import ImageLabError, ImageProcessingError, MissingImageError
from imagelab.core.plan import resolve_variant_plan
from imagelab.core.psnr import compute_psnr
from imagelab.core.quality import classify_loss_type, normalize_quality
from imagelab.models.compression import CompressionJobResult, OriginalImage, VariantResult
from imagelab.models.variants import ImageFormat, VariantSpec
from imagelab.utils.file_handling import (
    UploadStorage,
    make_base_name,
    original_file_name,
    variant_file_name,
)
from imagelab.utils.metrics import PerformanceTimer, calculate_ssim, measure_compression_performance

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4
DEFAULT_ORIGINAL_NAME = "image"


def process_variant(
    content: bytes,
    spec: VariantSpec,
    baseline: RawImage,
    original_size: int,
    base_name: str,
    storage: UploadStorage,
    psnr_comparable: bool = True,
) -> Optional[VariantResult]:
    """
    Encode, store and score a single variant.

    Args:
        content: Uploaded image bytes
        spec: Variant to produce
        baseline: Raw RGBA buffer of the decoded upload
        original_size: Size of the stored reference copy in bytes
        base_name: Unique file name stem for this job
        storage: Where encoded variants are written
        psnr_comparable: False when the baseline cannot be trusted for comparison

    Returns:
        VariantResult, or None if the format is not supported
    """
    quality_percent = normalize_quality(spec.quality)

    if not spec.is_supported:
        logger.info(f"Skipping variant '{spec.label}': unsupported format '{spec.format}'")
        return None

    fmt = spec.image_format
    file_name = variant_file_name(base_name, fmt, quality_percent)

    with PerformanceTimer() as timer:
        encoded = encode_image(open_image(content), fmt, quality_percent)

    if not encoded:
        raise ImageProcessingError(f"Encoder produced no output for {file_name}")

    try:
        size = storage.write_variant(file_name, encoded)
    except OSError as e:
        raise ImageProcessingError(f"Failed to write variant {file_name}: {e}") from e

    performance = measure_compression_performance(original_size, size)

    decoded = decode_raw_rgba(encoded)
    psnr = None
    ssim = None
    if psnr_comparable and len(decoded.data) == len(baseline.data):
        psnr = compute_psnr(baseline.data, decoded.data)
        ssim = calculate_ssim(baseline, decoded)

    logger.info(
        f"Variant {file_name}: {size} bytes, ratio {performance['compression_ratio']:.2f}, "
        f"PSNR {psnr}"
    )

    return VariantResult(
        label=spec.label,
        format=fmt.value,
        quality=quality_percent,
        file_name=file_name,
        url=storage.compressed_url(file_name),
        size=size,
        compression_ratio=performance["compression_ratio"],
        space_savings_percent=performance["space_savings_percent"],
        encode_time=round(timer.execution_time, 4),
        psnr=psnr,
        ssim=ssim,
        loss_type=spec.loss_type or classify_loss_type(spec.format),
    )


async def compress_image_variants(
    content: Optional[bytes],
    storage: UploadStorage,
    config: Any = None,
    original_name: Optional[str] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> CompressionJobResult:
    """
    Run a full compression job for one uploaded image.

    Args:
        content: Uploaded image bytes
        storage: Upload storage for the reference copy and variants
        config: Caller variant configuration (JSON text, decoded data or None)
        original_name: Name the image was uploaded under
        max_workers: Maximum number of variants encoded at the same time

    Returns:
        CompressionJobResult with variants in plan order

    Raises:
        MissingImageError: If no image bytes were supplied
        ImageProcessingError: If decoding, encoding or writing fails
    """
    if not content:
        raise MissingImageError("No image payload supplied")

    try:
        return await _run_job(content, storage, config, original_name or DEFAULT_ORIGINAL_NAME, max_workers)
    except ImageLabError:
        raise
    except Exception as e:
        raise ImageProcessingError(f"Compression job failed: {e}") from e


async def _run_job(
    content: bytes,
    storage: UploadStorage,
    config: Any,
    original_name: str,
    max_workers: int,
) -> CompressionJobResult:
    base_name = make_base_name()

    decoded = await asyncio.to_thread(decode_image, content)
    metadata = decoded.metadata

    reference_name = original_file_name(base_name)
    reference_bytes = await asyncio.to_thread(encode_image, decoded.image, ImageFormat.PNG)
    try:
        original_size = await asyncio.to_thread(storage.write_original, reference_name, reference_bytes)
    except OSError as e:
        raise ImageProcessingError(f"Failed to write original {reference_name}: {e}") from e

    baseline = await asyncio.to_thread(decoded.to_raw_rgba)
    psnr_comparable = (baseline.width, baseline.height) == (metadata.width, metadata.height)
    if not psnr_comparable:
        logger.warning(
            f"Decoded size {baseline.width}x{baseline.height} does not match metadata "
            f"{metadata.width}x{metadata.height}; PSNR disabled for {base_name}"
        )

    plan = resolve_variant_plan(config)
    logger.info(f"Compressing {original_name} ({len(content)} bytes) into {len(plan)} variants ({plan.source.value} plan)")

    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def run(spec: VariantSpec) -> Optional[VariantResult]:
        async with semaphore:
            return await asyncio.to_thread(
                process_variant,
                content,
                spec,
                baseline,
                original_size,
                base_name,
                storage,
                psnr_comparable,
            )

    outcomes = await asyncio.gather(*(run(spec) for spec in plan))
    variants: List[VariantResult] = [outcome for outcome in outcomes if outcome is not None]

    original = OriginalImage(
        file_name=reference_name,
        url=storage.original_url(reference_name),
        size=original_size,
        width=metadata.width,
        height=metadata.height,
        format=metadata.format,
        name=original_name,
    )
    return CompressionJobResult(original=original, variants=variants)

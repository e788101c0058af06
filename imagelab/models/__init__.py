"""
Data models for the Image Compressor Lab API.

This module provides Pydantic models for request parsing, response
validation and documentation.
"""
from imagelab.models.base import (
    CamelModel,
    BaseCompressionMetrics,
    BaseQualityMetrics
)

from imagelab.models.variants import (
    DEFAULT_FORMAT,
    DEFAULT_QUALITY,
    SUPPORTED_FORMATS,
    ImageFormat,
    LossType,
    VariantSpec,
    format_label
)

from imagelab.models.compression import (
    OriginalImage,
    VariantResult,
    CompressionJobResult,
    ErrorResponse
)

__all__ = [
    # Base models
    'CamelModel',
    'BaseCompressionMetrics',
    'BaseQualityMetrics',

    # Variant plan models
    'DEFAULT_FORMAT',
    'DEFAULT_QUALITY',
    'SUPPORTED_FORMATS',
    'ImageFormat',
    'LossType',
    'VariantSpec',
    'format_label',

    # Response models
    'OriginalImage',
    'VariantResult',
    'CompressionJobResult',
    'ErrorResponse'
]

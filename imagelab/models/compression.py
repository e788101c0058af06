"""
Data models for compression job responses.
"""
from typing import List, Optional

from pydantic import Field

from imagelab.models.base import BaseCompressionMetrics, BaseQualityMetrics, CamelModel
from imagelab.models.variants import LossType


class OriginalImage(BaseCompressionMetrics):
    """Descriptor of the lossless reference copy of the uploaded image"""
    width: int = Field(..., description="Width of the decoded image in pixels")
    height: int = Field(..., description="Height of the decoded image in pixels")
    format: Optional[str] = Field(None, description="Source format reported by the decoder")
    name: str = Field(..., description="Name the caller uploaded the image under")


class VariantResult(BaseCompressionMetrics, BaseQualityMetrics):
    """Outcome of encoding one variant of the uploaded image"""
    label: str = Field(..., description="Display label of the variant")
    format: str = Field(..., description="Encoded format")
    quality: int = Field(..., description="Normalized quality percent passed to the encoder")
    compression_ratio: float = Field(
        ..., description="Compression ratio (original_size / variant_size)"
    )
    space_savings_percent: float = Field(..., description="Percentage of space saved against the original")
    encode_time: float = Field(..., description="Time taken to encode the variant in seconds")
    loss_type: LossType = Field(..., description="lossy or lossless")


class CompressionJobResult(CamelModel):
    """Response model for POST /api/compress"""
    original: OriginalImage = Field(..., description="Reference copy of the uploaded image")
    variants: List[VariantResult] = Field(..., description="Variant results in plan order")


class ErrorResponse(CamelModel):
    """Body returned for failed requests"""
    error: str = Field(..., description="Human readable error message")

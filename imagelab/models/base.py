"""
Base models for the Image Compressor Lab API.
These models define common fields and wire conventions reused by
the request and response models.
"""
import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base class for models exchanged as camelCase JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseCompressionMetrics(CamelModel):
    """Base class for size and compression metrics of a stored image"""
    file_name: str = Field(..., description="Name of the stored file")
    url: str = Field(..., description="Public path the stored file is served from")
    size: int = Field(..., description="Size of the stored file in bytes")


class BaseQualityMetrics(CamelModel):
    """Base class for image quality metrics"""
    psnr: Optional[float] = Field(
        None,
        description="Peak Signal-to-Noise Ratio in dB against the original "
                    "(\"Infinity\" when identical, null when not comparable)"
    )
    ssim: Optional[float] = Field(
        None,
        description="Structural Similarity Index against the original (null when not computable)"
    )

    @field_serializer("psnr")
    def serialize_psnr(self, value: Optional[float]) -> Union[float, str, None]:
        # Strict JSON has no infinity literal
        if value is not None and math.isinf(value):
            return "Infinity"
        return value

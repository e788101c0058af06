"""
Models describing a variant plan.

A variant plan is the ordered list of encodings produced for one uploaded
image. Each entry is parsed permissively from caller configuration: missing
fields fall back to defaults instead of being rejected.
"""
import math
import logging
from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from imagelab.models.base import CamelModel

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "jpeg"
DEFAULT_QUALITY = 0.8


class ImageFormat(str, Enum):
    """Output formats the encoder can produce"""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    AVIF = "avif"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value


class LossType(str, Enum):
    """Whether an encoding discards information"""
    LOSSY = "lossy"
    LOSSLESS = "lossless"


SUPPORTED_FORMATS = frozenset(fmt.value for fmt in ImageFormat)


def format_label(fmt: str, quality: float) -> str:
    """Display label used when the caller does not supply one."""
    return f"{fmt.upper()} (quality={quality:g})"


class VariantSpec(CamelModel):
    """One requested encoding: format, quality, display label and loss type"""
    model_config = ConfigDict(frozen=True)

    format: str = Field(DEFAULT_FORMAT, description="Target format (jpeg, png, webp, avif)")
    quality: float = Field(
        DEFAULT_QUALITY,
        description="Quality as a 0-1 fraction or an already-percent 0-100 value"
    )
    label: Optional[str] = Field(None, description="Display label")
    loss_type: Optional[LossType] = Field(None, description="lossy or lossless")

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, value: Any) -> str:
        if value is None or value == "":
            return DEFAULT_FORMAT
        if isinstance(value, ImageFormat):
            return value.value
        return str(value).strip().lower()

    @field_validator("quality", mode="before")
    @classmethod
    def coerce_quality(cls, value: Any) -> float:
        if value is None or isinstance(value, bool):
            return DEFAULT_QUALITY
        try:
            quality = float(value)
        except (TypeError, ValueError):
            quality = None
        if quality is None or not math.isfinite(quality):
            logger.warning(f"Ignoring non-numeric quality {value!r}, using {DEFAULT_QUALITY}")
            return DEFAULT_QUALITY
        return quality

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("loss_type", mode="before")
    @classmethod
    def coerce_loss_type(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if isinstance(value, LossType):
            return value.value
        text = str(value).strip().lower()
        if text not in (LossType.LOSSY.value, LossType.LOSSLESS.value):
            logger.warning(f"Ignoring unknown lossType {value!r}, inferring from format")
            return None
        return text

    @model_validator(mode="after")
    def fill_defaults(self) -> "VariantSpec":
        # Frozen model: defaults derived from other fields are set directly
        if self.label is None:
            object.__setattr__(self, "label", format_label(self.format, self.quality))
        if self.loss_type is None:
            from imagelab.core.quality import classify_loss_type
            object.__setattr__(self, "loss_type", classify_loss_type(self.format))
        return self

    @property
    def is_supported(self) -> bool:
        return self.format in SUPPORTED_FORMATS

    @property
    def image_format(self) -> ImageFormat:
        return ImageFormat(self.format)

"""
Quality normalization and loss-type inference for variant specs.
"""
import math
from typing import Union

from imagelab.models.variants import LossType


def normalize_quality(quality: Union[int, float]) -> int:
    """
    Convert a caller quality value to an integer percent.

    Values up to and including 1 are read as a 0-1 fraction, anything larger
    as an already-percent value, so a quality of 1 means 100%. The result is
    rounded half up and is not clamped to 0-100.

    Args:
        quality: Fraction (0-1) or percent (0-100)

    Returns:
        Quality percent
    """
    if quality <= 1:
        return _round_half_up(quality * 100)
    return _round_half_up(quality)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_loss_type(fmt: str) -> LossType:
    """Infer whether a format is lossy or lossless. Only PNG is lossless."""
    if str(fmt).strip().lower() == "png":
        return LossType.LOSSLESS
    return LossType.LOSSY

"""Tests for quality normalization and loss-type inference."""
import pytest

from imagelab.core.quality import classify_loss_type, normalize_quality
from imagelab.models.variants import LossType


@pytest.mark.parametrize("quality, expected", [
    (0.8, 80),
    (1, 100),
    (1.0, 100),
    (50, 50),
    (0.205, 21),
    (0, 0),
    (0.2, 20),
    (75.4, 75),
])
def test_normalize_quality(quality, expected):
    assert normalize_quality(quality) == expected


def test_normalize_rounds_half_up():
    """Halves round toward positive infinity, not to even."""
    assert normalize_quality(0.125) == 13
    assert normalize_quality(2.5) == 3
    assert normalize_quality(100.5) == 101


def test_normalize_does_not_clamp():
    """Out-of-range values pass through rounded."""
    assert normalize_quality(150) == 150
    assert normalize_quality(-0.5) == -50


def test_png_is_lossless():
    assert classify_loss_type("png") is LossType.LOSSLESS
    assert classify_loss_type("PNG") is LossType.LOSSLESS


@pytest.mark.parametrize("fmt", ["jpeg", "webp", "avif", "totallyUnknown", ""])
def test_other_formats_are_lossy(fmt):
    assert classify_loss_type(fmt) is LossType.LOSSY

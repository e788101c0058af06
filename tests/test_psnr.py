"""Tests for PSNR over raw RGBA buffers."""
import math

import pytest

from imagelab.core.psnr import compute_mse, compute_psnr


def test_identical_buffers_are_infinite():
    buffer = bytes([12, 34, 56, 255] * 16)
    assert compute_psnr(buffer, buffer) == float('inf')


def test_alpha_is_ignored():
    """Buffers equal on RGB but different in alpha are identical."""
    buffer_a = bytes([10, 20, 30, 255, 40, 50, 60, 0])
    buffer_b = bytes([10, 20, 30, 0, 40, 50, 60, 128])
    assert compute_psnr(buffer_a, buffer_b) == float('inf')


def test_length_mismatch_is_not_comparable():
    assert compute_psnr(bytes(8), bytes(4)) is None
    assert compute_mse(bytes(8), bytes(12)) is None


def test_single_pixel_psnr():
    """MSE = 100 / 3, PSNR = 10 * log10(65025 / MSE)."""
    psnr = compute_psnr(bytes([0, 0, 0, 255]), bytes([10, 0, 0, 255]))
    assert compute_mse(bytes([0, 0, 0, 255]), bytes([10, 0, 0, 255])) == pytest.approx(100 / 3)
    assert psnr == pytest.approx(10 * math.log10(65025 / (100 / 3)))
    assert psnr == pytest.approx(32.902, abs=1e-3)


def test_psnr_is_symmetric():
    buffer_a = bytes([0, 100, 200, 255, 5, 5, 5, 255])
    buffer_b = bytes([3, 90, 210, 255, 0, 9, 5, 255])
    assert compute_psnr(buffer_a, buffer_b) == compute_psnr(buffer_b, buffer_a)


def test_maximum_error():
    """Black against white gives 0 dB."""
    black = bytes([0, 0, 0, 255] * 4)
    white = bytes([255, 255, 255, 255] * 4)
    assert compute_psnr(black, white) == pytest.approx(0.0)


def test_empty_buffers_are_not_comparable():
    assert compute_psnr(b"", b"") is None


def test_accepts_bytearray():
    assert compute_psnr(bytearray([1, 2, 3, 4]), bytearray([1, 2, 3, 4])) == float('inf')

"""
Peak Signal-to-Noise Ratio over raw RGBA pixel buffers.

Buffers hold interleaved 8-bit RGBA samples, four bytes per pixel. Only the
colour channels contribute to the error; alpha is ignored.
"""
import math
import logging
from typing import Optional, Union

import numpy as np

# Set up logging
logger = logging.getLogger(__name__)

MAX_INTENSITY = 255
CHANNELS = 4
COLOR_CHANNELS = 3

Buffer = Union[bytes, bytearray, memoryview]


def compute_mse(buffer_a: Buffer, buffer_b: Buffer) -> Optional[float]:
    """
    Mean squared error over the R, G and B channels of two RGBA buffers.

    Returns:
        MSE, or None if the buffers differ in length or hold no whole pixel
    """
    if len(buffer_a) != len(buffer_b):
        return None

    pixel_count = len(buffer_a) // CHANNELS
    if pixel_count == 0:
        return None

    usable = pixel_count * CHANNELS
    pixels_a = np.frombuffer(buffer_a, dtype=np.uint8, count=usable).reshape(pixel_count, CHANNELS)
    pixels_b = np.frombuffer(buffer_b, dtype=np.uint8, count=usable).reshape(pixel_count, CHANNELS)

    diff = pixels_a[:, :COLOR_CHANNELS].astype(np.int64) - pixels_b[:, :COLOR_CHANNELS].astype(np.int64)
    squared_error = int(np.sum(diff * diff))

    return squared_error / (pixel_count * COLOR_CHANNELS)


def compute_psnr(buffer_a: Buffer, buffer_b: Buffer) -> Optional[float]:
    """
    Calculate PSNR in decibels between two raw RGBA buffers.

    Args:
        buffer_a: Reference buffer
        buffer_b: Buffer to score against the reference

    Returns:
        PSNR in dB, float('inf') when the colour channels are identical,
        or None when the buffers cannot be compared
    """
    mse = compute_mse(buffer_a, buffer_b)
    if mse is None:
        logger.debug(f"Buffers not comparable: {len(buffer_a)} vs {len(buffer_b)} bytes")
        return None

    if mse == 0:
        return float('inf')

    return 10 * math.log10((MAX_INTENSITY ** 2) / mse)

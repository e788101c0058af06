"""
Utilities for measuring compression performance and image quality.
"""
import time
import logging
import numpy as np
import psutil
from typing import Dict, Optional
from skimage.metrics import structural_similarity

# Set up logging
logger = logging.getLogger(__name__)

# Default SSIM window is 7x7; smaller images have no valid window
SSIM_MIN_SIDE = 7


def get_cpu_mem() -> Dict[str, float]:
    """
    Get current CPU and memory usage.

    Returns:
        Dictionary with CPU and memory usage percentages
    """
    return {
        "cpu_usage": psutil.cpu_percent(interval=None),
        "memory_usage": psutil.virtual_memory().percent
    }


def calculate_ssim(original, candidate) -> Optional[float]:
    """
    Calculate SSIM over the RGB channels of two raw RGBA images.

    Args:
        original: Reference RawImage (RGBA)
        candidate: RawImage to score against the reference

    Returns:
        SSIM rounded to 4 decimal places, or None if the images differ in
        size or are too small for the SSIM window
    """
    if (original.width, original.height) != (candidate.width, candidate.height):
        logger.info(
            f"Image shapes don't match: original {original.width}x{original.height} "
            f"vs candidate {candidate.width}x{candidate.height}"
        )
        return None

    if min(original.width, original.height) < SSIM_MIN_SIDE:
        return None

    shape = (original.height, original.width, original.channels)
    original_rgb = np.frombuffer(original.data, dtype=np.uint8).reshape(shape)[:, :, :3]
    candidate_rgb = np.frombuffer(candidate.data, dtype=np.uint8).reshape(shape)[:, :, :3]

    try:
        ssim = structural_similarity(original_rgb, candidate_rgb, data_range=255, channel_axis=2)
    except ValueError as e:
        logger.warning(f"Error calculating SSIM: {e}")
        return None

    return round(float(ssim), 4)


def measure_compression_performance(
    original_size: int,
    compressed_size: int
) -> Dict[str, float]:
    """
    Calculate compression performance metrics.

    Args:
        original_size: Size of the original file in bytes
        compressed_size: Size of the compressed file in bytes

    Returns:
        Dictionary with compression ratio and space savings percentage
    """
    compression_ratio = original_size / compressed_size
    space_savings = (1 - (compressed_size / original_size)) * 100 if original_size > 0 else 0

    return {
        "compression_ratio": compression_ratio,
        "space_savings_percent": round(space_savings, 2)
    }


class PerformanceTimer:
    """
    Context manager for measuring execution time.

    Example:
        with PerformanceTimer() as timer:
            # Code to measure
        execution_time = timer.execution_time
    """

    def __init__(self):
        self.start_time = None
        self.execution_time = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.execution_time = time.perf_counter() - self.start_time
        return False  # Don't suppress exceptions

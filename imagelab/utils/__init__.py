"""
Utility functions for the Image Compressor Lab application.
"""
from imagelab.utils.metrics import (
    get_cpu_mem,
    calculate_ssim,
    measure_compression_performance,
    PerformanceTimer
)

from imagelab.utils.file_handling import (
    PUBLIC_PREFIX,
    UploadStorage,
    make_base_name,
    original_file_name,
    variant_file_name
)

__all__ = [
    # Metrics utilities
    'get_cpu_mem',
    'calculate_ssim',
    'measure_compression_performance',
    'PerformanceTimer',

    # File handling utilities
    'PUBLIC_PREFIX',
    'UploadStorage',
    'make_base_name',
    'original_file_name',
    'variant_file_name'
]

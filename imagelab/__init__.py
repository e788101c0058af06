"""
Image Compressor Lab application.

This package implements a FastAPI backend that re-encodes an uploaded image
into several variants and scores each one against the original:
- JPEG, WebP and AVIF at configurable quality levels
- Lossless PNG

Features include:
- Configurable variant plans with a built-in default
- Quality metrics (PSNR, SSIM)
- Size and compression ratio per variant
- Static serving of the persisted originals and variants
"""
__version__ = "1.0.0"

__all__ = ['__version__']

"""
Utilities for persisting uploaded originals and encoded variants.

Layout under the upload root:
- original/   lossless PNG reference copies
- compressed/ encoded variants
Both are served under the public /uploads prefix.
"""
import os
import time
import random
import logging
from typing import Optional

from imagelab.models.variants import ImageFormat

# Set up logging
logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
ORIGINAL_SUBDIR = "original"
COMPRESSED_SUBDIR = "compressed"


def make_base_name(timestamp_ms: Optional[int] = None) -> str:
    """
    Generate a unique file name stem from a millisecond timestamp
    and a random suffix.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}-{random.randint(0, 10 ** 9)}"


def original_file_name(base_name: str) -> str:
    return f"{base_name}-original.png"


def variant_file_name(base_name: str, fmt: ImageFormat, quality_percent: int) -> str:
    return f"{base_name}-{fmt.value}-{quality_percent}.{fmt.extension}"


class UploadStorage:
    """
    Directory tree holding persisted originals and variants.

    Args:
        upload_root: Base directory for persisted images
        public_prefix: URL prefix the upload root is served under
    """

    def __init__(self, upload_root: str, public_prefix: str = PUBLIC_PREFIX):
        self.upload_root = os.path.abspath(upload_root)
        self.public_prefix = public_prefix.rstrip("/")
        self.original_dir = os.path.join(self.upload_root, ORIGINAL_SUBDIR)
        self.compressed_dir = os.path.join(self.upload_root, COMPRESSED_SUBDIR)

    def ensure_directories(self) -> None:
        for directory in (self.upload_root, self.original_dir, self.compressed_dir):
            os.makedirs(directory, exist_ok=True)

    def original_path(self, file_name: str) -> str:
        return os.path.join(self.original_dir, file_name)

    def compressed_path(self, file_name: str) -> str:
        return os.path.join(self.compressed_dir, file_name)

    def original_url(self, file_name: str) -> str:
        return f"{self.public_prefix}/{ORIGINAL_SUBDIR}/{file_name}"

    def compressed_url(self, file_name: str) -> str:
        return f"{self.public_prefix}/{COMPRESSED_SUBDIR}/{file_name}"

    def write_original(self, file_name: str, data: bytes) -> int:
        """Write a reference copy and return its size on disk."""
        return self._write(self.original_path(file_name), data)

    def write_variant(self, file_name: str, data: bytes) -> int:
        """Write an encoded variant and return its size on disk."""
        return self._write(self.compressed_path(file_name), data)

    def _write(self, path: str, data: bytes) -> int:
        with open(path, "wb") as f:
            f.write(data)
        size = os.path.getsize(path)
        logger.debug(f"Wrote {size} bytes to {path}")
        return size

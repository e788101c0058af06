"""Tests for upload storage naming and layout."""
import os

from imagelab.models.variants import ImageFormat
from imagelab.utils.file_handling import (
    UploadStorage,
    make_base_name,
    original_file_name,
    variant_file_name,
)


def test_base_name_format():
    timestamp, suffix = make_base_name(1700000000000).split("-")
    assert timestamp == "1700000000000"
    assert 0 <= int(suffix) <= 10 ** 9


def test_file_names():
    assert original_file_name("1-2") == "1-2-original.png"
    assert variant_file_name("1-2", ImageFormat.JPEG, 80) == "1-2-jpeg-80.jpg"
    assert variant_file_name("1-2", ImageFormat.AVIF, 50) == "1-2-avif-50.avif"


def test_storage_writes_and_urls(tmp_path):
    storage = UploadStorage(str(tmp_path / "uploads"))
    storage.ensure_directories()

    size = storage.write_variant("a.webp", b"12345")
    assert size == 5
    assert os.path.isfile(os.path.join(storage.compressed_dir, "a.webp"))
    assert storage.compressed_url("a.webp") == "/uploads/compressed/a.webp"
    assert storage.original_url("b.png") == "/uploads/original/b.png"


def test_compression_performance_keys():
    from imagelab.utils.metrics import measure_compression_performance

    performance = measure_compression_performance(1000, 250)
    assert performance == {"compression_ratio": 4.0, "space_savings_percent": 75.0}

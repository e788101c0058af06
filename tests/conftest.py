"""Shared fixtures for the Image Compressor Lab tests."""
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from imagelab.api import create_app
from imagelab.config import Settings
from imagelab.utils.file_handling import UploadStorage


def make_image_bytes(size=(2, 2), color=(200, 30, 60), mode="RGB", fmt="PNG"):
    """Encode a solid-colour image."""
    image = Image.new(mode, size, color)
    output = BytesIO()
    image.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def solid_png():
    return make_image_bytes()


@pytest.fixture
def storage(tmp_path):
    upload_storage = UploadStorage(str(tmp_path / "uploads"))
    upload_storage.ensure_directories()
    return upload_storage


@pytest.fixture
def settings(tmp_path):
    return Settings(upload_root=str(tmp_path / "uploads"), max_workers=2)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client

"""
Liveness and health check endpoints.
"""
import os
import time
import shutil
import platform
import logging

import psutil
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from imagelab import __version__
from imagelab.core.codec import codec_status
from imagelab.utils.metrics import get_cpu_mem

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

PING_MESSAGE = "Image Compressor Lab backend is running"


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    """Plain-text liveness check."""
    return PING_MESSAGE


@router.get("/health")
async def health_check():
    """Check if the API is running."""
    return {"status": "healthy", "version": __version__}


@router.get("/health/detailed")
async def detailed_health_check(request: Request):
    """
    Provides detailed health information including system metrics,
    available encoders and upload directory status.
    """
    # System info
    system_info = {
        **get_cpu_mem(),
        "disk_usage": psutil.disk_usage('/').percent,
        "python_version": platform.python_version(),
        "platform": platform.platform()
    }

    # Check upload directories
    storage = request.app.state.storage
    upload_status = {}
    for key, directory in (("original", storage.original_dir), ("compressed", storage.compressed_dir)):
        status = {"exists": os.path.isdir(directory)}
        if status["exists"]:
            status["writable"] = os.access(directory, os.W_OK)
        upload_status[key] = status

    try:
        upload_status["free_space_mb"] = shutil.disk_usage(storage.upload_root).free / (1024 * 1024)
    except OSError as e:
        logger.warning(f"Could not read free space for {storage.upload_root}: {e}")
        upload_status["space_error"] = str(e)

    return {
        "status": "healthy",
        "version": __version__,
        "system": system_info,
        "encoders": codec_status(),
        "upload_directory": upload_status,
        "timestamp": time.time()
    }

"""
API module for the Image Compressor Lab backend.
"""
import os
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from imagelab import __version__
from imagelab.config import Settings
from imagelab.api.compress import router as compress_router
from imagelab.api.health import router as health_router
from imagelab.core.errors import ImageLabError, MissingImageError
from imagelab.utils.file_handling import PUBLIC_PREFIX, UploadStorage

# Set up logging
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Startup settings (defaults are used when omitted)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = Settings()

    storage = UploadStorage(settings.upload_root, PUBLIC_PREFIX)
    storage.ensure_directories()

    app = FastAPI(
        title="Image Compressor Lab API",
        description="""
        API for comparing image encodings:
        - JPEG, WebP and AVIF at configurable quality levels
        - Lossless PNG

        Reports size, compression ratio, PSNR and SSIM for every variant.
        """,
        version=__version__
    )
    app.state.settings = settings
    app.state.storage = storage

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(compress_router, prefix="/api")
    app.include_router(health_router)

    # Global exception handlers
    @app.exception_handler(ImageLabError)
    async def image_lab_exception_handler(request: Request, exc: ImageLabError):
        """Convert core errors that escaped a route into a structured response."""
        logger.error(f"Request failed: {str(exc)}", exc_info=exc.status_code >= 500)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed form fields as client errors in the API error shape."""
        logger.warning(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
        fields = {str(error["loc"][-1]) for error in exc.errors() if error.get("loc")}
        message = MissingImageError.public_message if "image" in fields else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unexpected errors."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # Persisted originals and variants
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=storage.upload_root), name="uploads")

    # Front-end, if one is deployed next to the backend
    if settings.public_dir and os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
        logger.info(f"Serving front-end from {settings.public_dir}")

    logger.info(f"Upload directory: {storage.upload_root}")
    return app


__all__ = ['create_app']

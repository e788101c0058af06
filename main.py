"""
Image Compressor Lab API Entry Point

This file serves as the main entry point for the application,
building the FastAPI application from environment settings.

Run with uvicorn:
    uvicorn main:app --reload
"""
import logging
import sys

from imagelab.config import Settings

settings = Settings.from_env()

# Configure logging based on environment variables
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Configure root logger
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format=LOG_FORMAT,
    stream=sys.stdout
)

# Set up logger
logger = logging.getLogger(__name__)

# Check that required dependencies are installed
try:
    import PIL
    import numpy
    import skimage
    import psutil
    logger.info("All required dependencies are available")
except ImportError as e:
    logger.critical(f"Missing required dependency: {str(e)}")
    logger.critical("Please install all dependencies: pip install -e .")
    sys.exit(1)

# Check which encoders this Pillow build provides
from imagelab.core.codec import codec_status

missing_encoders = [fmt for fmt, available in codec_status().items() if not available]
if missing_encoders:
    logger.warning(f"Pillow has no encoder for: {', '.join(missing_encoders)}. Those variants will fail.")
else:
    logger.info("Pillow encoders for jpeg, png, webp and avif are available")

from imagelab.api import create_app

app = create_app(settings)

# Entry point for running with uvicorn
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Image Compressor Lab API on port {settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port
    )

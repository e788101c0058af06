"""
Startup configuration for the Image Compressor Lab backend.
"""
import os
import logging
from typing import Optional

from pydantic import BaseModel, Field

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_ROOT = os.path.join(os.getcwd(), "uploads")
DEFAULT_PORT = 3000
DEFAULT_MAX_WORKERS = 4


class Settings(BaseModel):
    """Options recognised at startup"""
    upload_root: str = Field(DEFAULT_UPLOAD_ROOT, description="Base directory for persisted images")
    host: str = Field("0.0.0.0", description="Interface to listen on")
    port: int = Field(DEFAULT_PORT, ge=1, le=65535, description="Listen port")
    max_workers: int = Field(
        DEFAULT_MAX_WORKERS, ge=1,
        description="Maximum number of variants encoded concurrently per request"
    )
    public_dir: Optional[str] = Field(None, description="Optional front-end directory served at /")
    log_level: str = Field("INFO", description="Root logging level")

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Unset variables keep their defaults.
        """
        values = {}
        env_map = {
            "upload_root": "IMAGELAB_UPLOAD_ROOT",
            "host": "HOST",
            "port": "PORT",
            "max_workers": "IMAGELAB_MAX_WORKERS",
            "public_dir": "IMAGELAB_PUBLIC_DIR",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in env_map.items():
            value = os.environ.get(env_name)
            if value:
                values[field_name] = value

        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()

        settings = cls(**values)
        logger.debug(f"Loaded settings: {settings}")
        return settings

"""
Image compression endpoint.
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from imagelab.core.errors import ImageLabError, MissingImageError
from imagelab.core.orchestrator import compress_image_variants
from imagelab.core.plan import parse_variant_config
from imagelab.models.compression import CompressionJobResult, ErrorResponse

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["Compression"])


@router.post(
    "/compress",
    response_model=CompressionJobResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def compress_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    config: Optional[str] = Form(None)
):
    """
    Re-encode an uploaded image into several variants and score each one.

    - **image**: The image file to compress (any format Pillow can read)
    - **config**: Optional JSON array of variants, e.g.
      `[{"format": "webp", "quality": 0.6, "label": "WebP 60"}]`.
      Missing or malformed config uses the default plan.

    Returns:
        The stored original and the variant results in plan order
    """
    content = await image.read() if image is not None else b""
    if not content:
        error = MissingImageError()
        return JSONResponse(status_code=error.status_code, content={"error": error.public_message})

    settings = request.app.state.settings
    storage = request.app.state.storage

    try:
        result = await compress_image_variants(
            content,
            storage,
            config=parse_variant_config(config),
            original_name=image.filename,
            max_workers=settings.max_workers
        )
    except ImageLabError as e:
        logger.error(f"Compression failed for {image.filename}: {str(e)}", exc_info=True)
        return JSONResponse(status_code=e.status_code, content={"error": e.public_message})

    logger.info(f"Compressed {image.filename} into {len(result.variants)} variants")
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))

"""
Image decoding and encoding backed by Pillow.

Provides the two operations the compression core needs from an image codec:
decoding bytes into metadata plus a raw RGBA buffer, and encoding an image in
a target format at a given quality percent.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError, features

from imagelab.core.errors import ImageProcessingError
from imagelab.models.variants import ImageFormat

# Set up logging
logger = logging.getLogger(__name__)

PIL_FORMAT_NAMES = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
    ImageFormat.WEBP: "WEBP",
    ImageFormat.AVIF: "AVIF",
}

# Pillow feature names used to report which encoders are available
PIL_FEATURES = {
    ImageFormat.JPEG: "jpg",
    ImageFormat.PNG: "zlib",
    ImageFormat.WEBP: "webp",
    ImageFormat.AVIF: "avif",
}


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    format: Optional[str]
    channels: int


@dataclass(frozen=True)
class RawImage:
    """Interleaved 8-bit RGBA samples, row-major"""
    data: bytes
    width: int
    height: int

    @property
    def channels(self) -> int:
        return 4


@dataclass(frozen=True)
class DecodedImage:
    """Decoded source image. Never mutated; conversions return new images."""
    image: Image.Image
    metadata: ImageMetadata

    def to_raw_rgba(self) -> RawImage:
        return to_raw_rgba(self.image)


def open_image(data: bytes) -> Image.Image:
    """
    Open and fully load an image from bytes.

    Raises:
        ImageProcessingError: If the bytes cannot be decoded
    """
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageProcessingError(f"Failed to decode image: {e}") from e
    return image


def read_metadata(image: Image.Image) -> ImageMetadata:
    return ImageMetadata(
        width=image.width,
        height=image.height,
        format=image.format.lower() if image.format else None,
        channels=len(image.getbands()),
    )


def decode_image(data: bytes) -> DecodedImage:
    """Decode bytes into an image handle with its metadata."""
    image = open_image(data)
    return DecodedImage(image=image, metadata=read_metadata(image))


def to_raw_rgba(image: Image.Image) -> RawImage:
    """
    Materialize a raw RGBA buffer, synthesizing an opaque alpha channel
    when the source has none.
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return RawImage(data=rgba.tobytes(), width=rgba.width, height=rgba.height)


def decode_raw_rgba(data: bytes) -> RawImage:
    """Decode encoded bytes straight to a raw RGBA buffer."""
    return to_raw_rgba(open_image(data))


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )


def _prepare_for_format(image: Image.Image, fmt: ImageFormat) -> Image.Image:
    if fmt is ImageFormat.JPEG:
        # JPEG does not support transparency
        if image.mode not in ("RGB", "L"):
            return image.convert("RGB")
        return image

    if fmt is ImageFormat.PNG:
        if image.mode in ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"):
            return image
        return image.convert("RGBA" if _has_alpha(image) else "RGB")

    # WebP and AVIF
    if image.mode in ("RGB", "RGBA"):
        return image
    return image.convert("RGBA" if _has_alpha(image) else "RGB")


def encode_image(image: Image.Image, fmt: ImageFormat, quality: Optional[int] = None) -> bytes:
    """
    Encode an image in the given format.

    Args:
        image: Source image
        fmt: Target format
        quality: Quality percent for lossy formats, ignored for PNG

    Returns:
        Encoded bytes

    Raises:
        ImageProcessingError: If the encoder fails
    """
    prepared = _prepare_for_format(image, fmt)
    options = {}
    if fmt is not ImageFormat.PNG and quality is not None:
        options["quality"] = quality

    output = BytesIO()
    try:
        prepared.save(output, format=PIL_FORMAT_NAMES[fmt], **options)
    except (OSError, ValueError, KeyError) as e:
        raise ImageProcessingError(f"Failed to encode {fmt.value}: {e}") from e

    return output.getvalue()


def codec_status() -> Dict[str, bool]:
    """Report which output formats this Pillow build can encode."""
    status = {}
    for fmt, feature in PIL_FEATURES.items():
        try:
            status[fmt.value] = bool(features.check(feature))
        except ValueError:
            status[fmt.value] = False
    return status

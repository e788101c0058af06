"""
Exceptions raised by the compression core.
"""


class ImageLabError(Exception):
    """Base class for errors reported back to API callers"""
    status_code = 500
    public_message = "Internal server error"


class MissingImageError(ImageLabError):
    """No image payload was supplied with the request"""
    status_code = 400
    public_message = "No image file was sent (field name: image)"


class ImageProcessingError(ImageLabError):
    """Decoding, encoding or persisting an image failed"""
    status_code = 500
    public_message = "Internal server error"

import base64
import binascii
import io
import logging
import re

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r'^data:(?P<mime>image/[\w.+-]+)?(?:;[\w=-]+)*;base64,(?P<data>.*)$', re.DOTALL)


class ImageDecodeError(ValueError):
    """Raised when image bytes cannot be decoded into a bitmap."""


class ReportImage:
    """
    Opaque handle on an encoded image (PNG/JPEG bytes).

    Decoding is lazy and cached: the first access to `size` identifies the
    image with Pillow. Orientation is derived by the layout engine from the
    intrinsic size and never stored.
    """

    def __init__(self, data: bytes, name: str = "image"):
        self.data = data
        self.name = name
        self._size = None
        self._error = None

    def __repr__(self):
        return f"<ReportImage {self.name} {len(self.data or b'')} bytes>"

    @classmethod
    def from_data_url(cls, url: str, name: str = "image") -> "ReportImage":
        """
        Build from a `data:image/...;base64,` URL.

        Raises:
            ImageDecodeError: If the URL is not a base64 image data URL.
        """
        match = _DATA_URL.match((url or "").strip())
        if not match:
            raise ImageDecodeError(f"{name}: not a base64 image data URL")
        try:
            data = base64.b64decode(match.group('data'), validate=False)
        except (binascii.Error, ValueError) as e:
            raise ImageDecodeError(f"{name}: invalid base64 payload ({e})")
        return cls(data, name=name)

    def _decode(self):
        if self._size is not None or self._error is not None:
            return
        try:
            with Image.open(io.BytesIO(self.data)) as img:
                img.load()
                self._size = img.size
        except (UnidentifiedImageError, OSError, ValueError, TypeError) as e:
            self._error = f"{self.name}: cannot decode image ({e})"

    @property
    def size(self):
        """(intrinsic_width, intrinsic_height) in pixels."""
        self._decode()
        if self._error:
            raise ImageDecodeError(self._error)
        return self._size

    def reader(self) -> ImageReader:
        """reportlab ImageReader over the raw bytes."""
        self.size  # raise early on undecodable data
        return ImageReader(io.BytesIO(self.data))


def image_size(image):
    """
    Intrinsic (width, height) of an image, or None if it cannot be decoded.

    Logs the failure; callers skip drawing the asset.
    """
    if image is None:
        return None
    try:
        return image.size
    except ImageDecodeError as e:
        logger.warning(f"[Images] Skipping undecodable image: {e}")
        return None

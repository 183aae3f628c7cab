"""
Image source backed by an image file, raw bytes, or a data URL.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from leaflens.core.image_buffer import ImageBuffer
from leaflens.sources.base_source import FILE_ACCESS_MESSAGE, CaptureError, ImageSource


logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:"


def _decode_data_url(data_url: str) -> bytes:
    """Extract the payload of a base64 ``data:image/...;base64,`` URL."""
    header, separator, payload = data_url.partition(",")
    if not separator or ";base64" not in header:
        raise CaptureError(
            f"Unsupported data URL header {header[:40]!r}; only base64 payloads are accepted.",
            user_message=FILE_ACCESS_MESSAGE,
        )
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as decode_error:
        raise CaptureError(
            f"Data URL payload is not valid base64: {decode_error}",
            user_message=FILE_ACCESS_MESSAGE,
        ) from decode_error


class FileImageSource(ImageSource):
    """
    Decode an uploaded photo with Pillow.

    Accepts a filesystem path, the raw encoded bytes of an image file, or
    a base64 data URL as produced by browser file readers.

    Example
    -------
    >>> source = FileImageSource("photos/monstera.jpg")
    >>> buffer = source.acquire()
    """

    def __init__(self, origin: str | Path | bytes) -> None:
        self._encoded_bytes: bytes | None = None
        self._data_url: str | None = None
        self._path: Path | None = None
        if isinstance(origin, (bytes, bytearray)):
            self._encoded_bytes = bytes(origin)
        elif isinstance(origin, str) and origin.startswith(DATA_URL_PREFIX):
            self._data_url = origin
        else:
            self._path = Path(origin)

    @property
    def source_name(self) -> str:
        return "file"

    @property
    def path(self) -> Path | None:
        return self._path

    def acquire(self) -> ImageBuffer:
        if self._path is not None and not self._path.is_file():
            raise CaptureError(
                f"Image file not found: {self._path}",
                user_message=FILE_ACCESS_MESSAGE,
            )

        if self._data_url is not None and self._encoded_bytes is None:
            self._encoded_bytes = _decode_data_url(self._data_url)

        try:
            if self._path is not None:
                with Image.open(self._path) as opened_image:
                    rgba_image = opened_image.convert("RGBA")
            else:
                with Image.open(io.BytesIO(self._encoded_bytes)) as opened_image:
                    rgba_image = opened_image.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as decode_error:
            raise CaptureError(
                f"Could not decode image from {self._describe_origin()}: {decode_error}",
                user_message=FILE_ACCESS_MESSAGE,
            ) from decode_error

        logger.debug(
            "Decoded %dx%d image from %s", rgba_image.width, rgba_image.height, self._describe_origin()
        )
        return ImageBuffer.from_pil(rgba_image)

    def _describe_origin(self) -> str:
        if self._path is not None:
            return str(self._path)
        if self._data_url is not None and self._encoded_bytes is None:
            return f"{len(self._data_url)}-character data URL"
        return f"{len(self._encoded_bytes or b'')} in-memory bytes"

    def __repr__(self) -> str:
        return f"<FileImageSource origin={self._describe_origin()!r}>"

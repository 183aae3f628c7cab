"""
Immutable container for decoded RGBA pixel data.

This module defines the input structure that flows through LeafLens.
Every source produces an ImageBuffer, and the analyzer and renderers
consume it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from leaflens.utils.type_guards import is_array_like_image, is_pil_image


BYTES_PER_PIXEL = 4


class ImageBufferValidationError(ValueError):
    """
    Raised when ImageBuffer receives invalid or inconsistent data.

    A dedicated subclass lets callers catch malformed images without
    swallowing unrelated ValueErrors from numpy or Pillow.
    """
    pass


def _validate_dimension(value: Any, name: str) -> None:
    # bool is an int subclass; a True width is always a caller bug
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ImageBufferValidationError(
            f"{name} must be an integer, got {type(value).__name__}."
        )
    if value <= 0:
        raise ImageBufferValidationError(
            f"{name} must be positive, got {value}. "
            "An empty image usually means the decoder or camera returned nothing."
        )


@dataclass(frozen=True, slots=True)
class ImageBuffer:
    """
    Decoded image as a flat RGBA byte sequence.

    Pixels are stored row-major as R, G, B, A repeating, exactly
    ``width * height * 4`` bytes long. The buffer is frozen: sources hand
    it over and nobody mutates it afterwards.

    Example
    -------
    >>> buffer = ImageBuffer(width=2, height=1, pixels=bytes([0, 200, 0, 255] * 2))
    >>> buffer.total_pixels
    2
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        _validate_dimension(self.width, "width")
        _validate_dimension(self.height, "height")

        if isinstance(self.pixels, (bytearray, memoryview)):
            # Freeze mutable byte containers so the buffer really is immutable
            object.__setattr__(self, "pixels", bytes(self.pixels))

        if not isinstance(self.pixels, bytes):
            raise ImageBufferValidationError(
                f"pixels must be bytes, got {type(self.pixels).__name__}. "
                "Use ImageBuffer.from_array() for numpy input."
            )

        expected_length = self.width * self.height * BYTES_PER_PIXEL
        if len(self.pixels) != expected_length:
            raise ImageBufferValidationError(
                f"pixels has {len(self.pixels)} bytes but a {self.width}x{self.height} "
                f"RGBA image needs {expected_length}. "
                "Check that the data is RGBA and not RGB or BGR."
            )

    @property
    def byte_length(self) -> int:
        return len(self.pixels)

    @property
    def total_pixels(self) -> int:
        """Number of RGBA pixels in the buffer."""
        return self.byte_length // BYTES_PER_PIXEL

    @property
    def dimensions(self) -> tuple[int, int]:
        """Returns (height, width), numpy order."""
        return self.height, self.width

    def as_array(self) -> np.ndarray:
        """
        Return a read-only (H, W, 4) uint8 view over the pixel bytes.

        No copy is made; numpy marks views over ``bytes`` as non-writeable.
        """
        flat = np.frombuffer(self.pixels, dtype=np.uint8)
        return flat.reshape(self.height, self.width, BYTES_PER_PIXEL)

    @classmethod
    def from_array(cls, image_array: np.ndarray) -> ImageBuffer:
        """
        Build a buffer from an (H, W, 4), (H, W, 3) or (H, W) uint8 array.

        RGB input gets an opaque alpha channel; grayscale input is
        replicated across R, G and B.
        """
        if not isinstance(image_array, np.ndarray):
            raise ImageBufferValidationError(
                f"image_array must be a numpy ndarray, got {type(image_array).__name__}. "
                "If you're passing a PIL Image, use ImageBuffer.from_pil()."
            )

        if image_array.size == 0:
            raise ImageBufferValidationError(
                f"image_array is empty (shape={image_array.shape})."
            )

        if image_array.dtype != np.uint8:
            raise ImageBufferValidationError(
                f"image_array must be uint8, got {image_array.dtype}. "
                "Scale float images to [0, 255] and cast before analysis."
            )

        if image_array.ndim == 2:
            image_array = np.stack([image_array] * 3, axis=-1)

        if image_array.ndim != 3 or image_array.shape[2] not in (3, 4):
            raise ImageBufferValidationError(
                f"image_array must have shape (H, W), (H, W, 3) or (H, W, 4), "
                f"got {image_array.shape}."
            )

        height, width, channels = image_array.shape
        if channels == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            image_array = np.concatenate([image_array, alpha], axis=-1)

        return cls(
            width=int(width),
            height=int(height),
            pixels=np.ascontiguousarray(image_array).tobytes(),
        )

    @classmethod
    def from_pil(cls, pil_image: Any) -> ImageBuffer:
        """Build a buffer from any Pillow image, converting it to RGBA."""
        if not is_pil_image(pil_image):
            raise ImageBufferValidationError(
                f"Expected a PIL Image, got {type(pil_image).__name__}."
            )
        rgba_image = pil_image if pil_image.mode == "RGBA" else pil_image.convert("RGBA")
        width, height = rgba_image.size
        return cls(width=width, height=height, pixels=rgba_image.tobytes())


def coerce_image_buffer(candidate: Any) -> ImageBuffer:
    """
    Turn any supported image container into an ImageBuffer.

    Accepts an ImageBuffer (returned unchanged), a numpy array, or a
    Pillow image.
    """
    if isinstance(candidate, ImageBuffer):
        return candidate

    if is_pil_image(candidate):
        return ImageBuffer.from_pil(candidate)

    if is_array_like_image(candidate):
        return ImageBuffer.from_array(np.asarray(candidate))

    raise ImageBufferValidationError(
        f"Cannot analyze {type(candidate).__name__}. "
        "Supported inputs: ImageBuffer, numpy.ndarray, PIL.Image.Image."
    )

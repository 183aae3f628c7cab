"""
Type guard utilities for image input detection.

These functions recognize image containers by class hierarchy instead of
isinstance checks, so callers that only ever pass numpy arrays never pay
the cost of importing Pillow or OpenCV.
"""

from __future__ import annotations

from typing import Any


def is_pil_image(candidate: Any) -> bool:
    """
    Check if the object is a Pillow image.

    Pillow images inherit from ``PIL.Image.Image``; plugin classes such as
    JpegImageFile live in their own modules but keep that base in the MRO.

    Parameters
    ----------
    candidate : Any
        Object to check.

    Returns
    -------
    bool
        True if the object looks like a Pillow image.
    """
    for cls in type(candidate).__mro__:
        if cls.__name__ == "Image" and cls.__module__.startswith("PIL"):
            return True
    return False


def is_array_like_image(candidate: Any) -> bool:
    """
    Check if the object exposes a numpy-style image shape.

    Parameters
    ----------
    candidate : Any
        Object to check.

    Returns
    -------
    bool
        True if the object has a 2D or 3D ``shape`` and a ``dtype``.
    """
    shape = getattr(candidate, "shape", None)
    if shape is None or not hasattr(candidate, "dtype"):
        return False
    return len(shape) in (2, 3)

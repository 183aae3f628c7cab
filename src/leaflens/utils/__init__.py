"""
Shared utility functions.
"""

from leaflens.utils.type_guards import (
    is_array_like_image,
    is_pil_image,
)

__all__ = [
    "is_array_like_image",
    "is_pil_image",
]

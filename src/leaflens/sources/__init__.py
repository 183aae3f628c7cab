"""
Image acquisition backends.

Every source turns one kind of device or file into an ImageBuffer, so
the analyzer never needs to know where pixels came from.
"""

from leaflens.sources.base_source import (
    CaptureError,
    ImageSource,
)
from leaflens.sources.file_source import FileImageSource

# Camera source needs OpenCV, which is an optional extra
try:
    from leaflens.sources.camera_source import CameraImageSource
    _HAS_CAMERA_SOURCE = True
except ImportError:
    _HAS_CAMERA_SOURCE = False

__all__ = [
    "CaptureError",
    "FileImageSource",
    "ImageSource",
]

if _HAS_CAMERA_SOURCE:
    __all__.append("CameraImageSource")

"""
Core analysis entry points.

This module contains the image container and the analyzer that turns it
into a health report.
"""

from leaflens.core.image_buffer import (
    ImageBuffer,
    ImageBufferValidationError,
    coerce_image_buffer,
)
from leaflens.core.pixel_health_analyzer import (
    AnalysisError,
    PixelHealthAnalyzer,
    analyze_image,
)

__all__ = [
    "AnalysisError",
    "ImageBuffer",
    "ImageBufferValidationError",
    "PixelHealthAnalyzer",
    "analyze_image",
    "coerce_image_buffer",
]

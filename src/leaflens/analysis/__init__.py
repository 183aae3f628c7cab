"""
Pixel sampling, color classification and metric derivation.
"""

from leaflens.analysis.color_classifier import (
    ColorCounts,
    ColorThresholds,
    PixelCategory,
    classify_pixel,
    count_colors,
)
from leaflens.analysis.health_metrics import (
    HealthMetrics,
    compute_health_metrics,
)

__all__ = [
    "ColorCounts",
    "ColorThresholds",
    "HealthMetrics",
    "PixelCategory",
    "classify_pixel",
    "compute_health_metrics",
    "count_colors",
]

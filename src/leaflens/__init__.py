"""
LeafLens: Estimate plant health from the colors in a photo.

This package samples the pixels of a plant photo, sorts them into green,
yellow and brown bands, and turns the counts into a 0-100 health score
with care recommendations.

Example
-------
>>> from leaflens import PixelHealthAnalyzer, FileImageSource, MatplotlibRenderer
>>>
>>> analyzer = PixelHealthAnalyzer()
>>> report = analyzer.analyze_source(FileImageSource("monstera.jpg"))
>>> print(report.status_label, report.health_score)
>>>
>>> renderer = MatplotlibRenderer()
>>> renderer.render(report, save_path="monstera_report.png")
"""

__version__ = "0.1.0"

# Core classes - the main user-facing API
from leaflens.core.image_buffer import ImageBuffer, ImageBufferValidationError
from leaflens.core.pixel_health_analyzer import (
    AnalysisError,
    PixelHealthAnalyzer,
    analyze_image,
)
from leaflens.analysis.health_metrics import HealthMetrics
from leaflens.report.health_report import HealthReport, HealthStatus
from leaflens.config import AnalyzerSettings, SampleBase, setup_logging

# Acquisition
from leaflens.sources.base_source import CaptureError, ImageSource
from leaflens.sources.file_source import FileImageSource

# Visualization
from leaflens.renderers.matplotlib_renderer import MatplotlibRenderer
from leaflens.renderers.base_renderer import BaseRenderer

# Explicit public API - prevents namespace pollution from 'import *'
__all__ = [
    # Version
    "__version__",
    # Core
    "PixelHealthAnalyzer",
    "ImageBuffer",
    "HealthMetrics",
    "HealthReport",
    "HealthStatus",
    "analyze_image",
    "AnalysisError",
    "ImageBufferValidationError",
    # Configuration
    "AnalyzerSettings",
    "SampleBase",
    "setup_logging",
    # Sources
    "ImageSource",
    "FileImageSource",
    "CaptureError",
    # Renderers
    "MatplotlibRenderer",
    "BaseRenderer",
]

"""
PixelHealthAnalyzer: the main user-facing class.

Takes a decoded image, samples and classifies its pixels, derives the
health metrics and wraps them in a HealthReport. Analysis either fully
succeeds or raises AnalysisError; callers never see half-built results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from leaflens.analysis.color_classifier import DEFAULT_THRESHOLDS, ColorThresholds, count_colors
from leaflens.analysis.health_metrics import HealthMetrics, compute_health_metrics
from leaflens.config import AnalyzerSettings
from leaflens.core.image_buffer import coerce_image_buffer
from leaflens.report.health_report import HealthReport, generate_report

if TYPE_CHECKING:
    from leaflens.sources.base_source import ImageSource


logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Error analyzing image. Please try again with a different photo."


class AnalysisError(RuntimeError):
    """
    Raised when an image cannot be analyzed.

    Wraps whatever went wrong (malformed buffer, unsupported input type,
    empty sample). The underlying exception is available as ``__cause__``.
    """

    user_message = ANALYSIS_FAILED_MESSAGE


class PixelHealthAnalyzer:
    """
    Estimate plant health from pixel colors.

    Example
    -------
    >>> from leaflens import PixelHealthAnalyzer, FileImageSource
    >>> analyzer = PixelHealthAnalyzer()
    >>> report = analyzer.analyze_source(FileImageSource("monstera.jpg"))
    >>> report.health_score, report.status_label
    (78, 'Healthy')

    Parameters
    ----------
    settings : AnalyzerSettings, optional
        Runtime settings; read from the environment when omitted.
    thresholds : ColorThresholds, optional
        RGB cut-offs for the color bands. Defaults to the standard bands.
    """

    def __init__(
        self,
        settings: AnalyzerSettings | None = None,
        thresholds: ColorThresholds | None = None,
    ) -> None:
        self._settings = settings if settings is not None else AnalyzerSettings()
        self._thresholds = thresholds if thresholds is not None else DEFAULT_THRESHOLDS

    @property
    def settings(self) -> AnalyzerSettings:
        return self._settings

    @property
    def thresholds(self) -> ColorThresholds:
        return self._thresholds

    def measure(self, image: Any) -> HealthMetrics:
        """
        Compute health metrics without building the report.

        Parameters
        ----------
        image : ImageBuffer, numpy.ndarray or PIL.Image.Image
            The decoded photo.

        Raises
        ------
        AnalysisError
            If the image cannot be interpreted or measured.
        """
        try:
            image_buffer = coerce_image_buffer(image)
            color_counts = count_colors(image_buffer, self._thresholds)
            metrics = compute_health_metrics(
                color_counts,
                image_buffer.total_pixels,
                sample_base=self._settings.sample_base,
            )
        except Exception as analysis_failure:
            logger.warning("Pixel analysis failed: %s", analysis_failure)
            raise AnalysisError(f"Could not analyze image: {analysis_failure}") from analysis_failure

        logger.debug(
            "Analyzed %dx%d image: %d sampled, score=%d coverage=%.2f yellow=%.2f brown=%.2f",
            image_buffer.width,
            image_buffer.height,
            color_counts.sampled_pixels,
            metrics.health_score,
            metrics.green_coverage,
            metrics.yellow_areas,
            metrics.brown_areas,
        )
        return metrics

    def analyze(self, image: Any) -> HealthReport:
        """
        Analyze one decoded photo and return its health report.

        Parameters
        ----------
        image : ImageBuffer, numpy.ndarray or PIL.Image.Image
            The decoded photo. Arrays must be uint8 RGBA, RGB or grayscale.

        Returns
        -------
        HealthReport

        Raises
        ------
        AnalysisError
            If the image cannot be interpreted or measured.
        """
        return generate_report(self.measure(image))

    def analyze_source(self, source: ImageSource) -> HealthReport:
        """
        Acquire an image from a source and analyze it.

        CaptureError from the source propagates unchanged so callers can
        tell "no photo" apart from "bad photo".
        """
        image_buffer = source.acquire()
        logger.debug("Acquired image from %r", source)
        return self.analyze(image_buffer)

    def __repr__(self) -> str:
        return f"<PixelHealthAnalyzer sample_base={self._settings.sample_base.value}>"


def analyze_image(image: Any) -> HealthReport:
    """
    Analyze an image with default settings and thresholds.

    Settings are read from the environment on every call. An invalid
    LEAFLENS_* value raises ValueError before analysis starts, so it is
    not wrapped in AnalysisError.
    """
    return PixelHealthAnalyzer().analyze(image)

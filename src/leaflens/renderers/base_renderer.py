"""
Abstract base class for health report renderers.

Renderers consume HealthReport objects (optionally with the analyzed
photo) and produce visual output. This base class provides the shared
formatting helpers so every backend shows the same numbers with the same
units.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import numpy as np

from leaflens.core.image_buffer import coerce_image_buffer

if TYPE_CHECKING:
    from leaflens.report.health_report import HealthReport


class BaseRenderer(ABC):
    """
    Abstract base class for visualization backends.

    Subclasses implement `render()`. The base class provides
    `_normalize_for_display()` for the photo and `_format_metric_lines()`
    for the metric cards.
    """

    @abstractmethod
    def render(
        self,
        report_to_render: HealthReport,
        image: Any = None,
        **render_options,
    ) -> Any:
        """
        Render a health report.

        Parameters
        ----------
        report_to_render : HealthReport
            The analysis result to visualize.
        image : ImageBuffer, ndarray or PIL Image, optional
            The analyzed photo, shown next to the results when given.
        **render_options
            Renderer-specific options (figure size, dpi, etc.)

        Returns
        -------
        Any
            Renderer-specific output (matplotlib Figure, path to file, etc.)
        """
        ...

    def _normalize_for_display(self, raw_image_data: Any) -> np.ndarray:
        """
        Convert any supported image input to a display-ready (H, W, 4) uint8 array.

        Raises
        ------
        ValueError
            If the input cannot be interpreted as an image.
        """
        return coerce_image_buffer(raw_image_data).as_array()

    def _format_metric_lines(self, report_to_render: HealthReport) -> list[tuple[str, str]]:
        """Return (label, formatted value) pairs for the metric cards."""
        metrics = report_to_render.metrics
        return [
            ("Green Coverage", f"{metrics.green_coverage:g}%"),
            ("Green Intensity", f"{metrics.green_intensity}/255"),
            ("Yellow Areas", f"{metrics.yellow_areas:g}%"),
            ("Brown Areas", f"{metrics.brown_areas:g}%"),
            ("Total Discoloration", f"{metrics.total_discoloration:g}%"),
        ]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

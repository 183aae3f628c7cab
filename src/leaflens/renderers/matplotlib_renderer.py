"""
Matplotlib-based renderer for plant health reports.

Produces a 1x2 grid showing the analyzed photo next to a results card
with the score bar, status, metric values and care recommendations.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import matplotlib.patches as patches
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from leaflens.report.health_report import HealthReport
from leaflens.renderers.base_renderer import BaseRenderer


SCORE_TRACK_COLOR = "#e0e0e0"
CARD_TEXT_COLOR = "#333333"
RECOMMENDATION_WRAP_WIDTH = 48
NO_PHOTO_TEXT = "No photo"


class MatplotlibRenderer(BaseRenderer):
    """
    Render a health report using Matplotlib.

    Produces a 1x2 grid with:
    - Left: the analyzed photo (or a placeholder when none is given)
    - Right: results card, drawn in the status color

    Example
    -------
    >>> from leaflens.renderers import MatplotlibRenderer
    >>> renderer = MatplotlibRenderer()
    >>> fig = renderer.render(report, image=buffer, show=False, save_path="report.png")
    """

    def __init__(
        self,
        figsize: tuple[float, float] = (12, 6),
        dpi: int = 100,
    ) -> None:
        """
        Initialize the renderer with default figure settings.

        Parameters
        ----------
        figsize : tuple[float, float], default=(12, 6)
            Figure size in inches (width, height).
        dpi : int, default=100
            Dots per inch for saved figures.
        """
        self._default_figsize = figsize
        self._default_dpi = dpi

    def render(
        self,
        report_to_render: HealthReport,
        image: Any = None,
        show: bool = True,
        save_path: str | Path | None = None,
        **render_options,
    ) -> Figure:
        """
        Render the photo and results card side by side.

        Parameters
        ----------
        report_to_render : HealthReport
            The analysis result to visualize.
        image : ImageBuffer, ndarray or PIL Image, optional
            The analyzed photo.
        show : bool, default=True
            If True, display the figure with plt.show().
        save_path : str or Path, optional
            If provided, save the figure to this path.
        **render_options
            Additional options:
            - figsize: Override default figure size
            - dpi: Override default DPI
            - show_recommendations: bool, default=True

        Returns
        -------
        Figure
            The matplotlib Figure object (for embedding in notebooks).
        """
        figsize = render_options.get("figsize", self._default_figsize)
        dpi = render_options.get("dpi", self._default_dpi)
        show_recommendations = render_options.get("show_recommendations", True)

        fig, (ax_photo, ax_card) = plt.subplots(1, 2, figsize=figsize, dpi=dpi)

        # === Left panel: Photo ===
        if image is not None:
            ax_photo.imshow(self._normalize_for_display(image))
        else:
            ax_photo.text(
                0.5,
                0.5,
                NO_PHOTO_TEXT,
                ha="center",
                va="center",
                fontsize=12,
                color="gray",
                transform=ax_photo.transAxes,
            )
        ax_photo.set_title("Photo", fontsize=12, fontweight="bold")
        ax_photo.axis("off")

        # === Right panel: Results card ===
        status = report_to_render.status
        ax_card.set_title(
            self._build_card_title(report_to_render),
            fontsize=14,
            fontweight="bold",
            color=status.color,
        )
        ax_card.axis("off")
        ax_card.set_xlim(0, 1)
        ax_card.set_ylim(0, 1)

        self._draw_score_bar(ax_card, report_to_render.health_score, status.color)

        cursor_y = 0.78
        for metric_label, metric_value in self._format_metric_lines(report_to_render):
            ax_card.text(0.02, cursor_y, metric_label, fontsize=10, color=CARD_TEXT_COLOR)
            ax_card.text(
                0.98,
                cursor_y,
                metric_value,
                fontsize=10,
                fontweight="bold",
                ha="right",
                color=CARD_TEXT_COLOR,
            )
            cursor_y -= 0.06

        if show_recommendations:
            cursor_y -= 0.03
            ax_card.text(
                0.02,
                cursor_y,
                "Care Recommendations",
                fontsize=11,
                fontweight="bold",
                color=CARD_TEXT_COLOR,
            )
            cursor_y -= 0.06
            for recommendation in report_to_render.recommendations:
                wrapped = textwrap.fill(recommendation, width=RECOMMENDATION_WRAP_WIDTH)
                ax_card.text(
                    0.02,
                    cursor_y,
                    f"• {wrapped}",
                    fontsize=9,
                    va="top",
                    color=CARD_TEXT_COLOR,
                )
                cursor_y -= 0.05 * (wrapped.count("\n") + 1) + 0.01

        plt.tight_layout()

        if save_path is not None:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path, dpi=dpi, bbox_inches="tight")

        if show:
            plt.show()

        return fig

    def _build_card_title(self, report_to_render: HealthReport) -> str:
        """Status label with the score, e.g. 'Healthy (78/100)'."""
        return f"{report_to_render.status_label} ({report_to_render.health_score}/100)"

    def _draw_score_bar(self, ax: plt.Axes, health_score: int, color: str) -> None:
        """
        Draw a horizontal gauge filled to the score.

        Uses matplotlib.patches.Rectangle in data coordinates of the
        unit-square card axes.
        """
        bar_left, bar_bottom, bar_width, bar_height = 0.02, 0.88, 0.96, 0.05

        track = patches.Rectangle(
            (bar_left, bar_bottom),
            bar_width,
            bar_height,
            facecolor=SCORE_TRACK_COLOR,
            edgecolor="none",
        )
        ax.add_patch(track)

        fill = patches.Rectangle(
            (bar_left, bar_bottom),
            bar_width * health_score / 100,
            bar_height,
            facecolor=color,
            edgecolor="none",
        )
        ax.add_patch(fill)

    def __repr__(self) -> str:
        return f"<MatplotlibRenderer figsize={self._default_figsize} dpi={self._default_dpi}>"

"""
Turn color counts into the health metrics shown to the user.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from leaflens.analysis.color_classifier import SAMPLE_STRIDE_PIXELS, ColorCounts
from leaflens.config import SampleBase


MIN_HEALTH_SCORE = 0
MAX_HEALTH_SCORE = 100
MAX_CHANNEL_VALUE = 255


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with ties going up (42.5 -> 43, 0.125 -> 0.13 at two digits).

    The builtin round() sends ties to the even neighbour instead.
    """
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _percentage(count: int, base: float) -> float:
    return round_half_up(count / base * 100, 2)


@dataclass(frozen=True, slots=True)
class HealthMetrics:
    """
    Derived, immutable health figures for one image.

    Area percentages are not clamped: under the legacy sample base they
    can exceed 100 for images whose pixel count is not a multiple of the
    sampling stride. Only the score is held to [0, 100].
    """

    health_score: int
    green_coverage: float
    green_intensity: int
    yellow_areas: float
    brown_areas: float
    total_discoloration: float


def resolve_sample_base(
    counts: ColorCounts,
    total_pixels: int,
    sample_base: SampleBase = SampleBase.LEGACY,
) -> float:
    """Denominator for area percentages under the chosen sample base."""
    if sample_base is SampleBase.SAMPLED:
        return float(counts.sampled_pixels)
    return total_pixels / SAMPLE_STRIDE_PIXELS


def compute_health_metrics(
    counts: ColorCounts,
    total_pixels: int,
    sample_base: SampleBase = SampleBase.LEGACY,
) -> HealthMetrics:
    """
    Derive coverage, discoloration and the 0-100 score from color counts.

    Parameters
    ----------
    counts : ColorCounts
        Tally produced by count_colors().
    total_pixels : int
        Pixel count of the whole image, not just the sampled subset.
    sample_base : SampleBase, default=SampleBase.LEGACY
        Which denominator to use for area percentages.

    Returns
    -------
    HealthMetrics

    Raises
    ------
    ValueError
        If the sample base resolves to zero (no pixels to measure).
    """
    base = resolve_sample_base(counts, total_pixels, sample_base)
    if base <= 0:
        raise ValueError(
            f"Cannot compute percentages over an empty sample (base={base})."
        )

    green_coverage = _percentage(counts.green_pixels, base)
    yellow_areas = _percentage(counts.yellow_pixels, base)
    brown_areas = _percentage(counts.brown_pixels, base)

    # max(..., 1) keeps images without any foliage at intensity 0
    avg_green_intensity = counts.green_intensity_sum / max(counts.green_pixels, 1)

    raw_score = int(round_half_up(green_coverage * avg_green_intensity / MAX_CHANNEL_VALUE))
    health_score = max(MIN_HEALTH_SCORE, min(MAX_HEALTH_SCORE, raw_score))

    return HealthMetrics(
        health_score=health_score,
        green_coverage=green_coverage,
        green_intensity=int(round_half_up(avg_green_intensity)),
        yellow_areas=yellow_areas,
        brown_areas=brown_areas,
        total_discoloration=round_half_up(yellow_areas + brown_areas, 2),
    )

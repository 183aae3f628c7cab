"""
Status bands, care recommendations and the final health report.

Everything here is a pure function of HealthMetrics: the same metrics
always produce the same report, down to the serialized bytes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from leaflens.analysis.health_metrics import HealthMetrics


HEALTHY_SCORE_FLOOR = 70
MODERATE_SCORE_FLOOR = 40
YELLOW_AREA_LIMIT = 10
BROWN_AREA_LIMIT = 5
MIN_USEFUL_GREEN_COVERAGE = 30

MESSAGE_HEALTHY = "Your plant appears healthy! Continue current care routine."
MESSAGE_CHECK_WATERING = "Check your watering schedule - ensure proper drainage"
MESSAGE_FERTILIZER = "Consider using plant-appropriate fertilizer"
MESSAGE_YELLOWING = "Yellowing may indicate overwatering or nutrient deficiency"
MESSAGE_BROWNING = "Browning could mean too much direct sunlight or under-watering"
MESSAGE_RETAKE_CLOSER = "For better analysis, take a closer photo focused on the plant"
MESSAGE_NO_ISSUES = "No specific issues detected. Maintain regular plant care."


class HealthStatus(Enum):
    """Score band with its display label, color and icon."""

    HEALTHY = ("Healthy", "#4caf50", "🌿")
    MODERATE = ("Moderate", "#ff9800", "⚠️")
    NEEDS_ATTENTION = ("Needs Attention", "#f44336", "❌")

    def __init__(self, label: str, color: str, icon: str) -> None:
        self.label = label
        self.color = color
        self.icon = icon


def status_for_score(health_score: int) -> HealthStatus:
    """Map a 0-100 score onto its band: >70 healthy, >40 moderate."""
    if health_score > HEALTHY_SCORE_FLOOR:
        return HealthStatus.HEALTHY
    if health_score > MODERATE_SCORE_FLOOR:
        return HealthStatus.MODERATE
    return HealthStatus.NEEDS_ATTENTION


def build_recommendations(metrics: HealthMetrics) -> tuple[str, ...]:
    """
    Collect care advice for the given metrics.

    Rules are independent and run in a fixed order, so the output order
    is stable: overall care first, then yellowing, browning, and finally
    photo quality.
    """
    recommendations: list[str] = []

    if metrics.health_score > HEALTHY_SCORE_FLOOR:
        recommendations.append(MESSAGE_HEALTHY)
    else:
        recommendations.append(MESSAGE_CHECK_WATERING)
        recommendations.append(MESSAGE_FERTILIZER)

    if metrics.yellow_areas > YELLOW_AREA_LIMIT:
        recommendations.append(MESSAGE_YELLOWING)

    if metrics.brown_areas > BROWN_AREA_LIMIT:
        recommendations.append(MESSAGE_BROWNING)

    if metrics.green_coverage < MIN_USEFUL_GREEN_COVERAGE:
        recommendations.append(MESSAGE_RETAKE_CLOSER)

    if not recommendations:
        recommendations.append(MESSAGE_NO_ISSUES)

    return tuple(recommendations)


@dataclass(frozen=True, slots=True)
class HealthReport:
    """
    Final, display-ready result of one analysis.

    Holds the metrics plus everything derived from them for presentation.
    No identity, no timestamps: two reports for the same pixels compare
    and serialize equal.
    """

    metrics: HealthMetrics
    status: HealthStatus
    recommendations: tuple[str, ...]

    @property
    def health_score(self) -> int:
        return self.metrics.health_score

    @property
    def status_label(self) -> str:
        return self.status.label

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-dict form for templates and JSON APIs.

        Keys are camelCase to match what browser front ends expect.
        """
        return {
            "healthScore": self.metrics.health_score,
            "healthStatus": self.status.label,
            "healthColor": self.status.color,
            "healthEmoji": self.status.icon,
            "metrics": {
                "greenCoverage": self.metrics.green_coverage,
                "greenIntensity": self.metrics.green_intensity,
                "yellowAreas": self.metrics.yellow_areas,
                "brownAreas": self.metrics.brown_areas,
                "totalDiscoloration": self.metrics.total_discoloration,
            },
            "recommendations": list(self.recommendations),
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize with sorted keys so equal reports give equal strings."""
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False, indent=indent)


def generate_report(metrics: HealthMetrics) -> HealthReport:
    """Build the full report for a set of metrics."""
    return HealthReport(
        metrics=metrics,
        status=status_for_score(metrics.health_score),
        recommendations=build_recommendations(metrics),
    )

"""
Status bands and care recommendations derived from health metrics.
"""

from leaflens.report.health_report import (
    HealthReport,
    HealthStatus,
    generate_report,
)

__all__ = [
    "HealthReport",
    "HealthStatus",
    "generate_report",
]

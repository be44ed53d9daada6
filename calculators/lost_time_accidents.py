"""
calculators/lost_time_accidents.py

Lost-time accident metrics (GRI 403-9).

A lost-time accident is any incident with ``days_lost > 0``.

    lost_time_accident_rate = lost_time / total_incidents * 100
    LTIFR                   = lost_time * 1e6 / hours_worked
    severity_rate           = days_lost * 1e6 / hours_worked

Both frequency rates are ``None`` when hours worked are unknown.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any

from app.domain.categories import IncidentType
from calculators.base import BaseMetricCalculator
from calculators.common import (
    PORTUGUESE_MONTHS,
    TIER_ATTENTION,
    TIER_EXCELLENT,
    TIER_GOOD,
    classify_at_most,
    compare_periods,
    percentage,
    round_to,
    safe_ratio,
)
from calculators.records import IncidentRow

PER_MILLION_HOURS = 1_000_000

# Inclusive upper bounds on the lost-time rate (%).
RATE_TIERS: tuple[tuple[float, str], ...] = (
    (10, TIER_EXCELLENT),
    (25, TIER_GOOD),
    (50, TIER_ATTENTION),
)

_SEVERITY_NOT_INFORMED = "Não informado"


def _days_lost(row: IncidentRow) -> int:
    return row.days_lost or 0


class LostTimeAccidentsCalculator(BaseMetricCalculator):
    name = "lost_time_accidents"

    def calculate(
        self,
        *,
        incidents: Sequence[IncidentRow],
        hours_worked: float | None = None,
        previous_incidents: Sequence[IncidentRow] | None = None,
    ) -> dict[str, Any]:
        total = len(incidents)
        lost_time_rows = [row for row in incidents if _days_lost(row) > 0]
        lost_time = len(lost_time_rows)
        days_lost = sum(_days_lost(row) for row in lost_time_rows)
        rate = percentage(lost_time, total)

        ltifr = None
        severity_rate = None
        if hours_worked:
            ltifr = safe_ratio(lost_time * PER_MILLION_HOURS, hours_worked)
            severity_rate = safe_ratio(days_lost * PER_MILLION_HOURS, hours_worked)

        by_type = Counter(row.incident_type for row in incidents)
        by_severity = Counter((row.severity or _SEVERITY_NOT_INFORMED) for row in incidents)

        previous_rate = None
        if previous_incidents is not None:
            previous_lost = sum(1 for row in previous_incidents if _days_lost(row) > 0)
            previous_rate = percentage(previous_lost, len(previous_incidents))

        return {
            "total_incidents": total,
            "total_accidents_with_lost_time": lost_time,
            "total_days_lost": days_lost,
            "average_days_lost": round(days_lost / lost_time, 2) if lost_time else 0.0,
            "lost_time_accident_rate": round(rate, 2),
            "ltifr": round_to(ltifr, 2),
            "severity_rate": round_to(severity_rate, 2),
            "by_incident_type": {kind.value: by_type.get(kind, 0) for kind in IncidentType},
            "by_severity": dict(sorted(by_severity.items())),
            "monthly_trend": _monthly_trend(incidents),
            "performance_classification": classify_at_most(rate, RATE_TIERS),
            "comparison": compare_periods(rate, previous_rate, higher_is_better=False),
            "compliance": {
                "has_hours_worked": hours_worked is not None and hours_worked > 0,
                "missing_fields": [] if hours_worked else ["hours_worked"],
            },
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(incidents=())


def _monthly_trend(incidents: Sequence[IncidentRow]) -> list[dict[str, Any]]:
    counts = Counter(row.incident_date.month for row in incidents)
    lost = Counter(row.incident_date.month for row in incidents if _days_lost(row) > 0)
    return [
        {
            "month": month_number,
            "label": label,
            "incidents": counts.get(month_number, 0),
            "lost_time_accidents": lost.get(month_number, 0),
        }
        for month_number, label in enumerate(PORTUGUESE_MONTHS, start=1)
    ]

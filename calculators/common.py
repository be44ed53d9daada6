"""
calculators/common.py

Shared arithmetic for the calculators: clamping, guarded percentages,
threshold classification and period-over-period comparison.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

TIER_EXCELLENT = "Excelente"
TIER_GOOD = "Bom"
TIER_ATTENTION = "Atenção"
TIER_CRITICAL = "Crítico"

PORTUGUESE_MONTHS: tuple[str, ...] = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp *value* to ``[min_value, max_value]``."""
    return max(min_value, min(value, max_value))


def value_or_zero(value: float | None) -> float:
    """Coalesce a nullable store field to ``0.0``."""
    return float(value) if value else 0.0


def percentage(part: float, whole: float) -> float:
    """``part / whole * 100``, or ``0.0`` when *whole* is zero."""
    return (part / whole) * 100 if whole else 0.0


def safe_ratio(numerator: float, denominator: float) -> float | None:
    """``numerator / denominator``, or ``None`` when the denominator is not positive."""
    if denominator <= 0:
        return None
    return numerator / denominator


def round_to(value: float | None, digits: int) -> float | None:
    if value is None:
        return None
    return round(value, digits)


def classify_at_least(
    value: float,
    thresholds: Sequence[tuple[float, str]],
    fallback: str = TIER_CRITICAL,
) -> str:
    """
    Higher-is-better tiers. *thresholds* are inclusive lower bounds in
    descending order, e.g. ``((80, "Excelente"), (60, "Bom"))``.
    """
    for threshold, label in thresholds:
        if value >= threshold:
            return label
    return fallback


def classify_at_most(
    value: float,
    thresholds: Sequence[tuple[float, str]],
    fallback: str = TIER_CRITICAL,
) -> str:
    """
    Lower-is-better tiers. *thresholds* are inclusive upper bounds in
    ascending order, e.g. ``((10, "Excelente"), (25, "Bom"))``.
    """
    for threshold, label in thresholds:
        if value <= threshold:
            return label
    return fallback


def compare_periods(
    current: float,
    previous: float | None,
    *,
    higher_is_better: bool = True,
    digits: int = 2,
) -> dict[str, Any]:
    """
    Build the comparison-to-previous-period block.

    ``change_percentage`` is ``None`` when there is no previous value or it
    is zero; ``is_improving`` is ``None`` when there is no previous value.
    """
    if previous is None:
        return {
            "previous_value": None,
            "absolute_change": None,
            "change_percentage": None,
            "is_improving": None,
        }

    delta = current - previous
    change_pct = (delta / previous) * 100 if previous else None
    improving = delta > 0 if higher_is_better else delta < 0
    return {
        "previous_value": round(previous, digits),
        "absolute_change": round(delta, digits),
        "change_percentage": round_to(change_pct, digits),
        "is_improving": improving,
    }


def sum_operational(rows: Iterable[Any]) -> tuple[float, str | None, float]:
    """
    Return ``(production_volume, production_unit, revenue_brl)`` summed over
    operational metric rows. The unit is the last one filled.
    """
    production = 0.0
    revenue = 0.0
    unit: str | None = None
    for row in rows:
        production += value_or_zero(row.production_volume)
        revenue += value_or_zero(row.revenue_brl)
        unit = row.production_unit or unit
    return production, unit, revenue


def sum_hours_worked(rows: Iterable[Any]) -> float | None:
    """Total hours worked, or ``None`` when no row carries hours."""
    hours = [row.hours_worked for row in rows if row.hours_worked]
    return float(sum(hours)) if hours else None

"""
calculators/water.py

Water calculators (GRI 303-3 withdrawal, GRI 303-5 consumption).

Volume rules per record
-----------------------
withdrawal  = withdrawal_m3 or 0
consumption = consumption_m3, or the withdrawal when consumption was not filled
discharge   = discharge_m3 or 0

Freshwater is withdrawal with total dissolved solids at or below the
freshwater threshold (1000 mg/L by default); missing TDS counts as fresh.
Volumes are reported in m³ rounded to 3 decimals.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.domain.categories import ReuseApplication, WaterSource
from calculators.base import BaseMetricCalculator
from calculators.common import (
    percentage,
    round_to,
    safe_ratio,
    sum_operational,
    value_or_zero,
)
from calculators.records import OperationalRow, WaterRow

DEFAULT_FRESHWATER_TDS_MG_L = 1000.0
_NOT_INFORMED = "Não informado"


def _m3(value: float) -> float:
    return round(value, 3)


class WaterConsumptionCalculator(BaseMetricCalculator):
    """Totals, source and quality breakdowns for one year of water records."""

    name = "water_consumption"

    def __init__(self, freshwater_tds_threshold: float = DEFAULT_FRESHWATER_TDS_MG_L) -> None:
        self._freshwater_tds = freshwater_tds_threshold

    def calculate(self, *, rows: Sequence[WaterRow]) -> dict[str, Any]:
        total_withdrawal = 0.0
        total_consumption = 0.0
        total_discharge = 0.0
        stressed = 0.0
        by_source = {source: 0.0 for source in WaterSource}
        freshwater = 0.0
        other_water = 0.0
        breakdown: list[dict[str, Any]] = []

        for row in rows:
            withdrawal = value_or_zero(row.withdrawal_m3)
            consumption = value_or_zero(row.consumption_m3) or withdrawal
            discharge = value_or_zero(row.discharge_m3)

            total_withdrawal += withdrawal
            total_consumption += consumption
            total_discharge += discharge
            by_source[row.source_type] += withdrawal

            if value_or_zero(row.total_dissolved_solids_mg_l) <= self._freshwater_tds:
                freshwater += withdrawal
            else:
                other_water += withdrawal

            if row.is_water_stressed_area:
                stressed += withdrawal

            breakdown.append(
                {
                    "source_type": row.source_type.value,
                    "source_name": row.source_name or _NOT_INFORMED,
                    "withdrawal_m3": _m3(withdrawal),
                    "consumption_m3": _m3(consumption),
                    "discharge_m3": _m3(discharge),
                    "quality": row.water_quality or _NOT_INFORMED,
                    "is_stressed_area": bool(row.is_water_stressed_area),
                    "period": f"{row.period_start.isoformat()} a {row.period_end.isoformat()}",
                }
            )

        return {
            "total_withdrawal_m3": _m3(total_withdrawal),
            "total_consumption_m3": _m3(total_consumption),
            "total_discharge_m3": _m3(total_discharge),
            "by_source": {source.value: _m3(volume) for source, volume in by_source.items()},
            "by_quality": {"freshwater": _m3(freshwater), "other_water": _m3(other_water)},
            "water_stressed_areas_m3": _m3(stressed),
            "breakdown": breakdown,
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(rows=())


class WaterIntensityCalculator(BaseMetricCalculator):
    """
    Consumption per unit of production and per 1000 BRL of revenue, compared
    with the previous year's production intensity.
    """

    name = "water_intensity"

    def calculate(
        self,
        *,
        consumption_m3: float,
        operational: Sequence[OperationalRow],
        previous_consumption_m3: float | None = None,
        previous_operational: Sequence[OperationalRow] = (),
    ) -> dict[str, Any]:
        production, unit, revenue = sum_operational(operational)

        intensity_per_production = safe_ratio(consumption_m3, production)
        per_revenue = safe_ratio(consumption_m3, revenue)
        intensity_per_revenue = per_revenue * 1000 if per_revenue is not None else None

        baseline = None
        if previous_consumption_m3 is not None:
            previous_production, _, _ = sum_operational(previous_operational)
            baseline = safe_ratio(previous_consumption_m3, previous_production)

        is_improving = None
        improvement_percent = None
        if baseline and intensity_per_production is not None:
            is_improving = intensity_per_production < baseline
            improvement_percent = (baseline - intensity_per_production) / baseline * 100

        return {
            "total_water_m3": _m3(consumption_m3),
            "intensity_per_production": round_to(intensity_per_production, 6),
            "intensity_per_revenue": round_to(intensity_per_revenue, 6),
            "production_volume": production if production > 0 else None,
            "production_unit": unit if production > 0 else None,
            "revenue_brl": revenue if revenue > 0 else None,
            "baseline_intensity": round_to(baseline, 6),
            "is_improving": is_improving,
            "improvement_percent": round_to(improvement_percent, 2),
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(consumption_m3=0.0, operational=())


class WaterReuseCalculator(BaseMetricCalculator):
    """
    Share of consumption covered by reused water (circularity), broken down
    by reuse application.
    """

    name = "water_reuse"

    def __init__(self, consumption: WaterConsumptionCalculator | None = None) -> None:
        self._consumption = consumption or WaterConsumptionCalculator()

    def calculate(
        self,
        *,
        rows: Sequence[WaterRow],
        previous_rows: Sequence[WaterRow] | None = None,
    ) -> dict[str, Any]:
        current = self._consumption.calculate(rows=rows)
        reuse_volume = current["by_source"][WaterSource.REUSE.value]
        total_consumption = current["total_consumption_m3"]
        reuse_pct = percentage(reuse_volume, total_consumption)

        baseline = None
        is_improving = None
        improvement = None
        if previous_rows:
            previous = self._consumption.calculate(rows=previous_rows)
            if previous["total_consumption_m3"] > 0:
                baseline = percentage(
                    previous["by_source"][WaterSource.REUSE.value],
                    previous["total_consumption_m3"],
                )
                is_improving = reuse_pct > baseline
                improvement = reuse_pct - baseline

        by_type = {application: 0.0 for application in ReuseApplication}
        for row in rows:
            if row.source_type is not WaterSource.REUSE:
                continue
            application = row.reuse_application or ReuseApplication.OTHER
            by_type[application] += value_or_zero(row.withdrawal_m3)

        return {
            "reuse_percentage": round(reuse_pct, 2),
            "reuse_volume_m3": _m3(reuse_volume),
            "total_consumption_m3": _m3(total_consumption),
            "baseline_reuse_percentage": round_to(baseline, 2),
            "is_improving": is_improving,
            "improvement_percent": round_to(improvement, 2),
            "reuse_by_type": {application.value: _m3(v) for application, v in by_type.items()},
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(rows=())


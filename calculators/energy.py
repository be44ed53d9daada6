"""
calculators/energy.py

Energy consumption within the organisation (GRI 302-1) and energy
intensity (GRI 302-3).

Every record is normalised to kWh:

    electricity   kWh | MWh (x1e3) | GWh (x1e6)
    thermal       kWh | MWh (x1e3) | TJ (x277 777.78)
    fuel          quantity in base unit (L, m³ or kg; t -> kg x1000)
                  x conversion factor for the fuel name;
                  kWh / MWh / GWh quantities pass through

Fuels missing from the factor table contribute 0 kWh.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.domain.categories import EnergyCategory
from calculators.base import BaseMetricCalculator
from calculators.common import (
    compare_periods,
    percentage,
    round_to,
    safe_ratio,
    sum_operational,
    value_or_zero,
)
from calculators.records import EnergyRow, OperationalRow

# kWh per litre (liquids), per m³ (gases) or per kg (solids).
FUEL_CONVERSION_FACTORS: dict[str, float] = {
    "diesel": 10.8,
    "diesel b": 10.8,
    "diesel s10": 10.8,
    "diesel s500": 10.8,
    "gasolina": 9.1,
    "gasolina comum": 9.1,
    "gasolina premium": 9.1,
    "etanol": 6.5,
    "etanol hidratado": 6.5,
    "etanol anidro": 6.5,
    "biodiesel": 10.0,
    "óleo combustível": 11.2,
    "querosene": 10.2,
    "gás natural": 10.6,
    "gnv": 10.6,
    "biogás": 6.5,
    "glp": 12.8,
    "carvão": 7.5,
    "carvão mineral": 7.5,
    "carvão vegetal": 8.1,
    "lenha": 4.4,
    "biomassa": 4.5,
    "pellet": 5.0,
    "bagaço de cana": 4.2,
}

KWH_PER_MWH = 1_000.0
KWH_PER_GWH = 1_000_000.0
KWH_PER_TJ = 277_777.78

_ENERGY_UNITS: dict[str, float] = {"kwh": 1.0, "mwh": KWH_PER_MWH, "gwh": KWH_PER_GWH}
_THERMAL_UNITS: dict[str, float] = {"kwh": 1.0, "mwh": KWH_PER_MWH, "tj": KWH_PER_TJ}
_TONNE_UNITS = {"t", "tonelada", "toneladas"}


def to_kwh(row: EnergyRow) -> float:
    """Convert one energy record to kWh."""
    quantity = value_or_zero(row.quantity)
    unit = (row.unit or "").strip().lower()

    if row.category is EnergyCategory.ELECTRICITY:
        return quantity * _ENERGY_UNITS.get(unit, 1.0)
    if row.category is EnergyCategory.THERMAL:
        return quantity * _THERMAL_UNITS.get(unit, 1.0)

    if unit in _ENERGY_UNITS:
        return quantity * _ENERGY_UNITS[unit]
    if unit in _TONNE_UNITS:
        quantity *= 1000
    factor = FUEL_CONVERSION_FACTORS.get((row.source_name or "").strip().lower(), 0.0)
    return quantity * factor


def _kwh(value: float) -> float:
    return round(value, 2)


class EnergyConsumptionCalculator(BaseMetricCalculator):
    """Totals per category, renewable share and intensity for one year."""

    name = "energy_consumption"

    def calculate(
        self,
        *,
        rows: Sequence[EnergyRow],
        operational: Sequence[OperationalRow] = (),
        previous_total_kwh: float | None = None,
    ) -> dict[str, Any]:
        by_category = {category: 0.0 for category in EnergyCategory}
        renewable = 0.0
        breakdown: list[dict[str, Any]] = []

        for row in rows:
            kwh = to_kwh(row)
            by_category[row.category] += kwh
            if row.is_renewable:
                renewable += kwh
            if kwh > 0:
                breakdown.append(
                    {
                        "source": row.source_name,
                        "category": row.category.value,
                        "kwh": _kwh(kwh),
                        "is_renewable": row.is_renewable,
                    }
                )

        total = sum(by_category.values())
        production, unit, revenue = sum_operational(operational)
        per_revenue = safe_ratio(total, revenue)

        return {
            "total_kwh": _kwh(total),
            "electricity_kwh": _kwh(by_category[EnergyCategory.ELECTRICITY]),
            "fuel_kwh": _kwh(by_category[EnergyCategory.FUEL]),
            "thermal_kwh": _kwh(by_category[EnergyCategory.THERMAL]),
            "renewable_kwh": _kwh(renewable),
            "non_renewable_kwh": _kwh(total - renewable),
            "renewable_percentage": round(percentage(renewable, total), 2),
            "breakdown": breakdown,
            "intensity": {
                "kwh_per_production_unit": round_to(safe_ratio(total, production), 4),
                "production_unit": unit if production > 0 else None,
                "kwh_per_thousand_brl": round_to(
                    per_revenue * 1000 if per_revenue is not None else None, 4
                ),
            },
            "comparison": compare_periods(total, previous_total_kwh, higher_is_better=False),
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(rows=())

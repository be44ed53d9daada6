"""
tests/test_energy.py

Pytest unit tests for kWh normalisation and EnergyConsumptionCalculator.

Coverage
--------
- Electricity / thermal unit multipliers
- Fuel factors by name, tonne handling, energy-unit passthrough
- Unknown fuels contribute zero and are left out of the breakdown
- Category totals, renewable share, intensity, comparison
"""

from __future__ import annotations

import pytest

from app.domain.categories import EnergyCategory
from calculators.energy import KWH_PER_TJ, EnergyConsumptionCalculator, to_kwh
from calculators.records import EnergyRow, OperationalRow


def _row(source: str, category: EnergyCategory, quantity: float | None, unit: str, renewable: bool = False) -> EnergyRow:
    return EnergyRow(
        source_name=source,
        category=category,
        quantity=quantity,
        unit=unit,
        is_renewable=renewable,
    )


class TestToKwh:
    @pytest.mark.parametrize(
        ("unit", "expected"),
        [("kWh", 10.0), ("MWh", 10_000.0), ("GWh", 10_000_000.0)],
    )
    def test_electricity_units(self, unit: str, expected: float) -> None:
        assert to_kwh(_row("Rede", EnergyCategory.ELECTRICITY, 10.0, unit)) == expected

    def test_thermal_terajoule(self) -> None:
        assert to_kwh(_row("Vapor", EnergyCategory.THERMAL, 1.0, "TJ")) == KWH_PER_TJ

    def test_fuel_factor_is_case_insensitive(self) -> None:
        assert to_kwh(_row("Diesel S10", EnergyCategory.FUEL, 1000.0, "L")) == pytest.approx(10_800.0)
        assert to_kwh(_row(" GLP ", EnergyCategory.FUEL, 10.0, "kg")) == pytest.approx(128.0)

    def test_fuel_in_tonnes(self) -> None:
        assert to_kwh(_row("Lenha", EnergyCategory.FUEL, 2.0, "t")) == pytest.approx(8_800.0)

    def test_fuel_already_in_energy_units(self) -> None:
        assert to_kwh(_row("Biogás", EnergyCategory.FUEL, 3.0, "MWh")) == 3_000.0

    def test_unknown_fuel_is_zero(self) -> None:
        assert to_kwh(_row("Hidrogênio", EnergyCategory.FUEL, 100.0, "L")) == 0.0

    def test_missing_quantity_is_zero(self) -> None:
        assert to_kwh(_row("Rede", EnergyCategory.ELECTRICITY, None, "kWh")) == 0.0


class TestEnergyConsumption:
    @pytest.fixture()
    def rows(self) -> list[EnergyRow]:
        return [
            _row("Rede concessionária", EnergyCategory.ELECTRICITY, 10.0, "MWh"),
            _row("Diesel", EnergyCategory.FUEL, 1000.0, "L"),
            _row("Vapor de processo", EnergyCategory.THERMAL, 1.0, "TJ"),
            _row("Lenha", EnergyCategory.FUEL, 2.0, "t", renewable=True),
            _row("Hidrogênio", EnergyCategory.FUEL, 100.0, "L"),
        ]

    def test_category_totals(self, rows) -> None:
        result = EnergyConsumptionCalculator().calculate(rows=rows)
        assert result["electricity_kwh"] == 10_000.0
        assert result["fuel_kwh"] == pytest.approx(19_600.0)
        assert result["thermal_kwh"] == pytest.approx(277_777.78)
        assert result["total_kwh"] == pytest.approx(307_377.78)

    def test_renewable_share(self, rows) -> None:
        result = EnergyConsumptionCalculator().calculate(rows=rows)
        assert result["renewable_kwh"] == pytest.approx(8_800.0)
        assert result["non_renewable_kwh"] == pytest.approx(298_577.78)
        assert result["renewable_percentage"] == pytest.approx(2.86)

    def test_zero_kwh_rows_left_out_of_breakdown(self, rows) -> None:
        sources = [entry["source"] for entry in EnergyConsumptionCalculator().calculate(rows=rows)["breakdown"]]
        assert "Hidrogênio" not in sources
        assert len(sources) == 4

    def test_intensity(self, rows) -> None:
        intensity = EnergyConsumptionCalculator().calculate(
            rows=rows,
            operational=[OperationalRow(production_volume=1000.0, production_unit="t", revenue_brl=1_000_000.0)],
        )["intensity"]
        assert intensity["kwh_per_production_unit"] == pytest.approx(307.3778)
        assert intensity["production_unit"] == "t"
        assert intensity["kwh_per_thousand_brl"] == pytest.approx(307.3778)

    def test_intensity_without_operational_data(self, rows) -> None:
        intensity = EnergyConsumptionCalculator().calculate(rows=rows)["intensity"]
        assert intensity == {
            "kwh_per_production_unit": None,
            "production_unit": None,
            "kwh_per_thousand_brl": None,
        }

    def test_lower_consumption_is_improving(self) -> None:
        rows = [_row("Rede", EnergyCategory.ELECTRICITY, 800.0, "kWh")]
        comparison = EnergyConsumptionCalculator().calculate(rows=rows, previous_total_kwh=1000.0)["comparison"]
        assert comparison["change_percentage"] == -20.0
        assert comparison["is_improving"] is True

    def test_empty(self) -> None:
        empty = EnergyConsumptionCalculator().empty()
        assert empty["total_kwh"] == 0.0
        assert empty["renewable_percentage"] == 0.0
        assert empty["breakdown"] == []

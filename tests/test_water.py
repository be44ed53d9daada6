"""
tests/test_water.py

Pytest unit tests for the water calculators: consumption totals, intensity
and reuse.

Coverage
--------
- Totals with consumption falling back to withdrawal
- Source breakdown keyed by classified source type
- Freshwater vs other water by TDS threshold (configurable)
- Water-stressed subtotal
- Per-record breakdown labels
- Intensity per production / per 1000 BRL and baseline comparison
- Reuse share, baseline and per-application split
"""

from __future__ import annotations

from datetime import date

import pytest

from app.domain.categories import ReuseApplication, WaterSource
from calculators.records import OperationalRow, WaterRow
from calculators.water import (
    WaterConsumptionCalculator,
    WaterIntensityCalculator,
    WaterReuseCalculator,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

Q1_START = date(2025, 1, 1)
Q1_END = date(2025, 3, 31)


def _row(source: WaterSource, withdrawal: float | None, **kwargs) -> WaterRow:
    return WaterRow(
        source_type=source,
        period_start=Q1_START,
        period_end=Q1_END,
        withdrawal_m3=withdrawal,
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Consumption
# ---------------------------------------------------------------------------


class TestWaterConsumption:
    def test_water_stressed_subtotal(self) -> None:
        rows = [
            _row(WaterSource.WELL, 100.0, is_water_stressed_area=True),
            _row(WaterSource.PUBLIC_NETWORK, 50.0),
        ]
        result = WaterConsumptionCalculator().calculate(rows=rows)
        assert result["water_stressed_areas_m3"] == 100.0
        assert result["total_withdrawal_m3"] == 150.0

    def test_consumption_falls_back_to_withdrawal(self) -> None:
        rows = [
            _row(WaterSource.WELL, 100.0, consumption_m3=80.0, discharge_m3=20.0),
            _row(WaterSource.PUBLIC_NETWORK, 50.0),
        ]
        result = WaterConsumptionCalculator().calculate(rows=rows)
        assert result["total_consumption_m3"] == 130.0
        assert result["total_discharge_m3"] == 20.0

    def test_by_source_covers_every_source(self) -> None:
        rows = [_row(WaterSource.WELL, 100.0), _row(WaterSource.PUBLIC_NETWORK, 50.0)]
        by_source = WaterConsumptionCalculator().calculate(rows=rows)["by_source"]
        assert set(by_source) == {source.value for source in WaterSource}
        assert by_source["well"] == 100.0
        assert by_source["public_network"] == 50.0
        assert by_source["rainwater"] == 0.0

    def test_quality_split_by_tds(self) -> None:
        rows = [
            _row(WaterSource.WELL, 100.0, total_dissolved_solids_mg_l=1500.0),
            _row(WaterSource.PUBLIC_NETWORK, 50.0, total_dissolved_solids_mg_l=1000.0),
            _row(WaterSource.RAINWATER, 10.0),
        ]
        by_quality = WaterConsumptionCalculator().calculate(rows=rows)["by_quality"]
        assert by_quality == {"freshwater": 60.0, "other_water": 100.0}

    def test_threshold_is_configurable(self) -> None:
        rows = [_row(WaterSource.WELL, 100.0, total_dissolved_solids_mg_l=1500.0)]
        by_quality = WaterConsumptionCalculator(freshwater_tds_threshold=2000.0).calculate(rows=rows)["by_quality"]
        assert by_quality["freshwater"] == 100.0

    def test_breakdown_labels(self) -> None:
        result = WaterConsumptionCalculator().calculate(rows=[_row(WaterSource.WELL, 10.0)])
        entry = result["breakdown"][0]
        assert entry["source_type"] == "well"
        assert entry["source_name"] == "Não informado"
        assert entry["quality"] == "Não informado"
        assert entry["period"] == "2025-01-01 a 2025-03-31"

    def test_volumes_rounded_to_three_decimals(self) -> None:
        result = WaterConsumptionCalculator().calculate(rows=[_row(WaterSource.WELL, 0.12345)])
        assert result["total_withdrawal_m3"] == 0.123

    def test_empty(self) -> None:
        empty = WaterConsumptionCalculator().empty()
        assert empty["total_withdrawal_m3"] == 0.0
        assert empty["breakdown"] == []


# ---------------------------------------------------------------------------
# Intensity
# ---------------------------------------------------------------------------


class TestWaterIntensity:
    def test_intensity_and_baseline(self) -> None:
        result = WaterIntensityCalculator().calculate(
            consumption_m3=1000.0,
            operational=[OperationalRow(production_volume=500.0, production_unit="t", revenue_brl=2_000_000.0)],
            previous_consumption_m3=1200.0,
            previous_operational=[OperationalRow(production_volume=400.0)],
        )
        assert result["intensity_per_production"] == 2.0
        assert result["intensity_per_revenue"] == 0.5
        assert result["production_unit"] == "t"
        assert result["baseline_intensity"] == 3.0
        assert result["is_improving"] is True
        assert result["improvement_percent"] == pytest.approx(33.33)

    def test_without_production(self) -> None:
        result = WaterIntensityCalculator().calculate(consumption_m3=1000.0, operational=[])
        assert result["intensity_per_production"] is None
        assert result["intensity_per_revenue"] is None
        assert result["production_volume"] is None
        assert result["is_improving"] is None

    def test_worsening_intensity(self) -> None:
        result = WaterIntensityCalculator().calculate(
            consumption_m3=1000.0,
            operational=[OperationalRow(production_volume=250.0)],
            previous_consumption_m3=1000.0,
            previous_operational=[OperationalRow(production_volume=500.0)],
        )
        assert result["is_improving"] is False
        assert result["improvement_percent"] == -100.0


# ---------------------------------------------------------------------------
# Reuse
# ---------------------------------------------------------------------------


class TestWaterReuse:
    def test_reuse_share_and_baseline(self) -> None:
        rows = [
            _row(WaterSource.REUSE, 25.0, reuse_application=ReuseApplication.COOLING),
            _row(WaterSource.PUBLIC_NETWORK, 75.0),
        ]
        previous = [_row(WaterSource.REUSE, 10.0), _row(WaterSource.PUBLIC_NETWORK, 90.0)]
        result = WaterReuseCalculator().calculate(rows=rows, previous_rows=previous)
        assert result["reuse_percentage"] == 25.0
        assert result["reuse_volume_m3"] == 25.0
        assert result["total_consumption_m3"] == 100.0
        assert result["baseline_reuse_percentage"] == 10.0
        assert result["is_improving"] is True
        assert result["improvement_percent"] == 15.0

    def test_reuse_by_type_defaults_to_other(self) -> None:
        rows = [
            _row(WaterSource.REUSE, 25.0, reuse_application=ReuseApplication.COOLING),
            _row(WaterSource.REUSE, 5.0),
        ]
        by_type = WaterReuseCalculator().calculate(rows=rows)["reuse_by_type"]
        assert by_type["cooling"] == 25.0
        assert by_type["other"] == 5.0
        assert by_type["irrigation"] == 0.0

    def test_no_previous_rows(self) -> None:
        result = WaterReuseCalculator().calculate(rows=[_row(WaterSource.WELL, 10.0)])
        assert result["reuse_percentage"] == 0.0
        assert result["baseline_reuse_percentage"] is None
        assert result["is_improving"] is None

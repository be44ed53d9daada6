"""
tests/test_economic_value.py

Pytest unit tests for EconomicValueDistributionCalculator (GRI 201-1).

Coverage
--------
- Generated / distributed / retained partition
- distributed.total equals the sum of the five buckets
- Percentages with a zero generated value (no exception, all 0)
- Community fallback to social project investment
- Compliance completeness and missing fields
- Comparison against the previous snapshot
"""

from __future__ import annotations

import pytest

from calculators.economic_value import EconomicValueDistributionCalculator
from calculators.records import EconomicRow

_BUCKETS = ("operational_costs", "employees", "capital_providers", "government", "community")


@pytest.fixture()
def calc() -> EconomicValueDistributionCalculator:
    return EconomicValueDistributionCalculator()


@pytest.fixture()
def snapshot() -> EconomicRow:
    return EconomicRow(
        revenue=1000.0,
        financial_income=100.0,
        operational_costs=400.0,
        employee_wages=200.0,
        employee_benefits=50.0,
        interest_payments=30.0,
        dividends=20.0,
        taxes=100.0,
    )


class TestPartition:
    def test_generated_value(self, calc, snapshot) -> None:
        result = calc.calculate(current=snapshot)
        assert result["generated"] == {
            "revenue": 1000.0,
            "financial_income": 100.0,
            "asset_sales": 0.0,
            "total": 1100.0,
        }

    def test_buckets(self, calc, snapshot) -> None:
        distributed = calc.calculate(current=snapshot)["distributed"]
        assert distributed["operational_costs"]["total"] == 400.0
        assert distributed["employees"]["total"] == 250.0
        assert distributed["employees"]["wages"] == 200.0
        assert distributed["capital_providers"]["total"] == 50.0
        assert distributed["government"]["total"] == 100.0

    def test_distributed_total_is_sum_of_buckets(self, calc, snapshot) -> None:
        distributed = calc.calculate(current=snapshot, social_project_investment=25.0)["distributed"]
        assert distributed["total"] == sum(distributed[name]["total"] for name in _BUCKETS)
        assert distributed["total"] == 825.0

    def test_retained_value_and_percentage(self, calc, snapshot) -> None:
        result = calc.calculate(current=snapshot, social_project_investment=25.0)
        assert result["retained"]["total"] == 275.0
        assert result["retained"]["percentage_of_generated"] == pytest.approx(25.0)
        assert result["distributed"]["percentage_of_generated"] == pytest.approx(75.0)

    def test_zero_generated_value_yields_zero_percentages(self, calc) -> None:
        result = calc.calculate(current=EconomicRow(operational_costs=100.0))
        assert result["generated"]["total"] == 0.0
        assert result["retained"]["total"] == -100.0
        assert result["retained"]["percentage_of_generated"] == 0.0
        for name in _BUCKETS:
            assert result["distributed"][name]["percentage_of_generated"] == 0.0


class TestCommunityFallback:
    def test_null_field_falls_back_to_social_projects(self, calc, snapshot) -> None:
        community = calc.calculate(current=snapshot, social_project_investment=25.0)["distributed"]["community"]
        assert community["total"] == 25.0
        assert community["source"] == "social_projects"

    def test_explicit_zero_is_not_replaced(self, calc) -> None:
        row = EconomicRow(revenue=500.0, community_investments=0.0)
        community = calc.calculate(current=row, social_project_investment=25.0)["distributed"]["community"]
        assert community["total"] == 0.0
        assert community["source"] == "economic_data"

    def test_no_source_at_all(self, calc, snapshot) -> None:
        community = calc.calculate(current=snapshot)["distributed"]["community"]
        assert community["total"] == 0.0
        assert community["source"] == "none"


class TestCompliance:
    def test_all_required_fields_filled(self, calc, snapshot) -> None:
        compliance = calc.calculate(current=snapshot)["compliance"]
        assert compliance == {
            "is_compliant": True,
            "completeness_percentage": 100.0,
            "missing_fields": [],
        }

    def test_three_of_four_is_compliant(self, calc) -> None:
        row = EconomicRow(revenue=1.0, operational_costs=1.0, employee_wages=1.0)
        compliance = calc.calculate(current=row)["compliance"]
        assert compliance["completeness_percentage"] == 75.0
        assert compliance["is_compliant"] is True
        assert compliance["missing_fields"] == ["taxes"]

    def test_half_filled_is_not_compliant(self, calc) -> None:
        row = EconomicRow(revenue=1.0, operational_costs=1.0)
        compliance = calc.calculate(current=row)["compliance"]
        assert compliance["completeness_percentage"] == 50.0
        assert compliance["is_compliant"] is False
        assert compliance["missing_fields"] == ["employee_wages", "taxes"]


class TestComparison:
    def test_against_previous_snapshot(self, calc, snapshot) -> None:
        comparison = calc.calculate(current=snapshot, previous=EconomicRow(revenue=1000.0))["comparison"]
        assert comparison["previous_value"] == 1000.0
        assert comparison["absolute_change"] == 100.0
        assert comparison["change_percentage"] == 10.0
        assert comparison["is_improving"] is True

    def test_without_previous_snapshot(self, calc, snapshot) -> None:
        comparison = calc.calculate(current=snapshot)["comparison"]
        assert comparison["change_percentage"] is None
        assert comparison["is_improving"] is None

    def test_previous_generated_zero(self, calc, snapshot) -> None:
        comparison = calc.calculate(current=snapshot, previous=EconomicRow())["comparison"]
        assert comparison["previous_value"] == 0.0
        assert comparison["change_percentage"] is None


class TestEmpty:
    def test_empty_is_zero_filled(self, calc) -> None:
        empty = calc.empty()
        assert empty["generated"]["total"] == 0.0
        assert empty["distributed"]["total"] == 0.0
        assert empty["compliance"]["is_compliant"] is False

    def test_idempotent(self, calc, snapshot) -> None:
        assert calc.calculate(current=snapshot) == calc.calculate(current=snapshot)

"""
tests/test_esg_score.py

Pytest unit tests for ESGScoreCalculator.

All tests are pure Python with literal inputs; no database is involved.

Coverage
--------
- No records anywhere → explicit zero result with has_data False
- Base scores and point deltas per pillar
- Floors on penalties
- Weighted overall score and tier label
- Pillars-with-data reporting, including rows with closed or draft status
- Idempotence
"""

from __future__ import annotations

import pytest

from calculators.esg_score import ESGScoreCalculator
from calculators.records import ESGScoreInputs


@pytest.fixture()
def calc() -> ESGScoreCalculator:
    return ESGScoreCalculator()


class TestNoData:
    def test_zero_records_returns_explicit_zero_result(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(inputs=ESGScoreInputs())
        assert result == {
            "overall": 0,
            "environmental": 0,
            "social": 0,
            "governance": 0,
            "has_data": False,
        }

    def test_empty_matches_no_data_result(self, calc: ESGScoreCalculator) -> None:
        assert calc.empty() == calc.calculate(inputs=ESGScoreInputs())

    @pytest.mark.parametrize(
        ("inputs", "pillar"),
        [
            (ESGScoreInputs(environmental_records=1), "environmental"),
            (ESGScoreInputs(social_records=4), "social"),
            (ESGScoreInputs(governance_records=2), "governance"),
        ],
    )
    def test_rows_without_qualifying_status_still_count(
        self, calc: ESGScoreCalculator, inputs: ESGScoreInputs, pillar: str
    ) -> None:
        result = calc.calculate(inputs=inputs)
        assert result["has_data"] is True
        assert result["pillars_with_data"] == [pillar]


class TestEnvironmental:
    def test_inventory_and_active_license(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(inputs=ESGScoreInputs(emission_sources=3, active_licenses=1))
        assert result["environmental"] == 75
        assert result["pillars_with_data"] == ["environmental"]

    def test_goal_progress_bonus_is_capped(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(
                emission_sources=1,
                active_licenses=1,
                goals=2,
                average_goal_progress=250.0,
            )
        )
        # 50 + 10 + 15 + 5 + min(25, 10)
        assert result["environmental"] == 90

    def test_expired_license_penalty_has_floor(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(inputs=ESGScoreInputs(expired_licenses=10))
        assert result["environmental"] == 20


class TestSocial:
    def test_training_projects_and_incidents(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(
                employees=10,
                completed_trainings=5,
                active_social_projects=2,
                incidents=3,
                critical_incidents=1,
            )
        )
        # 60 + 5 (trainings) + 6 (projects) - 10 (critical) - 4 (two minor)
        assert result["social"] == 57

    def test_critical_incident_penalty_has_floor(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(inputs=ESGScoreInputs(incidents=10, critical_incidents=10))
        assert result["social"] == 20


class TestGovernance:
    def test_policies_audits_and_risk_register(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(active_policies=2, completed_audits=1, risks=4)
        )
        assert result["governance"] == 80

    def test_critical_risks_and_open_non_conformities(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(risks=5, critical_risks=5, open_non_conformities=10)
        )
        # 55 + 5 - 30 - 20
        assert result["governance"] == 10


class TestOverall:
    def test_weighted_overall_and_tier(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(inputs=ESGScoreInputs(emission_sources=3, active_licenses=1))
        # round(75 * 0.33 + 60 * 0.33 + 55 * 0.34) = round(63.25)
        assert result["overall"] == 63
        assert result["classification"] == "Bom"
        assert result["has_data"] is True

    def test_heavily_penalised_company_is_critical(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(
                expired_licenses=10,
                incidents=10,
                critical_incidents=10,
                risks=5,
                critical_risks=5,
            )
        )
        assert result["overall"] == 23
        assert result["classification"] == "Crítico"
        assert result["pillars_with_data"] == ["environmental", "social", "governance"]

    def test_pillars_are_integers_in_range(self, calc: ESGScoreCalculator) -> None:
        result = calc.calculate(
            inputs=ESGScoreInputs(emission_sources=1, employees=1, completed_trainings=50)
        )
        for pillar in ("environmental", "social", "governance", "overall"):
            assert isinstance(result[pillar], int)
            assert 0 <= result[pillar] <= 100


class TestIdempotence:
    def test_same_inputs_same_result(self, calc: ESGScoreCalculator) -> None:
        inputs = ESGScoreInputs(emission_sources=2, employees=4, completed_trainings=3, risks=1)
        assert calc.calculate(inputs=inputs) == calc.calculate(inputs=inputs)

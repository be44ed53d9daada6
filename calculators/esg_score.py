"""
calculators/esg_score.py

ESG pillar score heuristics.

Each pillar starts from a fixed base score and moves by fixed point deltas
keyed to the presence and counts of related records. Pillars are clamped to
[0, 100] and rounded; the overall score weights them 33/33/34.

Environmental (base 50)
    +10  emission inventory exists (any emission source)
    +15  at least one active license
    -10  per expired license                  (floor -30)
    +5   goals registered
    +progress/10 average goal progress         (cap +10)

Social (base 60)
    +completed trainings per employee x 10     (cap +15)
    -10  per critical incident                 (floor -40)
    -2   per non-critical incident             (floor -10)
    +3   per active social project             (cap +15)

Governance (base 55)
    +10  at least one active policy
    +10  at least one completed audit
    +5   risk register in use
    -10  per critical risk                     (floor -30)
    -5   per open non-conformity               (floor -20)

A tenant with no records in any pillar gets an explicit all-zero result
with ``has_data = False`` rather than the base scores. Presence is decided
from every row of a pillar, closed or draft rows included.
"""

from __future__ import annotations

from typing import Any

from calculators.base import BaseMetricCalculator
from calculators.common import (
    TIER_ATTENTION,
    TIER_EXCELLENT,
    TIER_GOOD,
    clamp,
    classify_at_least,
)
from calculators.records import ESGScoreInputs

_SCORE_TIERS: tuple[tuple[float, str], ...] = (
    (80, TIER_EXCELLENT),
    (60, TIER_GOOD),
    (40, TIER_ATTENTION),
)


class ESGScoreCalculator(BaseMetricCalculator):
    """Deterministic pillar scoring over per-tenant record counts."""

    name = "esg_score"

    ENVIRONMENTAL_WEIGHT: float = 0.33
    SOCIAL_WEIGHT: float = 0.33
    GOVERNANCE_WEIGHT: float = 0.34

    ENVIRONMENTAL_BASE: float = 50.0
    SOCIAL_BASE: float = 60.0
    GOVERNANCE_BASE: float = 55.0

    def calculate(self, *, inputs: ESGScoreInputs) -> dict[str, Any]:
        pillars_with_data = [
            pillar
            for pillar, present in (
                ("environmental", _has_environmental_data(inputs)),
                ("social", _has_social_data(inputs)),
                ("governance", _has_governance_data(inputs)),
            )
            if present
        ]
        if not pillars_with_data:
            return self.empty()

        environmental = self._environmental(inputs)
        social = self._social(inputs)
        governance = self._governance(inputs)
        overall = round(
            environmental * self.ENVIRONMENTAL_WEIGHT
            + social * self.SOCIAL_WEIGHT
            + governance * self.GOVERNANCE_WEIGHT
        )

        return {
            "overall": overall,
            "environmental": environmental,
            "social": social,
            "governance": governance,
            "has_data": True,
            "classification": classify_at_least(overall, _SCORE_TIERS),
            "pillars_with_data": pillars_with_data,
        }

    def empty(self) -> dict[str, Any]:
        return {
            "overall": 0,
            "environmental": 0,
            "social": 0,
            "governance": 0,
            "has_data": False,
        }

    # ------------------------------------------------------------------
    # Pillars
    # ------------------------------------------------------------------

    def _environmental(self, data: ESGScoreInputs) -> int:
        score = self.ENVIRONMENTAL_BASE
        if data.emission_sources > 0:
            score += 10
        if data.active_licenses > 0:
            score += 15
        score -= min(data.expired_licenses * 10, 30)
        if data.goals > 0:
            score += 5
            score += min(max(data.average_goal_progress, 0.0) / 10, 10)
        return _finalise(score)

    def _social(self, data: ESGScoreInputs) -> int:
        score = self.SOCIAL_BASE
        if data.employees > 0:
            score += min(data.completed_trainings / data.employees * 10, 15)
        non_critical = max(data.incidents - data.critical_incidents, 0)
        score -= min(data.critical_incidents * 10, 40)
        score -= min(non_critical * 2, 10)
        score += min(data.active_social_projects * 3, 15)
        return _finalise(score)

    def _governance(self, data: ESGScoreInputs) -> int:
        score = self.GOVERNANCE_BASE
        if data.active_policies > 0:
            score += 10
        if data.completed_audits > 0:
            score += 10
        if data.risks > 0:
            score += 5
        score -= min(data.critical_risks * 10, 30)
        score -= min(data.open_non_conformities * 5, 20)
        return _finalise(score)


def _finalise(score: float) -> int:
    return int(round(clamp(score, 0.0, 100.0)))


def _has_environmental_data(data: ESGScoreInputs) -> bool:
    return any(
        (
            data.environmental_records,
            data.emission_sources,
            data.active_licenses,
            data.expired_licenses,
            data.goals,
        )
    )


def _has_social_data(data: ESGScoreInputs) -> bool:
    return any(
        (
            data.social_records,
            data.employees,
            data.completed_trainings,
            data.incidents,
            data.active_social_projects,
        )
    )


def _has_governance_data(data: ESGScoreInputs) -> bool:
    return any(
        (
            data.governance_records,
            data.risks,
            data.open_non_conformities,
            data.active_policies,
            data.completed_audits,
        )
    )

"""
calculators/economic_value.py

GRI 201-1: direct economic value generated and distributed.

Formulas
--------
Generated            = revenue + financial_income + asset_sales
Operational costs    = operational_costs
Employees            = employee_wages + employee_benefits
Capital providers    = interest_payments + dividends
Government           = taxes
Community            = community_investments
                       (falls back to social project investment when the
                       field was never filled)
Distributed          = sum of the five buckets above
Retained             = Generated - Distributed

Every ``percentage_of_generated`` uses Generated as the denominator and is
``0`` when Generated is zero.

Values are not rounded so that ``distributed.total`` is exactly the sum of
its buckets.
"""

from __future__ import annotations

from typing import Any

from calculators.base import BaseMetricCalculator
from calculators.common import compare_periods, percentage, value_or_zero
from calculators.records import EconomicRow

REQUIRED_FIELDS: tuple[str, ...] = (
    "revenue",
    "operational_costs",
    "employee_wages",
    "taxes",
)
COMPLIANCE_THRESHOLD_PERCENT = 75.0

COMMUNITY_SOURCE_ECONOMIC_DATA = "economic_data"
COMMUNITY_SOURCE_SOCIAL_PROJECTS = "social_projects"
COMMUNITY_SOURCE_NONE = "none"


class EconomicValueDistributionCalculator(BaseMetricCalculator):
    """Partitions one economic-data snapshot into stakeholder buckets."""

    name = "economic_value_distribution"

    def calculate(
        self,
        *,
        current: EconomicRow,
        social_project_investment: float = 0.0,
        previous: EconomicRow | None = None,
    ) -> dict[str, Any]:
        generated = _generated(current)
        generated_total = generated["total"]

        community_total, community_source = _community(current, social_project_investment)
        buckets: dict[str, dict[str, Any]] = {
            "operational_costs": {"total": value_or_zero(current.operational_costs)},
            "employees": {
                "wages": value_or_zero(current.employee_wages),
                "benefits": value_or_zero(current.employee_benefits),
            },
            "capital_providers": {
                "interest": value_or_zero(current.interest_payments),
                "dividends": value_or_zero(current.dividends),
            },
            "government": {"total": value_or_zero(current.taxes)},
            "community": {"total": community_total, "source": community_source},
        }
        buckets["employees"]["total"] = buckets["employees"]["wages"] + buckets["employees"]["benefits"]
        buckets["capital_providers"]["total"] = (
            buckets["capital_providers"]["interest"] + buckets["capital_providers"]["dividends"]
        )

        distributed_total = sum(bucket["total"] for bucket in buckets.values())
        for bucket in buckets.values():
            bucket["percentage_of_generated"] = percentage(bucket["total"], generated_total)

        retained_total = generated_total - distributed_total
        previous_generated = _generated(previous)["total"] if previous is not None else None

        return {
            "generated": generated,
            "distributed": {
                **buckets,
                "total": distributed_total,
                "percentage_of_generated": percentage(distributed_total, generated_total),
            },
            "retained": {
                "total": retained_total,
                "percentage_of_generated": percentage(retained_total, generated_total),
            },
            "compliance": _compliance(current),
            "comparison": compare_periods(generated_total, previous_generated),
        }

    def empty(self) -> dict[str, Any]:
        zero_bucket = {"total": 0.0, "percentage_of_generated": 0.0}
        return {
            "generated": {"revenue": 0.0, "financial_income": 0.0, "asset_sales": 0.0, "total": 0.0},
            "distributed": {
                "operational_costs": dict(zero_bucket),
                "employees": {"wages": 0.0, "benefits": 0.0, **zero_bucket},
                "capital_providers": {"interest": 0.0, "dividends": 0.0, **zero_bucket},
                "government": dict(zero_bucket),
                "community": {"source": COMMUNITY_SOURCE_NONE, **zero_bucket},
                "total": 0.0,
                "percentage_of_generated": 0.0,
            },
            "retained": dict(zero_bucket),
            "compliance": {
                "is_compliant": False,
                "completeness_percentage": 0.0,
                "missing_fields": list(REQUIRED_FIELDS),
            },
            "comparison": compare_periods(0.0, None),
        }


def _generated(row: EconomicRow) -> dict[str, float]:
    revenue = value_or_zero(row.revenue)
    financial_income = value_or_zero(row.financial_income)
    asset_sales = value_or_zero(row.asset_sales)
    return {
        "revenue": revenue,
        "financial_income": financial_income,
        "asset_sales": asset_sales,
        "total": revenue + financial_income + asset_sales,
    }


def _community(row: EconomicRow, social_project_investment: float) -> tuple[float, str]:
    if row.community_investments is not None:
        return float(row.community_investments), COMMUNITY_SOURCE_ECONOMIC_DATA
    if social_project_investment > 0:
        return float(social_project_investment), COMMUNITY_SOURCE_SOCIAL_PROJECTS
    return 0.0, COMMUNITY_SOURCE_NONE


def _compliance(row: EconomicRow) -> dict[str, Any]:
    missing = [name for name in REQUIRED_FIELDS if not getattr(row, name)]
    completeness = (len(REQUIRED_FIELDS) - len(missing)) / len(REQUIRED_FIELDS) * 100
    return {
        "is_compliant": completeness >= COMPLIANCE_THRESHOLD_PERCENT,
        "completeness_percentage": completeness,
        "missing_fields": missing,
    }

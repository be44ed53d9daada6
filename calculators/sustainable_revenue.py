"""
calculators/sustainable_revenue.py

Share of revenue earned from sustainable product lines.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.domain.categories import RevenueSustainabilityCategory
from calculators.base import BaseMetricCalculator
from calculators.common import (
    TIER_ATTENTION,
    TIER_EXCELLENT,
    TIER_GOOD,
    classify_at_least,
    compare_periods,
    percentage,
    value_or_zero,
)
from calculators.records import RevenueRow

# Inclusive lower bounds on the sustainable share (%).
SHARE_TIERS: tuple[tuple[float, str], ...] = (
    (50, TIER_EXCELLENT),
    (25, TIER_GOOD),
    (10, TIER_ATTENTION),
)


def _totals(rows: Sequence[RevenueRow]) -> tuple[float, float, dict[RevenueSustainabilityCategory, float]]:
    by_category = {category: 0.0 for category in RevenueSustainabilityCategory}
    for row in rows:
        by_category[row.category] += value_or_zero(row.amount)
    total = sum(by_category.values())
    sustainable = sum(amount for category, amount in by_category.items() if category.is_sustainable)
    return total, sustainable, by_category


class SustainableRevenueCalculator(BaseMetricCalculator):
    name = "sustainable_revenue"

    def calculate(
        self,
        *,
        rows: Sequence[RevenueRow],
        previous_rows: Sequence[RevenueRow] | None = None,
    ) -> dict[str, Any]:
        total, sustainable, by_category = _totals(rows)
        share = percentage(sustainable, total)

        previous_share = None
        if previous_rows is not None:
            previous_total, previous_sustainable, _ = _totals(previous_rows)
            previous_share = percentage(previous_sustainable, previous_total)

        product_lines: dict[str, float] = {}
        for row in rows:
            if row.category.is_sustainable:
                line = row.product_line or row.category.value
                product_lines[line] = product_lines.get(line, 0.0) + value_or_zero(row.amount)

        return {
            "total_revenue": round(total, 2),
            "sustainable_revenue": round(sustainable, 2),
            "sustainable_percentage": round(share, 2),
            "by_category": {
                category.value: {
                    "amount": round(amount, 2),
                    "percentage": round(percentage(amount, total), 2),
                }
                for category, amount in by_category.items()
            },
            "top_product_lines": [
                {"product_line": line, "amount": round(amount, 2)}
                for line, amount in sorted(product_lines.items(), key=lambda item: (-item[1], item[0]))[:5]
            ],
            "classification": classify_at_least(share, SHARE_TIERS),
            "comparison": compare_periods(share, previous_share),
        }

    def empty(self) -> dict[str, Any]:
        return self.calculate(rows=())

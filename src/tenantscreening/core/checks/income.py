"""Income-to-housing-cost check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import ScreeningCriteria, ScreeningReport


@dataclass
class IncomeConfig:
    """Partial credit granted when income falls a little short."""

    partial_ratio: float = 0.75
    partial_credit: float = 0.6


class IncomeCheck:
    """Compare monthly income with rent, or with the estimated mortgage payment."""

    category = "income"

    def __init__(self, *, config: IncomeConfig | None = None) -> None:
        self._config = config or IncomeConfig()

    def evaluate(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        multiplier = criteria.min_income_multiplier
        income = context.get("buyer_monthly_income") or 0
        if multiplier <= 0:
            return {"category": self.category, "required": False, "detail": "not required"}
        if income <= 0:
            return {"category": self.category, "required": False, "detail": "income not provided"}

        listing_type = context.get("listing_type", "rent")
        mortgage = context.get("mortgage_estimate")
        if listing_type == "sale":
            cost = mortgage.monthly_payment if mortgage is not None else 0
            cost_label = f"mortgage payment of ${cost:,}"
        else:
            cost = context.get("listing_price") or 0
            cost_label = "rent"
        if cost <= 0:
            return {"category": self.category, "required": False, "detail": "no housing cost to compare"}

        ratio = income / cost
        passed = ratio >= multiplier
        if passed:
            credit = 1.0
        elif ratio >= multiplier * self._config.partial_ratio:
            credit = self._config.partial_credit
        else:
            credit = 0.0

        return {
            "category": self.category,
            "required": True,
            "passed": passed,
            "credit": credit,
            "detail": (
                f"Monthly income: ${income:,.0f}, {ratio:.1f}x {cost_label} "
                f"(min: {multiplier:g}x)"
            ),
            "metadata": {"ratio": ratio, "monthly_cost": cost, "listing_type": listing_type},
        }

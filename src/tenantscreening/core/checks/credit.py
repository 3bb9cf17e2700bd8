"""Credit score check with partial credit for near misses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import ScreeningCriteria, ScreeningReport


@dataclass
class CreditScoreConfig:
    """Configuration for credit score matching."""

    partial_credit_window: int = 50


class CreditScoreCheck:
    """Compare the reported credit score with the listing minimum."""

    category = "credit_score"

    def __init__(self, *, config: CreditScoreConfig | None = None) -> None:
        self._config = config or CreditScoreConfig()

    def evaluate(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        minimum = criteria.min_credit_score
        score = report.credit_score
        if minimum <= 0:
            return {"category": self.category, "required": False, "detail": "not required"}

        passed = score >= minimum
        deficit = max(0, minimum - score)
        window = self._config.partial_credit_window
        if passed:
            credit = 1.0
        elif window > 0 and deficit <= window:
            credit = 1 - deficit / window
        else:
            credit = 0.0

        return {
            "category": self.category,
            "required": True,
            "passed": passed,
            "credit": credit,
            "detail": f"Score: {score} (min: {minimum})",
            "metadata": {"deficit": deficit, "partial_credit_window": window},
        }

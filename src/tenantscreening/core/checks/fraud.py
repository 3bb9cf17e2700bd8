"""Fraud risk check, applied whenever the report carries a score."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import ScreeningCriteria, ScreeningReport


@dataclass
class FraudConfig:
    """Highest risk score (0-10 scale) still considered low risk."""

    max_risk_score: float = 3.0


class FraudCheck:
    """Flag applicants whose fraud risk score exceeds the tolerated maximum."""

    category = "fraud"

    def __init__(self, *, config: FraudConfig | None = None) -> None:
        self._config = config or FraudConfig()

    def evaluate(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        score = report.fraud_risk_score
        if score is None:
            return {"category": self.category, "required": False, "detail": "not checked"}

        passed = score <= self._config.max_risk_score
        label = "Low" if passed else "High"
        return {
            "category": self.category,
            "required": True,
            "passed": passed,
            "credit": 1.0 if passed else 0.0,
            "detail": f"{label} fraud risk ({score:g}/10)",
            "metadata": {"max_risk_score": self._config.max_risk_score},
        }

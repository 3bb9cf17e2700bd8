"""Pure scoring components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import ScreeningCriteria, ScreeningReport

# NOTE: keep imports explicit for export clarity.
from .mortgage import MortgageConfig, MortgageEstimate, estimate_mortgage
from .scoring import BreakdownItem, CheckResult, MatchResult, ScoreCalculator
from .checks import CreditScoreCheck, FraudCheck, IncomeCheck, RecordCheck


@runtime_checkable
class Check(Protocol):
    """Category check contract used by the score calculator."""

    category: str

    def evaluate(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        """Return the category outcome for a report under the listing criteria."""


__all__ = [
    "BreakdownItem",
    "Check",
    "CheckResult",
    "CreditScoreCheck",
    "FraudCheck",
    "IncomeCheck",
    "MatchResult",
    "MortgageConfig",
    "MortgageEstimate",
    "RecordCheck",
    "ScoreCalculator",
    "estimate_mortgage",
]

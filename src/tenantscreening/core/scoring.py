"""Weighted match scoring of a screening report against listing criteria."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Literal

from ..schemas import ListingType, ScreeningCriteria, ScreeningReport, WantedPersonMatch
from .checks import (
    CreditScoreCheck,
    FraudCheck,
    IncomeCheck,
    bankruptcy_check,
    criminal_check,
    evictions_check,
)
from .mortgage import MortgageConfig, MortgageEstimate, estimate_with_config
from .rounding import round_half_up

MatchColor = Literal["green", "yellow", "red"]

WANTED_CATEGORY = "wanted_persons"


@dataclass(slots=True)
class CheckResult:
    """Normalized check output."""

    category: str
    required: bool
    passed: bool
    credit: float
    detail: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BreakdownItem:
    """Per-category line of the match breakdown."""

    passed: bool
    detail: str
    points: int = 0
    max_points: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchResult:
    """Match of one applicant's report against one listing."""

    match_score: int
    match_color: MatchColor
    match_breakdown: dict[str, BreakdownItem]
    total_points: int
    earned_points: int
    mortgage_estimate: MortgageEstimate | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        if self.mortgage_estimate is None:
            payload.pop("mortgage_estimate")
        return payload


class ScoreCalculator:
    """Combine category checks into a single 0-100 score and color tier.

    A category only counts toward the denominator when the listing asks for
    it, so with nothing required every applicant scores 100. A wanted-persons
    match forces 0/red regardless of every other category.
    """

    DEFAULT_WEIGHTS: dict[str, int] = {
        "credit_score": 25,
        "income": 25,
        "criminal": 15,
        "evictions": 20,
        "bankruptcy": 10,
        "fraud": 5,
    }

    DEFAULT_THRESHOLDS: dict[str, int] = {
        "green": 80,
        "yellow": 60,
    }

    def __init__(
        self,
        checks: Iterable[Any] | None = None,
        *,
        score_weights: dict[str, int] | None = None,
        thresholds: dict[str, int] | None = None,
        mortgage: MortgageConfig | None = None,
    ) -> None:
        self._checks = list(checks) if checks is not None else default_checks()
        self._score_weights = {**self.DEFAULT_WEIGHTS, **(score_weights or {})}
        self._thresholds = {**self.DEFAULT_THRESHOLDS, **(thresholds or {})}
        self._mortgage = mortgage or MortgageConfig()

    def score(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        *,
        buyer_monthly_income: float | None = None,
        listing_price: float | None = None,
        listing_type: ListingType = "rent",
    ) -> MatchResult:
        mortgage_estimate = None
        if listing_type == "sale" and listing_price:
            mortgage_estimate = estimate_with_config(listing_price, self._mortgage)

        context = {
            "buyer_monthly_income": buyer_monthly_income,
            "listing_price": listing_price,
            "listing_type": listing_type,
            "mortgage_estimate": mortgage_estimate,
        }
        results = [
            self._normalize_check_result(check.evaluate(report, criteria, context))
            for check in self._checks
        ]

        wanted = report.wanted_person_match
        if wanted.matched:
            return self._hard_fail(results, wanted, mortgage_estimate)

        breakdown: dict[str, BreakdownItem] = {}
        total_points = 0
        earned_points = 0
        for result in results:
            item = self._weigh(result)
            breakdown[result.category] = item
            total_points += item.max_points
            earned_points += item.points
        breakdown[WANTED_CATEGORY] = BreakdownItem(passed=True, detail=_wanted_detail(wanted))

        match_score = (
            round_half_up(100 * earned_points / total_points) if total_points > 0 else 100
        )
        return MatchResult(
            match_score=match_score,
            match_color=self._color(match_score),
            match_breakdown=breakdown,
            total_points=total_points,
            earned_points=earned_points,
            mortgage_estimate=mortgage_estimate,
        )

    @staticmethod
    def _normalize_check_result(payload: dict[str, Any]) -> CheckResult:
        category = payload.get("category")
        if category is None:
            raise ValueError("Check result must include 'category'.")
        required = bool(payload.get("required", False))
        return CheckResult(
            category=str(category),
            required=required,
            passed=bool(payload.get("passed", True)) if required else True,
            credit=min(max(float(payload.get("credit", 0.0)), 0.0), 1.0),
            detail=str(payload.get("detail", "")),
            metadata=dict(payload.get("metadata") or {}),
        )

    def _weigh(self, result: CheckResult) -> BreakdownItem:
        if not result.required:
            return BreakdownItem(passed=True, detail=result.detail, metadata=result.metadata)
        weight = int(self._score_weights.get(result.category, 0))
        points = weight if result.passed else min(weight, round_half_up(weight * result.credit))
        return BreakdownItem(
            passed=result.passed,
            detail=result.detail,
            points=points,
            max_points=weight,
            metadata=result.metadata,
        )

    def _hard_fail(
        self,
        results: list[CheckResult],
        wanted: WantedPersonMatch,
        mortgage_estimate: MortgageEstimate | None,
    ) -> MatchResult:
        breakdown: dict[str, BreakdownItem] = {}
        total_points = 0
        for result in results:
            max_points = self._weigh(result).max_points
            total_points += max_points
            breakdown[result.category] = BreakdownItem(
                passed=False,
                detail="Overridden: wanted-persons registry match",
                points=0,
                max_points=max_points,
                metadata=result.metadata,
            )
        breakdown[WANTED_CATEGORY] = BreakdownItem(passed=False, detail=_wanted_detail(wanted))
        return MatchResult(
            match_score=0,
            match_color="red",
            match_breakdown=breakdown,
            total_points=total_points,
            earned_points=0,
            mortgage_estimate=mortgage_estimate,
        )

    def _color(self, score: int) -> MatchColor:
        if score >= self._thresholds["green"]:
            return "green"
        if score >= self._thresholds["yellow"]:
            return "yellow"
        return "red"


def default_checks() -> list[Any]:
    return [
        CreditScoreCheck(),
        IncomeCheck(),
        criminal_check(),
        evictions_check(),
        bankruptcy_check(),
        FraudCheck(),
    ]


def _wanted_detail(wanted: WantedPersonMatch) -> str:
    if wanted.matched:
        summaries = [entry.description or entry.name for entry in wanted.matches]
        listed = "; ".join(summary for summary in summaries if summary)
        detail = f"{wanted.match_count} registry match(es) for '{wanted.searched_name}'"
        return f"{detail}: {listed}" if listed else detail
    if wanted.status == "clear":
        return f"No registry match for '{wanted.searched_name}'"
    if wanted.status == "unavailable":
        return "Registry lookup unavailable; no match recorded"
    return "Registry not checked"

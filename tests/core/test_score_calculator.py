from __future__ import annotations

from typing import Any

import pytest

from tenantscreening.core import ScoreCalculator
from tenantscreening.schemas import (
    ScreeningCriteria,
    ScreeningReport,
    WantedPersonEntry,
    WantedPersonMatch,
)


def build_report(**kwargs: Any) -> ScreeningReport:
    defaults: dict[str, Any] = {
        "applicant_id": "A-001",
        "credit_score": 720,
        "evictions": 0,
        "bankruptcies": 0,
        "criminal_offenses": 0,
        "fraud_risk_score": 1,
        "wanted_person_match": WantedPersonMatch(searched_name="Maria Garcia", status="clear"),
    }
    defaults.update(kwargs)
    return ScreeningReport(**defaults)


def strict_criteria(**kwargs: Any) -> ScreeningCriteria:
    defaults: dict[str, Any] = {
        "min_credit_score": 650,
        "no_evictions": True,
        "no_bankruptcy": True,
        "no_criminal": True,
    }
    defaults.update(kwargs)
    return ScreeningCriteria(**defaults)


def wanted_match() -> WantedPersonMatch:
    return WantedPersonMatch(
        matched=True,
        match_count=1,
        searched_name="Maria Garcia",
        matches=[WantedPersonEntry(name="MARIA GARCIA", description="Wire Fraud")],
        status="matched",
    )


def test_clean_report_scores_green():
    result = ScoreCalculator().score(build_report(), strict_criteria())

    assert result.match_score == 100
    assert result.match_color == "green"
    assert result.earned_points == result.total_points == 75
    assert result.match_breakdown["credit_score"].detail == "Score: 720 (min: 650)"
    assert result.match_breakdown["criminal"].detail == "No criminal record"
    assert result.match_breakdown["fraud"].detail == "Low fraud risk (1/10)"


def test_credit_fifty_below_minimum_earns_nothing_for_credit():
    result = ScoreCalculator().score(build_report(credit_score=600), strict_criteria())

    credit = result.match_breakdown["credit_score"]
    assert credit.passed is False
    assert (credit.points, credit.max_points) == (0, 25)
    assert (result.earned_points, result.total_points) == (50, 75)
    assert result.match_score == 67
    assert result.match_color == "yellow"


def test_credit_partial_credit_inside_the_window():
    calculator = ScoreCalculator()
    criteria = ScreeningCriteria(min_credit_score=650)

    def credit_points(score: int) -> int:
        return calculator.score(build_report(credit_score=score), criteria).match_breakdown["credit_score"].points

    assert credit_points(625) == 13
    assert credit_points(640) == 20
    assert credit_points(600) == 0
    assert credit_points(599) == 0
    assert credit_points(650) == 25


def test_credit_points_are_monotonic_and_saturate():
    calculator = ScoreCalculator()
    criteria = ScreeningCriteria(min_credit_score=700)

    points = [
        calculator.score(build_report(credit_score=score), criteria).match_breakdown["credit_score"].points
        for score in range(300, 851, 5)
    ]

    assert points == sorted(points)
    assert max(points) == 25
    assert points[-1] == 25


def test_no_criteria_scores_one_hundred():
    calculator = ScoreCalculator()

    with_fraud = calculator.score(build_report(credit_score=300, evictions=3), ScreeningCriteria())
    without_fraud = calculator.score(build_report(fraud_risk_score=None), ScreeningCriteria())

    assert with_fraud.match_score == 100
    assert with_fraud.total_points == 5
    assert without_fraud.match_score == 100
    assert without_fraud.total_points == 0
    assert without_fraud.match_breakdown["fraud"].detail == "not checked"
    skipped = without_fraud.match_breakdown["evictions"]
    assert skipped.passed is True
    assert (skipped.points, skipped.max_points) == (0, 0)
    assert skipped.detail == "not required"


def test_record_categories_are_all_or_nothing():
    result = ScoreCalculator().score(
        build_report(evictions=2, bankruptcies=1, criminal_offenses=1),
        strict_criteria(),
    )

    assert result.match_breakdown["evictions"].detail == "2 eviction(s) found"
    assert result.match_breakdown["bankruptcy"].points == 0
    assert result.match_breakdown["criminal"].detail == "1 offense(s) found"
    assert (result.earned_points, result.total_points) == (30, 75)
    assert result.match_score == 40
    assert result.match_color == "red"


def test_high_fraud_score_fails_fraud_category():
    result = ScoreCalculator().score(build_report(fraud_risk_score=7), ScreeningCriteria())

    fraud = result.match_breakdown["fraud"]
    assert fraud.passed is False
    assert fraud.detail == "High fraud risk (7/10)"
    assert result.match_score == 0


@pytest.mark.parametrize(
    ("income", "expected_points", "passed"),
    [(6000, 25, True), (5000, 15, False), (4000, 0, False)],
)
def test_rent_income_ratio(income: float, expected_points: int, passed: bool):
    result = ScoreCalculator().score(
        build_report(),
        ScreeningCriteria(min_income_multiplier=3),
        buyer_monthly_income=income,
        listing_price=2000,
    )

    item = result.match_breakdown["income"]
    assert item.points == expected_points
    assert item.max_points == 25
    assert item.passed is passed
    assert "mortgage_estimate" not in result.to_dict()


def test_income_skipped_without_stated_income():
    result = ScoreCalculator().score(
        build_report(),
        ScreeningCriteria(min_income_multiplier=3),
        listing_price=2000,
    )

    item = result.match_breakdown["income"]
    assert item.detail == "income not provided"
    assert item.max_points == 0


def test_sale_listing_compares_income_with_mortgage_payment():
    result = ScoreCalculator().score(
        build_report(),
        ScreeningCriteria(min_income_multiplier=3),
        buyer_monthly_income=5000,
        listing_price=300_000,
        listing_type="sale",
    )

    assert result.mortgage_estimate is not None
    assert result.mortgage_estimate.monthly_payment == 1597
    income = result.match_breakdown["income"]
    assert income.passed is True
    assert "mortgage payment of $1,597" in income.detail
    assert result.to_dict()["mortgage_estimate"]["loan_amount"] == 240_000


def test_wanted_match_forces_zero_red():
    result = ScoreCalculator().score(
        build_report(wanted_person_match=wanted_match()),
        strict_criteria(min_income_multiplier=3),
        buyer_monthly_income=9000,
        listing_price=2000,
    )

    assert result.match_score == 0
    assert result.match_color == "red"
    assert result.earned_points == 0
    assert result.total_points == 100
    for category, item in result.match_breakdown.items():
        assert item.passed is False, category
        assert item.points == 0
    assert result.match_breakdown["credit_score"].detail.startswith("Overridden")
    assert "Wire Fraud" in result.match_breakdown["wanted_persons"].detail


def test_wanted_status_is_reported_without_points():
    calculator = ScoreCalculator()

    clear = calculator.score(build_report(), strict_criteria()).match_breakdown["wanted_persons"]
    unavailable = calculator.score(
        build_report(wanted_person_match=WantedPersonMatch(searched_name="Maria Garcia", status="unavailable")),
        strict_criteria(),
    ).match_breakdown["wanted_persons"]

    assert clear.passed is True
    assert (clear.points, clear.max_points) == (0, 0)
    assert clear.detail == "No registry match for 'Maria Garcia'"
    assert unavailable.detail == "Registry lookup unavailable; no match recorded"


def test_score_is_deterministic():
    calculator = ScoreCalculator()
    report = build_report(credit_score=630, evictions=1)
    criteria = strict_criteria(min_income_multiplier=2.5)

    first = calculator.score(report, criteria, buyer_monthly_income=4200, listing_price=1800)
    second = calculator.score(report, criteria, buyer_monthly_income=4200, listing_price=1800)

    assert first.to_dict() == second.to_dict()


def test_weight_and_threshold_overrides():
    calculator = ScoreCalculator(score_weights={"fraud": 0}, thresholds={"yellow": 70})

    result = calculator.score(build_report(credit_score=600), strict_criteria())

    assert result.total_points == 70
    assert result.earned_points == 45
    assert result.match_score == 64
    assert result.match_color == "red"


def test_breakdown_carries_check_metadata():
    result = ScoreCalculator().score(
        build_report(credit_score=630, evictions=2),
        strict_criteria(min_income_multiplier=3),
        buyer_monthly_income=5000,
        listing_price=2000,
    )

    breakdown = result.to_dict()["match_breakdown"]
    assert breakdown["credit_score"]["metadata"]["deficit"] == 20
    assert breakdown["income"]["metadata"]["ratio"] == 2.5
    assert breakdown["income"]["metadata"]["monthly_cost"] == 2000
    assert breakdown["evictions"]["metadata"] == {"count": 2}
    assert breakdown["wanted_persons"]["metadata"] == {}

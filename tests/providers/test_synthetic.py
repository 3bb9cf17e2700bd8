from __future__ import annotations

import pendulum

from tenantscreening.providers import SyntheticConfig, SyntheticReportFactory
from tenantscreening.schemas import ApplicantIdentity

FIXED_NOW = pendulum.datetime(2026, 3, 1, 9, 30, 0, tz="UTC")


def build_applicant(applicant_id: str = "A-001") -> ApplicantIdentity:
    return ApplicantIdentity(applicant_id=applicant_id, first_name="Maria", last_name="Garcia")


def test_reports_follow_the_mock_policy():
    factory = SyntheticReportFactory(seed=3, now_provider=lambda: FIXED_NOW)
    bands = set(SyntheticConfig().credit_bands)

    reports = [factory.build(build_applicant(f"A-{index}")) for index in range(300)]

    for report in reports:
        assert report.source == "synthetic"
        assert report.credit_score in bands
        assert 0 <= report.evictions <= 2
        assert 0 <= report.criminal_offenses <= 2
        assert report.bankruptcies in (0, 1)
        assert report.fraud_risk_score in (0.0, 1.0, 2.0, 3.0)
        assert report.wanted_person_match.matched is False
        assert report.wanted_person_match.status == "not_checked"
        assert report.wanted_person_match.searched_name == "Maria Garcia"
        assert report.provider_request_ids == {}
        assert report.screened_at == FIXED_NOW.to_iso8601_string()

    assert bands == {report.credit_score for report in reports}
    assert any(report.evictions for report in reports)
    assert any(not report.identity_verified for report in reports)
    assert sum(report.identity_verified for report in reports) > 200


def test_same_seed_gives_same_reports():
    first = SyntheticReportFactory(seed=42, now_provider=lambda: FIXED_NOW)
    second = SyntheticReportFactory(seed=42, now_provider=lambda: FIXED_NOW)

    for index in range(20):
        applicant = build_applicant(f"A-{index}")
        assert first.build(applicant) == second.build(applicant)


def test_config_controls_probabilities():
    config = SyntheticConfig(
        credit_bands=(700,),
        eviction_probability=1.0,
        bankruptcy_probability=0.0,
        criminal_probability=0.0,
        identity_verified_probability=1.0,
        max_fraud_score=0,
    )
    report = SyntheticReportFactory(config=config, seed=1).build(build_applicant())

    assert report.credit_score == 700
    assert report.evictions in (1, 2)
    assert report.bankruptcies == 0
    assert report.criminal_offenses == 0
    assert report.identity_verified is True
    assert report.fraud_risk_score == 0.0

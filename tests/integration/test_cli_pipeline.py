from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tenantscreening.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def offline_provider(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("CRS_API_URL", "CRS_API_USERNAME", "CRS_API_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SYNTHETIC_SEED", "21")


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def write_applicant(path: Path) -> None:
    write_json(
        path,
        {
            "applicant_id": "A-CLI",
            "first_name": "Jordan",
            "last_name": "Lee",
            "date_of_birth": "1991-11-02",
            "address": {"line1": "42 Lake Ave", "city": "Denver", "state": "CO", "postal_code": "80202"},
        },
    )


def test_apply_screens_once_and_scores_every_listing(tmp_path: Path, runner: CliRunner) -> None:
    applicant_path = tmp_path / "applicant.json"
    listings_path = tmp_path / "listings.jsonl"
    output_path = tmp_path / "results.json"
    audit_path = tmp_path / "audit.jsonl"

    write_applicant(applicant_path)
    listings = [
        {"listing_id": "L-OPEN", "title": "Studio", "price": 1400},
        {
            "listing_id": "L-STRICT",
            "title": "Two bed",
            "price": 2100,
            "screening_criteria": {"min_credit_score": 640, "no_evictions": True, "min_income_multiplier": 3},
        },
        {
            "listing_id": "L-SALE",
            "listing_type": "sale",
            "price": 300000,
            "screening_criteria": {"min_income_multiplier": 3},
        },
    ]
    listings_path.write_text("\n".join(json.dumps(item) for item in listings), encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "apply",
            "--applicant",
            str(applicant_path),
            "--listings",
            str(listings_path),
            "--output",
            str(output_path),
            "--income",
            "6500",
            "--audit-log",
            str(audit_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    rendered = json.loads(output_path.read_text(encoding="utf-8"))

    assert rendered["metadata"]["applicant_id"] == "A-CLI"
    assert rendered["metadata"]["listing_count"] == 3
    assert rendered["metadata"]["errors"] == []
    assert rendered["report"]["source"] == "synthetic"
    assert rendered["report"]["wanted_person_match"]["status"] == "not_checked"

    by_listing = {entry["listing_id"]: entry for entry in rendered["results"]}
    assert set(by_listing) == {"L-OPEN", "L-STRICT", "L-SALE"}
    assert by_listing["L-OPEN"]["match_score"] == 100
    for entry in by_listing.values():
        assert 0 <= entry["match_score"] <= 100
        assert entry["match_color"] in {"green", "yellow", "red"}
        assert "wanted_persons" in entry["match_breakdown"]
    assert by_listing["L-SALE"]["mortgage_estimate"]["monthly_payment"] == 1597
    assert "mortgage_estimate" not in by_listing["L-STRICT"]

    audit_lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(audit_lines) == 4


def test_screen_then_match_reuses_stored_report(tmp_path: Path, runner: CliRunner) -> None:
    applicant_path = tmp_path / "applicant.json"
    report_path = tmp_path / "out" / "report.json"
    listing_path = tmp_path / "listing.json"
    match_path = tmp_path / "out" / "match.json"

    write_applicant(applicant_path)
    write_json(
        listing_path,
        {
            "listing_id": "L-1",
            "price": 1800,
            "screening_criteria": {"min_credit_score": 600, "no_bankruptcy": True},
        },
    )

    screened = runner.invoke(
        app,
        ["screen", "--applicant", str(applicant_path), "--output", str(report_path)],
    )
    assert screened.exit_code == 0, screened.stdout
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["applicant_id"] == "A-CLI"
    assert 300 <= report["credit_score"] <= 850

    matched = runner.invoke(
        app,
        [
            "match",
            "--report",
            str(report_path),
            "--listing",
            str(listing_path),
            "--output",
            str(match_path),
        ],
    )
    assert matched.exit_code == 0, matched.stdout
    first = json.loads(match_path.read_text(encoding="utf-8"))

    runner.invoke(
        app,
        ["match", "--report", str(report_path), "--listing", str(listing_path), "--output", str(match_path)],
    )
    second = json.loads(match_path.read_text(encoding="utf-8"))

    assert first == second
    assert first["listing_id"] == "L-1"
    assert set(first["match_breakdown"]) == {
        "credit_score",
        "income",
        "criminal",
        "evictions",
        "bankruptcy",
        "fraud",
        "wanted_persons",
    }


def test_config_overrides_thresholds(tmp_path: Path, runner: CliRunner) -> None:
    applicant_path = tmp_path / "applicant.json"
    listings_path = tmp_path / "listings.jsonl"
    output_path = tmp_path / "results.json"
    config_path = tmp_path / "config.yaml"

    write_applicant(applicant_path)
    listings_path.write_text(json.dumps({"listing_id": "L-1", "price": 1000}), encoding="utf-8")
    config_path.write_text(
        "core:\n  thresholds:\n    green: 101\n    yellow: 100\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "apply",
            "--applicant",
            str(applicant_path),
            "--listings",
            str(listings_path),
            "--output",
            str(output_path),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    entry = json.loads(output_path.read_text(encoding="utf-8"))["results"][0]
    assert entry["match_score"] == 100
    assert entry["match_color"] == "yellow"


def test_invalid_config_is_rejected(tmp_path: Path, runner: CliRunner) -> None:
    applicant_path = tmp_path / "applicant.json"
    config_path = tmp_path / "config.yaml"
    write_applicant(applicant_path)
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "screen",
            "--applicant",
            str(applicant_path),
            "--output",
            str(tmp_path / "report.json"),
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "report.json").exists()

"""Screening pipeline assembly and execution."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pendulum
import structlog
from pydantic import ValidationError

from . import __version__
from .aggregator import ReportAggregator
from .core import MatchResult, ScoreCalculator
from .schemas import ApplicantIdentity, Listing, ScreeningReport


class ListingLoadError(ValueError):
    """Raised when listing loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Listing]):
        super().__init__("Listing loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Listing loading failed: {self.errors}"


class ListingLoader:
    """Load listings from JSONL, one listing per line."""

    def load(self, path: Path) -> list[Listing]:
        listings: list[Listing] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                try:
                    listings.append(Listing.model_validate(record))
                except ValidationError as exc:
                    errors.append(f"line {idx}: {exc}")
        if errors:
            raise ListingLoadError(errors, listings)
        return listings

    def load_one(self, path: Path) -> Listing:
        return Listing.model_validate(_read_json(path, "listing"))


class ApplicantLoader:
    """Load an applicant identity document."""

    def load(self, path: Path) -> ApplicantIdentity:
        return ApplicantIdentity.model_validate(_read_json(path, "applicant"))


class ReportLoader:
    """Load a previously stored screening report."""

    def load(self, path: Path) -> ScreeningReport:
        return ScreeningReport.model_validate(_read_json(path, "report"))


class OutputWriter:
    """Persist screening outputs."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class ScreeningPipeline:
    """Screen an applicant once and score the report against listings."""

    def __init__(
        self,
        *,
        aggregator: ReportAggregator,
        calculator: ScoreCalculator,
        applicant_loader: ApplicantLoader | None = None,
        listing_loader: ListingLoader | None = None,
        report_loader: ReportLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._calculator = calculator
        self._applicants = applicant_loader or ApplicantLoader()
        self._listings = listing_loader or ListingLoader()
        self._reports = report_loader or ReportLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    async def ascreen(
        self,
        applicant: ApplicantIdentity,
        *,
        deadline_s: float | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> ScreeningReport:
        report = await self._aggregator.screen(applicant, deadline_s=deadline_s)
        if audit_logger:
            audit_logger.append(_screening_audit_record(report))
        return report

    def screen(
        self,
        applicant: ApplicantIdentity,
        *,
        deadline_s: float | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> ScreeningReport:
        """Blocking entry point; use ``ascreen`` from inside a running event loop."""
        return asyncio.run(
            self.ascreen(applicant, deadline_s=deadline_s, audit_logger=audit_logger)
        )

    def compute_match(
        self,
        report: ScreeningReport,
        listing: Listing,
        *,
        monthly_income: float | None = None,
    ) -> MatchResult:
        return self._calculator.score(
            report,
            listing.screening_criteria,
            buyer_monthly_income=monthly_income,
            listing_price=listing.price,
            listing_type=listing.listing_type,
        )

    def screen_file(
        self,
        *,
        applicant_path: Path,
        output_path: Path,
        deadline_s: float | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> ScreeningReport:
        applicant = self._applicants.load(applicant_path)
        report = self.screen(applicant, deadline_s=deadline_s, audit_logger=audit_logger)
        self._writer.write(output_path, report.model_dump(mode="json"))
        return report

    def match_file(
        self,
        *,
        report_path: Path,
        listing_path: Path,
        output_path: Path,
        monthly_income: float | None = None,
    ) -> dict:
        report = self._reports.load(report_path)
        listing = self._listings.load_one(listing_path)
        result = self._match_entry(report, listing, monthly_income=monthly_income)
        self._writer.write(output_path, result)
        return result

    def run(
        self,
        *,
        applicant_path: Path,
        listings_path: Path,
        output_path: Path,
        monthly_income: float | None = None,
        deadline_s: float | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict]:
        applicant = self._applicants.load(applicant_path)
        load_errors: list[str] = []
        try:
            listings = self._listings.load(listings_path)
        except ListingLoadError as exc:
            listings = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("listings.partial_load", errors=exc.errors)

        report = self.screen(applicant, deadline_s=deadline_s, audit_logger=audit_logger)

        results: list[dict] = []
        for listing in listings:
            entry = self._match_entry(report, listing, monthly_income=monthly_income)
            results.append(entry)

            if audit_logger:
                audit_logger.append(
                    {
                        "event": "match",
                        "applicant_id": report.applicant_id,
                        "listing_id": listing.listing_id,
                        "report_source": report.source,
                        "match_score": entry["match_score"],
                        "match_color": entry["match_color"],
                        "wanted_persons_status": report.wanted_person_match.status,
                    }
                )

        metadata = {
            "applicant_id": applicant.applicant_id,
            "listing_count": len(listings),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(
            output_path,
            {
                "metadata": metadata,
                "report": report.model_dump(mode="json"),
                "results": results,
            },
        )
        return results

    def _match_entry(
        self,
        report: ScreeningReport,
        listing: Listing,
        *,
        monthly_income: float | None,
    ) -> dict:
        result = self.compute_match(report, listing, monthly_income=monthly_income)
        self._logger.info(
            "match.result",
            applicant_id=report.applicant_id,
            listing_id=listing.listing_id,
            match_score=result.match_score,
            match_color=result.match_color,
            earned_points=result.earned_points,
            total_points=result.total_points,
        )
        return {
            "applicant_id": report.applicant_id,
            "listing_id": listing.listing_id,
            "listing_type": listing.listing_type,
            **result.to_dict(),
        }


def _screening_audit_record(report: ScreeningReport) -> dict:
    wanted = report.wanted_person_match
    return {
        "event": "screening",
        "applicant_id": report.applicant_id,
        "report_source": report.source,
        "screened_at": report.screened_at,
        "provider_request_ids": report.provider_request_ids,
        "wanted_persons_status": wanted.status,
        "wanted_persons_match_count": wanted.match_count,
        "wanted_persons_unverified": wanted.status in {"unavailable", "not_checked"},
    }


def _read_json(path: Path, label: str) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid {label} JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{label.capitalize()} JSON must be an object")
    return data

"""Screening report aggregation across verification providers."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Awaitable, Callable

import httpx
import pendulum
import structlog

from .providers import (
    PRODUCTS,
    CRSClient,
    ProductResponse,
    SyntheticReportFactory,
    TokenProvider,
    WantedPersonsClient,
    count_occurrences,
    find_value,
)
from .providers.crs import CREDIT, CRIMINAL, EVICTION, FRAUD, IDENTITY
from .schemas import ApplicantIdentity, ScreeningReport, WantedPersonMatch
from .schemas.report import DEFAULT_CREDIT_SCORE, clamp_credit_score

WANTED = "wanted_persons"

FRAUD_SCORE_KEYS = ("riskScore", "score", "fraudScore", "overallScore")
CREDIT_SCORE_KEYS = ("vantageScore", "creditScore", "scoreValue", "score")
BANKRUPTCY_KEYS = ("bankruptcy", "bankruptcies")
OFFENSE_KEYS = ("offense", "offenses", "conviction")
OFFENSE_COUNT_KEYS = ("offenseCount", "convictions")
EVICTION_KEYS = ("eviction", "evictions", "count")
EVICTION_COUNT_KEYS = ("evictionCount", "total")


class ReportAggregator:
    """Fan out to every product, then fold the responses into one report.

    Each call runs under its own timeout and failure boundary, so a slow or
    broken product only leaves its own fields at their defaults. ``screen``
    never raises.
    """

    def __init__(
        self,
        *,
        credentials: TokenProvider,
        crs_client: CRSClient,
        wanted_client: WantedPersonsClient,
        synthetic: SyntheticReportFactory,
        call_timeout_s: float = 10.0,
        max_concurrency: int = 6,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._credentials = credentials
        self._crs = crs_client
        self._wanted = wanted_client
        self._synthetic = synthetic
        self._call_timeout_s = call_timeout_s
        self._max_concurrency = max(1, max_concurrency)
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    async def screen(
        self,
        applicant: ApplicantIdentity,
        *,
        deadline_s: float | None = None,
    ) -> ScreeningReport:
        log = self._logger.bind(applicant_id=applicant.applicant_id)

        if not self._credentials.configured:
            log.info("screening.synthetic_report", reason="provider_not_configured")
            return self._synthetic.build(applicant)

        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            credential = await asyncio.wait_for(self._credentials.get_token(), timeout=deadline_s)
        except asyncio.TimeoutError:
            log.warning("screening.synthetic_report", reason="login_deadline_exceeded", deadline_s=deadline_s)
            return self._synthetic.build(applicant)
        if credential is None:
            log.warning("screening.synthetic_report", reason="authentication_failed")
            return self._synthetic.build(applicant)

        remaining_s = None if deadline_s is None else max(0.0, deadline_s - (loop.time() - started))

        semaphore = asyncio.Semaphore(self._max_concurrency)
        async with self._crs.session(credential) as client:
            calls: dict[str, Callable[[], Awaitable[Any]]] = {
                product: partial(self._crs.fetch, client, product, applicant)
                for product in PRODUCTS
            }
            if self._wanted.enabled:
                calls[WANTED] = partial(self._wanted.lookup, applicant.full_name)

            tasks = {
                name: asyncio.create_task(self._guarded(name, call, semaphore, log))
                for name, call in calls.items()
            }
            done, pending = await asyncio.wait(tasks.values(), timeout=remaining_s)
            if pending:
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
                log.warning(
                    "screening.deadline_exceeded",
                    deadline_s=deadline_s,
                    unfinished=sorted(name for name, task in tasks.items() if task in pending),
                )

        outcomes = {name: task.result() for name, task in tasks.items() if task in done}
        report = self._assemble(applicant, outcomes, log)
        log.info(
            "screening.report_ready",
            source=report.source,
            completed=sorted(name for name, outcome in outcomes.items() if outcome is not None),
        )
        return report

    async def _guarded(
        self,
        name: str,
        call: Callable[[], Awaitable[Any]],
        semaphore: asyncio.Semaphore,
        log: Any,
    ) -> Any | None:
        try:
            async with semaphore:
                return await asyncio.wait_for(call(), timeout=self._call_timeout_s)
        except asyncio.TimeoutError:
            log.warning("provider.call_timeout", product=name, timeout_s=self._call_timeout_s)
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 401:
                self._credentials.invalidate()
            log.warning("provider.call_failed", product=name, status_code=status_code)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "provider.call_failed",
                product=name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        return None

    def _assemble(
        self,
        applicant: ApplicantIdentity,
        outcomes: dict[str, Any],
        log: Any,
    ) -> ScreeningReport:
        fields: dict[str, Any] = {
            "credit_score": DEFAULT_CREDIT_SCORE,
            "evictions": 0,
            "bankruptcies": 0,
            "criminal_offenses": 0,
            "fraud_risk_score": 0.0,
            "identity_verified": False,
        }
        request_ids: dict[str, str] = {}

        for product in PRODUCTS:
            response = outcomes.get(product)
            if not isinstance(response, ProductResponse):
                continue
            if response.request_id:
                request_ids[product] = response.request_id
            try:
                normalized = _NORMALIZERS[product](response.data)
            except (ArithmeticError, RecursionError, TypeError, ValueError) as exc:
                log.warning(
                    "provider.extraction_failed",
                    product=product,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                continue
            missing = sorted(key for key, value in normalized.items() if value is None)
            if missing:
                log.debug("provider.extraction_miss", product=product, fields=missing)
            fields.update({key: value for key, value in normalized.items() if value is not None})

        return ScreeningReport(
            applicant_id=applicant.applicant_id,
            wanted_person_match=self._wanted_outcome(applicant, outcomes, log),
            provider_request_ids=request_ids,
            source="provider",
            screened_at=self._now_provider().to_iso8601_string(),
            **fields,
        )

    def _wanted_outcome(
        self,
        applicant: ApplicantIdentity,
        outcomes: dict[str, Any],
        log: Any,
    ) -> WantedPersonMatch:
        searched_name = applicant.full_name
        if not self._wanted.enabled:
            log.info("wanted_persons.lookup_disabled")
            return WantedPersonMatch(searched_name=searched_name, status="not_checked")

        outcome = outcomes.get(WANTED)
        if not isinstance(outcome, WantedPersonMatch):
            log.warning(
                "wanted_persons.lookup_unavailable",
                audit=True,
                searched_name=searched_name,
                note="no match recorded; lookup did not complete",
            )
            return WantedPersonMatch(searched_name=searched_name, status="unavailable")

        if outcome.matched:
            log.warning(
                "wanted_persons.match",
                audit=True,
                searched_name=searched_name,
                match_count=outcome.match_count,
            )
        return outcome


def _normalize_fraud(data: Any) -> dict[str, Any]:
    score = find_value(data, *FRAUD_SCORE_KEYS)
    return {"fraud_risk_score": None if score is None else max(0.0, float(score))}


def _normalize_identity(data: Any) -> dict[str, Any]:
    return {"identity_verified": True}


def _normalize_credit(data: Any) -> dict[str, Any]:
    score = find_value(data, *CREDIT_SCORE_KEYS)
    return {
        "credit_score": clamp_credit_score(score) if score else None,
        "bankruptcies": _as_count(count_occurrences(data, *BANKRUPTCY_KEYS)),
    }


def _normalize_criminal(data: Any) -> dict[str, Any]:
    offenses = count_occurrences(data, *OFFENSE_KEYS) or find_value(data, *OFFENSE_COUNT_KEYS)
    return {"criminal_offenses": _as_count(offenses) if offenses else None}


def _normalize_eviction(data: Any) -> dict[str, Any]:
    evictions = count_occurrences(data, *EVICTION_KEYS) or find_value(data, *EVICTION_COUNT_KEYS)
    return {"evictions": _as_count(evictions) if evictions else None}


def _as_count(value: float | int | None) -> int:
    if not value:
        return 0
    return max(0, int(round(value)))


_NORMALIZERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    FRAUD: _normalize_fraud,
    IDENTITY: _normalize_identity,
    CREDIT: _normalize_credit,
    CRIMINAL: _normalize_criminal,
    EVICTION: _normalize_eviction,
}


__all__ = ["ReportAggregator", "WANTED"]

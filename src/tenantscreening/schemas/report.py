from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CREDIT_SCORE_FLOOR = 300
CREDIT_SCORE_CEILING = 850
DEFAULT_CREDIT_SCORE = 680

ReportSource = Literal["provider", "synthetic"]
WantedLookupStatus = Literal["clear", "matched", "unavailable", "not_checked"]


class WantedPersonEntry(BaseModel):
    """Single registry entry returned for a name search."""

    name: str = ""
    description: str = ""
    categories: list[str] = Field(default_factory=list)
    warning: str | None = None
    source_url: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class WantedPersonMatch(BaseModel):
    """Outcome of the public wanted-persons registry lookup.

    ``status`` separates a clean lookup from one that never completed:
    ``unavailable`` means the registry could not be queried, so
    ``matched=False`` is not an assertion of safety.
    """

    matched: bool = False
    match_count: int = 0
    searched_name: str = ""
    matches: list[WantedPersonEntry] = Field(default_factory=list)
    status: WantedLookupStatus = "not_checked"

    model_config = ConfigDict(extra="forbid", frozen=True)


class ScreeningReport(BaseModel):
    """Normalized risk report for one applicant, reusable across listings."""

    applicant_id: str
    credit_score: int = DEFAULT_CREDIT_SCORE
    evictions: int = Field(default=0, ge=0)
    bankruptcies: int = Field(default=0, ge=0)
    criminal_offenses: int = Field(default=0, ge=0)
    fraud_risk_score: float | None = Field(default=0.0, ge=0)
    identity_verified: bool = False
    wanted_person_match: WantedPersonMatch = Field(default_factory=WantedPersonMatch)
    provider_request_ids: dict[str, str] = Field(default_factory=dict)
    source: ReportSource = "provider"
    screened_at: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("credit_score")
    @classmethod
    def _clamp_credit_score(cls, value: int) -> int:
        return clamp_credit_score(value)


def clamp_credit_score(value: float) -> int:
    return int(min(CREDIT_SCORE_CEILING, max(CREDIT_SCORE_FLOOR, value)))

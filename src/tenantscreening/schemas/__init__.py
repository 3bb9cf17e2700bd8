"""Pydantic schema definitions shared by the screening components."""

from __future__ import annotations

from .applicant import ApplicantIdentity, PostalAddress
from .listing import Listing, ListingType, ScreeningCriteria
from .report import (
    ScreeningReport,
    WantedPersonEntry,
    WantedPersonMatch,
    clamp_credit_score,
)

__all__ = [
    "ApplicantIdentity",
    "PostalAddress",
    "Listing",
    "ListingType",
    "ScreeningCriteria",
    "ScreeningReport",
    "WantedPersonEntry",
    "WantedPersonMatch",
    "clamp_credit_score",
]

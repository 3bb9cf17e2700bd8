from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ListingType = Literal["rent", "sale"]


class ScreeningCriteria(BaseModel):
    """Seller-configured acceptance criteria for a listing.

    Zero thresholds and false flags mean the check is not required.
    """

    min_credit_score: int = Field(default=0, ge=0)
    no_evictions: bool = False
    no_bankruptcy: bool = False
    no_criminal: bool = False
    min_income_multiplier: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(extra="forbid")


class Listing(BaseModel):
    """Listing terms relevant to applicant matching."""

    listing_id: str
    title: str = ""
    listing_type: ListingType = "rent"
    price: float = Field(ge=0)
    screening_criteria: ScreeningCriteria = Field(default_factory=ScreeningCriteria)

    model_config = ConfigDict(extra="allow")

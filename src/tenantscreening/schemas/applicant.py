from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PostalAddress(BaseModel):
    """Current residential address of an applicant."""

    line1: str = ""
    line2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""

    model_config = ConfigDict(extra="forbid")


class ApplicantIdentity(BaseModel):
    """Identity details an applicant consents to have verified."""

    applicant_id: str
    first_name: str
    middle_name: str = ""
    last_name: str
    suffix: str = ""
    date_of_birth: str | None = None
    ssn: str | None = None
    email: str | None = None
    phone: str | None = None
    ip_address: str | None = None
    address: PostalAddress = Field(default_factory=PostalAddress)

    model_config = ConfigDict(extra="forbid")

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(part.strip() for part in parts if part and part.strip())

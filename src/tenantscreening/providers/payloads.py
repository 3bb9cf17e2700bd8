"""Request bodies for each verification product.

The credit, identity and fraud products take flat identity documents; the
criminal and eviction products take a ``reference`` plus ``subjectInfo``
envelope with US-style dates, a dashed SSN and a split street address.
"""

from __future__ import annotations

import re
from typing import Any

import pendulum

from ..schemas import ApplicantIdentity

_HOUSE_NUMBER_RE = re.compile(r"^\s*(\d+[A-Za-z]?)\s+(.*)$")


def credit_payload(applicant: ApplicantIdentity) -> dict[str, Any]:
    address = applicant.address
    return {
        "firstName": applicant.first_name,
        "middleName": applicant.middle_name,
        "lastName": applicant.last_name,
        "suffix": applicant.suffix,
        "birthDate": applicant.date_of_birth or "",
        "ssn": _digits(applicant.ssn),
        "addresses": [
            {
                "borrowerResidencyType": "Current",
                "addressLine1": address.line1,
                "addressLine2": address.line2,
                "city": address.city,
                "state": address.state,
                "postalCode": address.postal_code,
            }
        ],
    }


def identity_payload(applicant: ApplicantIdentity) -> dict[str, Any]:
    address = applicant.address
    return {
        "firstName": applicant.first_name,
        "lastName": applicant.last_name,
        "ssn": _digits(applicant.ssn),
        "dateOfBirth": applicant.date_of_birth or "",
        "streetAddress1": address.line1,
        "city": address.city,
        "state": address.state,
        "zipCode": address.postal_code,
        "homePhone": _digits(applicant.phone),
    }


def fraud_payload(applicant: ApplicantIdentity) -> dict[str, Any]:
    address = applicant.address
    return {
        "firstName": applicant.first_name,
        "lastName": applicant.last_name,
        "email": applicant.email or "",
        "phoneNumber": _digits(applicant.phone),
        "ipAddress": applicant.ip_address or "",
        "address": {
            "addressLine1": address.line1,
            "city": address.city,
            "state": address.state,
            "postalCode": address.postal_code,
        },
    }


def criminal_payload(applicant: ApplicantIdentity) -> dict[str, Any]:
    return _subject_envelope(applicant, reference=f"criminal-{applicant.applicant_id}")


def eviction_payload(applicant: ApplicantIdentity) -> dict[str, Any]:
    return _subject_envelope(applicant, reference=f"eviction-{applicant.applicant_id}")


def _subject_envelope(applicant: ApplicantIdentity, *, reference: str) -> dict[str, Any]:
    address = applicant.address
    house_number, street_name = split_street_address(address.line1)
    return {
        "reference": reference,
        "subjectInfo": {
            "first": applicant.first_name,
            "middle": applicant.middle_name,
            "last": applicant.last_name,
            "dob": us_date(applicant.date_of_birth),
            "ssn": dashed_ssn(applicant.ssn),
            "houseNumber": house_number,
            "streetName": street_name,
            "city": address.city,
            "state": address.state,
            "zip": address.postal_code[:5],
        },
    }


def split_street_address(line: str) -> tuple[str, str]:
    """Split ``"1803 Norma St"`` into ``("1803", "Norma St")``."""
    match = _HOUSE_NUMBER_RE.match(line or "")
    if not match:
        return "", (line or "").strip()
    return match.group(1), match.group(2).strip()


def us_date(value: str | None) -> str:
    if not value:
        return ""
    try:
        parsed = pendulum.parse(value, strict=False)
    except ValueError:
        return ""
    return parsed.format("MM-DD-YYYY")


def dashed_ssn(value: str | None) -> str:
    digits = _digits(value)
    if len(digits) != 9:
        return digits
    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


def _digits(value: str | None) -> str:
    return re.sub(r"\D", "", value or "")


__all__ = [
    "credit_payload",
    "criminal_payload",
    "dashed_ssn",
    "eviction_payload",
    "fraud_payload",
    "identity_payload",
    "split_street_address",
    "us_date",
]

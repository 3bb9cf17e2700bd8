"""Third-party verification provider clients."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .credentials import Credential, CredentialCache
from .crs import PRODUCTS, CRSClient, ProductResponse
from .extract import count_occurrences, find_value
from .synthetic import SyntheticConfig, SyntheticReportFactory
from .wanted import WantedPersonsClient


@runtime_checkable
class TokenProvider(Protocol):
    """Source of bearer credentials for the product endpoints.

    Implementations return ``None`` instead of raising when no credential can
    be obtained.
    """

    configured: bool

    async def get_token(self) -> Credential | None:
        """Return a usable credential or ``None``."""

    def invalidate(self) -> None:
        """Forget the current credential after the provider rejects it."""


__all__ = [
    "CRSClient",
    "Credential",
    "CredentialCache",
    "PRODUCTS",
    "ProductResponse",
    "SyntheticConfig",
    "SyntheticReportFactory",
    "TokenProvider",
    "WantedPersonsClient",
    "count_occurrences",
    "find_value",
]

"""HTTP client for the five verification products."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import httpx

from ..schemas import ApplicantIdentity
from ..settings import ProviderSettings
from . import payloads
from .credentials import Credential

FRAUD = "fraud"
IDENTITY = "identity"
CREDIT = "credit"
CRIMINAL = "criminal"
EVICTION = "eviction"

PRODUCTS: tuple[str, ...] = (FRAUD, IDENTITY, CREDIT, CRIMINAL, EVICTION)

REQUEST_ID_HEADERS: tuple[str, ...] = ("requestid", "x-request-id", "x-correlation-id")

PayloadBuilder = Callable[[ApplicantIdentity], dict[str, Any]]

_PAYLOAD_BUILDERS: dict[str, PayloadBuilder] = {
    FRAUD: payloads.fraud_payload,
    IDENTITY: payloads.identity_payload,
    CREDIT: payloads.credit_payload,
    CRIMINAL: payloads.criminal_payload,
    EVICTION: payloads.eviction_payload,
}


@dataclass(slots=True)
class ProductResponse:
    """Successful product response with its correlation id, if any."""

    product: str
    data: Any
    request_id: str | None = None


class CRSClient:
    """Bearer-authenticated client posting subject payloads to product endpoints."""

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._paths = {
            FRAUD: settings.CRS_FRAUD_PATH,
            IDENTITY: settings.CRS_IDENTITY_PATH,
            CREDIT: settings.CRS_CREDIT_PATH,
            CRIMINAL: settings.CRS_CRIMINAL_PATH,
            EVICTION: settings.CRS_EVICTION_PATH,
        }

    def session(self, credential: Credential) -> httpx.AsyncClient:
        """Return a client carrying the credential; use as an async context manager."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.PROVIDER_TIMEOUT_S),
            transport=self._transport,
            headers={
                "Authorization": credential.authorization,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def fetch(
        self,
        client: httpx.AsyncClient,
        product: str,
        applicant: ApplicantIdentity,
    ) -> ProductResponse:
        """POST the product's subject payload; raises on transport or HTTP errors."""
        try:
            path = self._paths[product]
            build = _PAYLOAD_BUILDERS[product]
        except KeyError as exc:
            raise KeyError(f"Unsupported product: {product!r}") from exc

        response = await client.post(self._settings.crs_url(path), json=build(applicant))
        response.raise_for_status()
        data = response.json() if response.content else {}
        return ProductResponse(
            product=product,
            data=data,
            request_id=_request_id(response),
        )


def _request_id(response: httpx.Response) -> str | None:
    for header in REQUEST_ID_HEADERS:
        value = response.headers.get(header)
        if value:
            return value
    return None


__all__ = [
    "CRIMINAL",
    "CREDIT",
    "CRSClient",
    "EVICTION",
    "FRAUD",
    "IDENTITY",
    "PRODUCTS",
    "ProductResponse",
]

"""Public wanted-persons registry lookup."""

from __future__ import annotations

from typing import Any

import httpx

from ..schemas import WantedPersonEntry, WantedPersonMatch
from ..settings import ProviderSettings


class WantedPersonsClient:
    """Query the registry by full legal name and map entries to the report shape."""

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = settings.WANTED_API_URL
        self._timeout = settings.PROVIDER_TIMEOUT_S
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._endpoint)

    async def lookup(self, full_name: str) -> WantedPersonMatch:
        """Return registry hits for ``full_name``; raises on transport or HTTP errors."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        ) as client:
            response = await client.get(
                self._endpoint,
                params={"title": full_name},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()

        if not isinstance(payload, dict):
            raise ValueError("Wanted-persons response must be a JSON object")

        items = payload.get("items") or []
        matches = [self._map_entry(item) for item in items if isinstance(item, dict)]
        return WantedPersonMatch(
            matched=bool(matches),
            match_count=len(matches),
            searched_name=full_name,
            matches=matches,
            status="matched" if matches else "clear",
        )

    @staticmethod
    def _map_entry(item: dict[str, Any]) -> WantedPersonEntry:
        subjects = item.get("subjects") or []
        return WantedPersonEntry(
            name=str(item.get("title") or ""),
            description=str(item.get("description") or ""),
            categories=[str(subject) for subject in subjects if subject],
            warning=item.get("warning_message") or None,
            source_url=item.get("url") or None,
        )


__all__ = ["WantedPersonsClient"]

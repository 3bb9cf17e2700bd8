"""Bearer credential cache for the screening provider."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

import httpx
import pendulum
import structlog

from ..settings import ProviderSettings

DEFAULT_EXPIRES_IN_S = 3600

_TOKEN_KEYS = ("token", "accessToken", "access_token")
_EXPIRY_KEYS = ("expiresInSeconds", "expiresIn", "expires_in", "expires")


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer token with the instant it stops being accepted."""

    token: str
    expires_at: pendulum.DateTime

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"


class CredentialCache:
    """Log in once and reuse the token until shortly before it expires.

    ``get_token`` never raises: any login problem yields ``None`` so the
    aggregator can fall back to a synthetic report. Concurrent callers on the
    same event loop share a single in-flight login.
    """

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._now_provider = now_provider or pendulum.now
        self._transport = transport
        self._credential: Credential | None = None
        self._inflight: asyncio.Task[Credential | None] | None = None
        self._logger = structlog.get_logger(__name__)
        self.login_attempts = 0

    @property
    def configured(self) -> bool:
        return self._settings.crs_configured

    def cached(self) -> Credential | None:
        credential = self._credential
        if credential is None:
            return None
        refresh_at = credential.expires_at.subtract(seconds=self._settings.TOKEN_REFRESH_BUFFER_S)
        if self._now_provider() < refresh_at:
            return credential
        return None

    def invalidate(self) -> None:
        self._credential = None

    async def get_token(self) -> Credential | None:
        if not self.configured:
            return None

        credential = self.cached()
        if credential is not None:
            return credential

        loop = asyncio.get_running_loop()
        task = self._inflight
        if task is None or task.done() or task.get_loop() is not loop:
            task = loop.create_task(self._login())
            self._inflight = task
        return await asyncio.shield(task)

    async def _login(self) -> Credential | None:
        self.login_attempts += 1
        url = self._settings.crs_url(self._settings.CRS_LOGIN_PATH)
        body = {
            "username": self._settings.CRS_API_USERNAME,
            "password": self._settings.CRS_API_PASSWORD,
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.LOGIN_TIMEOUT_S),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
                payload = response.json()
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "credentials.login_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return None

        credential = self._parse_login(payload)
        if credential is None:
            self._logger.warning("credentials.login_malformed", keys=_top_level_keys(payload))
            return None

        self._credential = credential
        self._logger.info("credentials.login_succeeded", expires_at=credential.expires_at.to_iso8601_string())
        return credential

    def _parse_login(self, payload: Any) -> Credential | None:
        if not isinstance(payload, dict):
            return None
        token = next(
            (payload[key] for key in _TOKEN_KEYS if isinstance(payload.get(key), str) and payload[key]),
            None,
        )
        if token is None:
            return None

        expires_in = DEFAULT_EXPIRES_IN_S
        for key in _EXPIRY_KEYS:
            value = payload.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                expires_in = int(value)
                break

        return Credential(
            token=token,
            expires_at=self._now_provider().add(seconds=expires_in),
        )


def _top_level_keys(payload: Any) -> list[str]:
    return sorted(payload) if isinstance(payload, dict) else []


__all__ = ["Credential", "CredentialCache", "DEFAULT_EXPIRES_IN_S"]

"""Environment-backed provider settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Screening provider (credit, identity, criminal, eviction, fraud) ---
    CRS_API_URL: str | None = None
    CRS_API_USERNAME: str | None = None
    CRS_API_PASSWORD: str | None = None

    CRS_LOGIN_PATH: str = "/users/login"
    CRS_FRAUD_PATH: str = "/fraud-finder/fraud-finder"
    CRS_IDENTITY_PATH: str = "/flex-id/flex-id"
    CRS_CREDIT_PATH: str = "/transunion/credit-report/standard/tu-prequal-vantage4"
    CRS_CRIMINAL_PATH: str = "/criminal/new-request"
    CRS_EVICTION_PATH: str = "/eviction/new-request"

    # --- Public wanted-persons registry (empty string disables the lookup) ---
    WANTED_API_URL: str = "https://api.fbi.gov/wanted/v1/list"

    # --- Call budgets ---
    PROVIDER_TIMEOUT_S: float = 10.0
    LOGIN_TIMEOUT_S: float = 10.0
    PROVIDER_MAX_CONCURRENCY: int = 6
    TOKEN_REFRESH_BUFFER_S: int = 300  # refresh 5 minutes before expiry

    # Fixes the synthetic report generator for demos and reproducible runs.
    SYNTHETIC_SEED: int | None = None

    @property
    def crs_configured(self) -> bool:
        return bool(self.CRS_API_URL and self.CRS_API_USERNAME and self.CRS_API_PASSWORD)

    def crs_url(self, path: str) -> str:
        base = (self.CRS_API_URL or "").rstrip("/")
        return f"{base}/{path.lstrip('/')}"


__all__ = ["ProviderSettings"]

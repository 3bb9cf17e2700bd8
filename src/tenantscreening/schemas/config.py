"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CoreConfig(BaseModel):
    score_weights: dict[str, int] | None = None
    thresholds: dict[str, int] | None = None

    model_config = ConfigDict(extra="forbid")


class MortgageSettings(BaseModel):
    down_payment_percent: float | None = None
    annual_rate_percent: float | None = None
    term_years: int | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    mortgage: MortgageSettings = Field(default_factory=MortgageSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        if self.core.score_weights or self.core.thresholds:
            settings["core"] = self.core.model_dump(exclude_none=True)
        mortgage_settings = self.mortgage.model_dump(exclude_none=True)
        if mortgage_settings:
            settings["mortgage"] = mortgage_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid config: {exc}") from exc

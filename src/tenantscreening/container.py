"""Dependency injection container for the screening service."""

from __future__ import annotations

from dependency_injector import containers, providers

from .aggregator import ReportAggregator
from .core import MortgageConfig, ScoreCalculator
from .pipeline import ScreeningPipeline
from .providers import (
    CRSClient,
    CredentialCache,
    SyntheticReportFactory,
    WantedPersonsClient,
)
from .settings import ProviderSettings


class ScreeningContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    provider_settings = providers.Singleton(ProviderSettings)

    credential_cache = providers.Singleton(CredentialCache, settings=provider_settings)
    crs_client = providers.Singleton(CRSClient, settings=provider_settings)
    wanted_client = providers.Singleton(WantedPersonsClient, settings=provider_settings)
    synthetic_factory = providers.Singleton(
        SyntheticReportFactory,
        seed=provider_settings.provided.SYNTHETIC_SEED,
    )

    report_aggregator = providers.Singleton(
        ReportAggregator,
        credentials=credential_cache,
        crs_client=crs_client,
        wanted_client=wanted_client,
        synthetic=synthetic_factory,
        call_timeout_s=provider_settings.provided.PROVIDER_TIMEOUT_S,
        max_concurrency=provider_settings.provided.PROVIDER_MAX_CONCURRENCY,
    )

    mortgage_config = providers.Singleton(MortgageConfig)

    score_calculator = providers.Singleton(
        ScoreCalculator,
        score_weights=config.score_weights,
        thresholds=config.thresholds,
        mortgage=mortgage_config,
    )

    pipeline = providers.Factory(
        ScreeningPipeline,
        aggregator=report_aggregator,
        calculator=score_calculator,
    )


def create_container(
    *,
    settings: dict | None = None,
    provider_settings: ProviderSettings | None = None,
) -> ScreeningContainer:
    """Instantiate container with optional overrides."""

    container = ScreeningContainer()

    if provider_settings is not None:
        container.provider_settings.override(providers.Object(provider_settings))

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if core_settings:
        container.config.override(core_settings)

    mortgage_settings = settings.get("mortgage", {}) if isinstance(settings, dict) else {}
    if mortgage_settings:
        container.mortgage_config.override(
            providers.Singleton(MortgageConfig, **mortgage_settings)
        )

    return container

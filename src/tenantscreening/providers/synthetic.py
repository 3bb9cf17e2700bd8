"""Randomized stand-in reports for when live providers are unavailable."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

import pendulum

from ..schemas import ApplicantIdentity, ScreeningReport, WantedPersonMatch


@dataclass
class SyntheticConfig:
    """Probabilities used when drawing a synthetic report."""

    credit_bands: tuple[int, ...] = (580, 620, 650, 680, 700, 720, 740, 760, 780)
    eviction_probability: float = 0.15
    bankruptcy_probability: float = 0.10
    criminal_probability: float = 0.08
    identity_verified_probability: float = 0.90
    max_fraud_score: int = 3


class SyntheticReportFactory:
    """Draw plausible but clearly randomized reports."""

    def __init__(
        self,
        *,
        config: SyntheticConfig | None = None,
        seed: int | None = None,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._config = config or SyntheticConfig()
        self._random = random.Random(seed)
        self._now_provider = now_provider or pendulum.now

    def build(self, applicant: ApplicantIdentity) -> ScreeningReport:
        rng = self._random
        config = self._config
        return ScreeningReport(
            applicant_id=applicant.applicant_id,
            credit_score=rng.choice(config.credit_bands),
            evictions=rng.randint(1, 2) if rng.random() < config.eviction_probability else 0,
            bankruptcies=1 if rng.random() < config.bankruptcy_probability else 0,
            criminal_offenses=rng.randint(1, 2) if rng.random() < config.criminal_probability else 0,
            fraud_risk_score=float(rng.randint(0, config.max_fraud_score)),
            identity_verified=rng.random() < config.identity_verified_probability,
            wanted_person_match=WantedPersonMatch(
                searched_name=applicant.full_name,
                status="not_checked",
            ),
            source="synthetic",
            screened_at=self._now_provider().to_iso8601_string(),
        )


__all__ = ["SyntheticConfig", "SyntheticReportFactory"]

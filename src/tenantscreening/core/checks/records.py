"""Binary checks on adverse-record counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import ScreeningCriteria, ScreeningReport


@dataclass(frozen=True)
class RecordCheckSpec:
    category: str
    criteria_flag: str
    report_field: str
    clean_detail: str
    found_label: str


class RecordCheck:
    """Pass only when the report shows no records of the given kind."""

    def __init__(self, spec: RecordCheckSpec) -> None:
        self._spec = spec
        self.category = spec.category

    def evaluate(
        self,
        report: ScreeningReport,
        criteria: ScreeningCriteria,
        context: dict[str, Any],
    ) -> dict[str, Any]:
        spec = self._spec
        if not getattr(criteria, spec.criteria_flag):
            return {"category": self.category, "required": False, "detail": "not required"}

        count = getattr(report, spec.report_field)
        passed = count == 0
        return {
            "category": self.category,
            "required": True,
            "passed": passed,
            "credit": 1.0 if passed else 0.0,
            "detail": spec.clean_detail if passed else f"{count} {spec.found_label} found",
            "metadata": {"count": count},
        }


CRIMINAL = RecordCheckSpec(
    category="criminal",
    criteria_flag="no_criminal",
    report_field="criminal_offenses",
    clean_detail="No criminal record",
    found_label="offense(s)",
)

EVICTIONS = RecordCheckSpec(
    category="evictions",
    criteria_flag="no_evictions",
    report_field="evictions",
    clean_detail="No evictions",
    found_label="eviction(s)",
)

BANKRUPTCY = RecordCheckSpec(
    category="bankruptcy",
    criteria_flag="no_bankruptcy",
    report_field="bankruptcies",
    clean_detail="No bankruptcies",
    found_label="bankruptcy(ies)",
)


def criminal_check() -> RecordCheck:
    return RecordCheck(CRIMINAL)


def evictions_check() -> RecordCheck:
    return RecordCheck(EVICTIONS)


def bankruptcy_check() -> RecordCheck:
    return RecordCheck(BANKRUPTCY)

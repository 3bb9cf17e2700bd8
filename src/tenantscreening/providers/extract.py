"""Schema-free value search over provider response documents.

Provider payloads are not under our control and drift between products and
releases, so fields are located by candidate key names anywhere in the tree
instead of by fixed paths.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterator, Mapping

Number = int | float

_INT_RE = re.compile(r"^\d+$")
_FLOAT_RE = re.compile(r"^\d+\.\d+$")


def find_value(document: Any, *keys: str) -> Number | None:
    """Return the first numeric value stored under any of ``keys``.

    At every mapping the candidate keys are checked in the order given before
    any child is visited; children are then searched depth-first in document
    order. Digit-only strings are coerced; other values at a matching key are
    skipped and the search continues.
    """
    if isinstance(document, Mapping):
        for key in keys:
            if key in document:
                coerced = _coerce_number(document[key])
                if coerced is not None:
                    return coerced
    for child in _children(document):
        found = find_value(child, *keys)
        if found is not None:
            return found
    return None


def count_occurrences(document: Any, *keys: str) -> Number:
    """Sum every occurrence of ``keys`` across the whole document.

    Lists contribute their length, numbers their value (non-finite floats add
    nothing), booleans 1 or 0, and any other non-null value 1.
    """
    total: Number = 0
    if isinstance(document, Mapping):
        for key in keys:
            if key in document:
                total += _occurrence_weight(document[key])
    for child in _children(document):
        total += count_occurrences(child, *keys)
    return total


def _children(node: Any) -> Iterator[Any]:
    if isinstance(node, Mapping):
        values = node.values()
    elif isinstance(node, (list, tuple)):
        values = node
    else:
        return
    for value in values:
        if isinstance(value, (Mapping, list, tuple)):
            yield value


def _coerce_number(value: Any) -> Number | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        if _INT_RE.match(value):
            return int(value)
        if _FLOAT_RE.match(value):
            parsed = float(value)
            return parsed if math.isfinite(parsed) else None
    return None


def _occurrence_weight(value: Any) -> Number:
    if value is None:
        return 0
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (list, tuple)):
        return len(value)
    if isinstance(value, (int, float)):
        return value if not isinstance(value, float) or math.isfinite(value) else 0
    return 1


__all__ = ["count_occurrences", "find_value"]

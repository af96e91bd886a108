"""
Missing-value equivalence classes.

A raw field counts as missing when it is None or when its text belongs to
the marker set declared for that field. Call sites ask is_missing() instead
of comparing strings themselves.
"""

from enum import Enum
from typing import Any, Iterable


class MissingMarker(str, Enum):
    """Literal values that raw data uses in place of an explicit null."""

    EMPTY = ""
    PLACEHOLDER = "-"


EMPTY_ONLY = frozenset({MissingMarker.EMPTY.value})


def marker_set(*extra: Iterable[str]) -> frozenset[str]:
    """Build a marker set: the empty string plus any extra placeholders."""
    markers = set(EMPTY_ONLY)
    for values in extra:
        markers.update(values)
    return frozenset(markers)


def is_missing(value: Any, markers: frozenset[str] = frozenset()) -> bool:
    """Return True if value is None or a declared missing marker."""
    if value is None:
        return True
    return isinstance(value, str) and value in markers

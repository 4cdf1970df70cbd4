"""Partial Update — decides which user columns a PATCH request touches.

Invariants:
    - Fields are emitted in a fixed order: name, then age
    - Absent and null fields are both "do not change"
    - An empty result is valid: the caller still issues a no-op UPDATE

Design Decisions:
    - Returns a column -> value mapping; SQL text and bind parameters are generated
      from it by SQLAlchemy, never assembled by hand
"""

from collections.abc import Mapping

UPDATABLE_FIELDS: tuple[str, ...] = ("name", "age")


def collect_changes(payload: Mapping[str, object]) -> dict[str, object]:
    """Pick the updatable fields that carry a value, in column order."""
    return {
        field: payload[field]
        for field in UPDATABLE_FIELDS
        if payload.get(field) is not None
    }

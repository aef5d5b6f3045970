"""Helpers shared by the OData catalog lookups."""

from logging import Logger
from typing import Any, Callable, Iterable, Optional, TypeVar

from ..models.exceptions import EnrichedException

T = TypeVar("T")

# Status codes answered by Orchestrator when an endpoint is unavailable for
# the caller (missing scope, older server version, classic folders).
REFUSED_STATUS_CODES = (403, 404, 405)


def escape_odata_string(value: str) -> str:
    """Escape a value for use inside a single-quoted OData string literal.

    >>> escape_odata_string("O'Brien")
    "O''Brien"
    """
    return value.replace("'", "''")


def is_refused(error: EnrichedException) -> bool:
    return error.status_code in REFUSED_STATUS_CODES


def odata_values(payload: Any) -> list[dict[str, Any]]:
    """Extract the item list from an OData collection payload."""
    if isinstance(payload, dict):
        return list(payload.get("value", []))
    if isinstance(payload, list):
        return payload
    return []


def partial_matches(
    items: Iterable[T], needle: str, *fields: str
) -> list[T]:
    """Case-insensitive substring match of ``needle`` against the given attributes."""
    lowered = needle.lower()
    matches = []
    for item in items:
        for field in fields:
            value: Optional[str] = getattr(item, field, None)
            if value and lowered in value.lower():
                matches.append(item)
                break
    return matches


def pick_candidate(
    candidates: list[T],
    key: Callable[[T], Any],
    logger: Logger,
    description: str,
    label: Optional[Callable[[T], str]] = None,
) -> Optional[T]:
    """Pick one candidate out of several partial matches.

    A single candidate is returned as is. Several candidates are ordered by
    ``key`` and the first one wins, with a warning naming the alternatives
    (by ``label``, defaulting to ``key``).
    """
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    label = label or key
    ordered = sorted(candidates, key=key)
    logger.warning(
        f"{len(candidates)} candidates match {description}; using the first of: "
        + ", ".join(str(label(candidate)) for candidate in ordered)
    )
    return ordered[0]

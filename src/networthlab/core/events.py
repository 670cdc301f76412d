"""
Event classes for tracking projection occurrences.
"""

from __future__ import annotations

from typing import Any, NamedTuple


class Event(NamedTuple):
    """
    Year-stamped event record for an entity's projection.

    Events describe the discrete moments of a projection (an asset maturing
    into cash, a liability reaching the end of its term, a goal withdrawal)
    so that callers can build a timeline next to the numeric series.

    Attributes:
        year: The projection year in which the event occurs
        kind: Event type identifier (e.g. 'maturity', 'term_end', 'goal')
        message: Human-readable description of the event
        meta: Optional dictionary with additional event metadata
    """

    year: int
    kind: str
    message: str
    meta: dict[str, Any] | None = None

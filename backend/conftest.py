"""
Shared pytest fixtures: a frozen clock and small document builders.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import pytest

from modules.analysis.context_builder import build_context_from_document
from schemas.context import ContextResult

FROZEN_NOW = datetime(2025, 5, 1, 12, 0)


def frozen_clock() -> datetime:
    return FROZEN_NOW


def activity(
    name: str,
    start: Optional[str] = None,
    duration: Optional[int] = None,
    type: str = "sightseeing",
    **extra: Any,
) -> dict:
    doc: dict[str, Any] = {"id": name.lower().replace(" ", "-"), "name": name, "type": type}
    if start is not None:
        doc["startTime"] = start
    if duration is not None:
        doc["duration"] = duration
    doc.update(extra)
    return doc


def day(number: int, activities: list[dict], hotel: bool = True, **extra: Any) -> dict:
    doc: dict[str, Any] = {
        "dayNumber": number,
        "date": f"2025-05-{9 + number:02d}",
        "activities": activities,
    }
    if hotel:
        doc["accommodations"] = [{"id": f"h{number}", "name": "Hotel", "cost": 0}]
    doc.update(extra)
    return doc


def trip(days: list[dict], start: str = "2025-05-10", end: str = "2025-05-14", **extra: Any) -> dict:
    doc: dict[str, Any] = {
        "id": "trip_test",
        "destinationName": "Lisbon",
        "startDate": start,
        "endDate": end,
        "travelers": [{"relationship": "self"}, {"relationship": "partner"}],
        "budget": {"total": 1000, "currency": "USD"},
        "itinerary": days,
    }
    doc.update(extra)
    return doc


def build(trip_doc: Any, weather: Any = None, preferences: Any = None) -> ContextResult:
    return build_context_from_document(trip_doc, preferences, weather, clock=frozen_clock)


@pytest.fixture
def clock():
    return frozen_clock

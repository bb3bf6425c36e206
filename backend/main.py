"""
main.py
--------
Trip context engine entry point.

run_pipeline() is the single call the hosting service makes: raw trip /
preference / weather documents in, ContextResult out.

  Stage 1: Boundary adaptation (dates, times, costs normalised once)
  Stage 2: Per-day schedule analysis (order, overlaps, free time, meals, weather)
  Stage 3: Budget, progress and stats
  Stage 4: Issue scan

Run:
  python main.py                 # analyse the built-in sample trip
  python main.py trip.json       # analyse a trip document from disk
"""

from __future__ import annotations
import json
import sys
from typing import Any, Optional

from modules.analysis.context_builder import build_context_from_document
from modules.analysis.temporal import Clock
from schemas.context import ContextResult


def run_pipeline(
    trip_doc: Any,
    preferences_doc: Any = None,
    weather_docs: Any = None,
    clock: Optional[Clock] = None,
) -> ContextResult:
    """Build the enriched context for one trip document. Never raises on content."""
    return build_context_from_document(trip_doc, preferences_doc, weather_docs, clock=clock)


SAMPLE_TRIP: dict = {
    "id": "trip_sample_lisbon",
    "destinationName": "Lisbon",
    "startDate": "2025-05-10",
    "endDate": "2025-05-12",
    "travelers": [{"name": "Ana", "relationship": "self"}, {"name": "Rui", "relationship": "partner"}],
    "budget": {"total": 1200, "currency": "EUR"},
    "itinerary": [
        {
            "dayNumber": 1,
            "date": "2025-05-10",
            "activities": [
                {"id": "a1", "name": "Belém Tower", "type": "sightseeing", "startTime": "09:30", "duration": 90},
                {"id": "a2", "name": "Pastéis Lunch", "type": "dining", "startTime": "12:30",
                 "cost": {"amount": 15, "currency": "EUR", "perPerson": True}},
                {"id": "a3", "name": "Tram 28 Ride", "type": "transport", "startTime": "13:00", "duration": 45},
            ],
            "accommodations": [{"id": "h1", "name": "Alfama Guesthouse", "cost": 140}],
        },
        {
            "dayNumber": 2,
            "date": "2025-05-11",
            "activities": [
                {"id": "b1", "name": "Sintra Hike", "type": "hiking", "startTime": "08:30", "duration": 240},
                {"id": "b2", "name": "Seafood Dinner", "type": "dining", "startTime": "20:00",
                 "cost": {"amount": 80, "currency": "EUR"}},
            ],
        },
    ],
}

SAMPLE_WEATHER: list = [
    {"temperature": 22, "precipitation": 10, "windSpeed": 12, "condition": "Sunny"},
    {"temperature": 17, "precipitation": 85, "windSpeed": 30, "condition": "Heavy rain"},
]


if __name__ == "__main__":
    if len(sys.argv) > 1:
        with open(sys.argv[1], encoding="utf-8") as fh:
            trip_doc = json.load(fh)
        weather_docs = None
    else:
        trip_doc, weather_docs = SAMPLE_TRIP, SAMPLE_WEATHER

    result = run_pipeline(trip_doc, weather_docs=weather_docs)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))

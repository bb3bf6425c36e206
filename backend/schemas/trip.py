"""
schemas/trip.py
---------------
Dataclass definitions for the trip snapshot consumed by the context engine.

These are the normalised shapes produced by modules.analysis.adapter from the
raw document-store records. Every date is already a Timestamp and every
time-of-day is already integer minutes since midnight; nothing downstream
branches on the original representation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

import config

TimestampKind = Literal["native", "iso", "to_date", "epoch", "fallback"]


@dataclass(frozen=True)
class Timestamp:
    """
    A date value normalised once at the system boundary.

    kind records where the value came from:
      native   a datetime / date object
      iso      an ISO-8601 string
      to_date  an object exposing a to-date conversion method
      epoch    a serialised store timestamp ({"seconds": ...})
      fallback absent or unparseable; value is the injected clock's "now"
    """
    value: datetime
    kind: TimestampKind = "native"

    @property
    def is_fallback(self) -> bool:
        return self.kind == "fallback"


@dataclass
class Coordinates:
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class Traveler:
    name: str = ""
    relationship: str = ""    # e.g. "self" | "partner" | "family" | "friend"


@dataclass
class TripBudget:
    total: float = 0.0
    currency: str = ""
    # Declared category split from the trip document, passed through untouched
    breakdown: Optional[dict[str, float]] = None


@dataclass
class ActivityCost:
    amount: float = 0.0
    currency: str = ""
    per_person: bool = False


@dataclass
class Activity:
    """A single scheduled item in a day's itinerary."""
    id: str = ""
    name: str = ""
    type: str = ""                        # free-form tag, e.g. "dining" | "hiking"
    start_time: Optional[int] = None      # minutes since midnight; None = unscheduled
    duration: Optional[int] = None        # minutes; None = use default
    cost: Optional[ActivityCost] = None
    tags: list[str] = field(default_factory=list)

    @property
    def start_minute(self) -> int:
        """Start as minutes since midnight; an unscheduled activity sorts at 0."""
        return self.start_time if self.start_time is not None else 0

    @property
    def duration_minutes(self) -> int:
        return self.duration if self.duration is not None else config.DEFAULT_ACTIVITY_DURATION_MIN

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


@dataclass
class Accommodation:
    id: str = ""
    name: str = ""
    cost: float = 0.0


@dataclass
class Transport:
    id: str = ""
    mode: str = ""
    cost: float = 0.0


@dataclass
class DayItinerary:
    day_number: int = 0
    date: Optional[Timestamp] = None
    activities: list[Activity] = field(default_factory=list)
    accommodations: Optional[list[Accommodation]] = None
    transportation: Optional[list[Transport]] = None


@dataclass
class WeatherDay:
    """Forecast for one trip day, index-aligned to day_number - 1."""
    temperature: Optional[float] = None
    precipitation: float = 0.0    # percentage chance
    wind_speed: float = 0.0       # same unit as the upstream forecast
    condition: str = ""
    date: Optional[Timestamp] = None


@dataclass
class TravelPreferences:
    """Opaque preference record; only the suggestion engine reads into it."""
    travel_style: str = ""
    interests: list[str] = field(default_factory=list)
    activity_types: list[str] = field(default_factory=list)
    pace_preference: str = ""
    dietary_restrictions: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class Trip:
    """Read-only trip snapshot. The engine never mutates it."""
    id: str = ""
    destination_name: str = ""
    start_date: Optional[Timestamp] = None
    end_date: Optional[Timestamp] = None
    travelers: list[Traveler] = field(default_factory=list)
    budget: TripBudget = field(default_factory=TripBudget)
    itinerary: list[DayItinerary] = field(default_factory=list)
    destination_coordinates: Optional[Coordinates] = None

    @property
    def traveler_count(self) -> int:
        return len(self.travelers)

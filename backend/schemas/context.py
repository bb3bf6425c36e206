"""
schemas/context.py
------------------
Dataclass definitions for the enriched trip context produced by
modules.analysis.context_builder.

Everything here is created fresh on each build and never written back to the
source Trip. to_dict() renders the camelCase shape consumed by the assistant
prompt builder and the UI; optional fields that are unset are omitted.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime
from typing import Any, Literal, Optional

from schemas.trip import (
    Accommodation, Activity, Coordinates, Timestamp, Transport,
    TravelPreferences, WeatherDay,
)

TravelerType = Literal["solo", "couple", "family", "friends", "group"]
IssueType = Literal[
    "time_conflict", "meal_gap", "rushed_transition",
    "weather_conflict", "budget_overrun", "no_accommodation",
]
Severity = Literal["low", "medium", "high"]


# ── Serialisation ──────────────────────────────────────────────────────────────

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def serialize(value: Any) -> Any:
    """Recursively convert dataclasses to camelCase dicts, dropping None fields."""
    if isinstance(value, Timestamp):
        return value.value.isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            if not f.repr:
                continue
            item = getattr(value, f.name)
            if item is None:
                continue
            out[_camel(f.name)] = serialize(item)
        return out
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [serialize(v) for v in value]
    return value


# ── Per-day structures ─────────────────────────────────────────────────────────

@dataclass
class TimeSlot:
    start: str       # "HH:MM"
    end: str         # "HH:MM"
    duration: int    # minutes


@dataclass
class DetailedActivity:
    """An Activity enriched with its day, overlaps and weather suitability."""
    activity: Activity
    day_number: int
    conflicts: list[str] = field(default_factory=list)
    weather_suitable: bool = True

    @property
    def name(self) -> str:
        return self.activity.name

    @property
    def type(self) -> str:
        return self.activity.type

    def to_dict(self) -> dict[str, Any]:
        out = serialize(self.activity)
        if self.activity.start_time is not None:
            out["startTime"] = _format_hhmm(self.activity.start_time)
        out["duration"] = self.activity.duration_minutes
        out["dayNumber"] = self.day_number
        out["conflicts"] = list(self.conflicts)
        out["weatherSuitable"] = self.weather_suitable
        return out


def _format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass
class DayContext:
    day_number: int
    date: Timestamp
    activities: list[DetailedActivity] = field(default_factory=list)
    accommodations: Optional[list[Accommodation]] = None
    transportation: Optional[list[Transport]] = None
    total_cost: float = 0.0
    free_time_slots: list[TimeSlot] = field(default_factory=list)
    has_breakfast: bool = False
    has_lunch: bool = False
    has_dinner: bool = False
    weather: Optional[WeatherDay] = None

    def to_dict(self) -> dict[str, Any]:
        out = serialize(self)
        out["activities"] = [a.to_dict() for a in self.activities]
        return out


# ── Trip-level analyses ────────────────────────────────────────────────────────

@dataclass
class BudgetBreakdown:
    accommodation: float = 0.0
    activities: float = 0.0
    food: float = 0.0
    transport: float = 0.0
    shopping: float = 0.0    # reserved; not populated by the cost derivation
    other: float = 0.0       # reserved; not populated by the cost derivation

    @property
    def total(self) -> float:
        return (
            self.accommodation + self.activities + self.food
            + self.transport + self.shopping + self.other
        )


@dataclass
class BudgetAnalysis:
    total: float
    spent: float
    remaining: float
    breakdown: BudgetBreakdown | dict[str, float]
    daily_average: float
    spent_by_category: BudgetBreakdown
    remaining_daily: float
    is_over_budget: bool
    projected_overage: Optional[float] = None


@dataclass
class TripProgress:
    days_planned: int = 0
    total_days: int = 0
    accommodation_coverage: float = 0.0    # percentage
    activities_per_day: float = 0.0
    empty_days: list[int] = field(default_factory=list)
    packed_days: list[int] = field(default_factory=list)


@dataclass
class TripIssue:
    type: IssueType
    severity: Severity
    message: str
    suggestion: str
    day: Optional[int] = None
    activities: Optional[list[str]] = None


@dataclass
class TripStats:
    total_activities: int = 0
    photo_spots: int = 0
    restaurants: int = 0
    free_time: int = 0                      # hours
    total_distance: Optional[float] = None  # not computed; no geospatial data
    walking_time: Optional[int] = None      # not computed; no routing data


@dataclass
class DestinationInfo:
    timezone: str
    currency: str
    languages: list[str]
    coordinates: Optional[Coordinates] = None


@dataclass
class TripDates:
    start: Timestamp
    end: Timestamp
    formatted: str


@dataclass
class TravelerSummary:
    count: int
    type: TravelerType


@dataclass
class EnhancedTripContext:
    trip_id: str
    destination: str
    destinations: list[str]
    dates: TripDates
    travelers: TravelerSummary
    detailed_itinerary: list[DayContext]
    budget: BudgetAnalysis
    progress: TripProgress
    issues: list[TripIssue]
    stats: TripStats
    user_preferences: Optional[TravelPreferences] = None
    weather_forecast: Optional[list[WeatherDay]] = None
    current_destination: Optional[DestinationInfo] = None

    def to_dict(self) -> dict[str, Any]:
        out = serialize(self)
        out["detailedItinerary"] = [d.to_dict() for d in self.detailed_itinerary]
        if self.user_preferences is not None:
            # Pass the caller's preference document through as received
            out["userPreferences"] = serialize(
                self.user_preferences.raw or self.user_preferences
            )
        return out


# ── Diagnostics ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NormalizationWarning:
    """A non-fatal note that some input was defaulted during normalisation."""
    field: str
    value: str       # repr() of the offending raw value
    message: str


@dataclass
class ContextResult:
    """Return value of the engine: the context plus every normalisation warning."""
    context: EnhancedTripContext
    warnings: list[NormalizationWarning] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "context": self.context.to_dict(),
            "warnings": [serialize(w) for w in self.warnings],
        }


# ── Suggestions ────────────────────────────────────────────────────────────────

@dataclass
class SmartSuggestion:
    id: str
    text: str
    icon: str
    priority: int
    category: Literal["planning", "booking", "discovery", "optimization", "alert"]
    metadata: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return serialize(self)

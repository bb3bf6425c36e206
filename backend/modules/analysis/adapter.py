"""
modules/analysis/adapter.py
---------------------------
Boundary adapter: raw trip / weather / preference documents → schemas.trip.

Documents come from an untrusted store and may use camelCase or snake_case
keys, numeric strings, missing sections, or the wrong container types. Every
reader here is total: bad values fall back to the documented defaults
(cost 0, duration 60, empty lists) and a NormalizationWarning is recorded.

    trip, warnings = trip_from_document(doc, clock=fixed_clock)
"""

from __future__ import annotations

import math
from typing import Any, Optional

from modules.analysis.temporal import (
    Clock, normalize_date, parse_time_of_day, system_clock, warn,
)
from schemas.context import NormalizationWarning
from schemas.trip import (
    Accommodation, Activity, ActivityCost, Coordinates, DayItinerary,
    Transport, TravelPreferences, Traveler, Trip, TripBudget, WeatherDay,
)

Warnings = list[NormalizationWarning]


# ── Primitive readers ──────────────────────────────────────────────────────────

def _get(doc: Any, *keys: str, default: Any = None) -> Any:
    if not isinstance(doc, dict):
        return default
    for key in keys:
        if key in doc and doc[key] is not None:
            return doc[key]
    return default


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_float(value: Any, field: str, warnings: Warnings, default: float = 0.0) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        warn(warnings, field, value, f"expected a number; using {default}")
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        warn(warnings, field, value, f"expected a number; using {default}")
        return default
    if not math.isfinite(number):
        warn(warnings, field, value, f"non-finite number; using {default}")
        return default
    return number


def _as_optional_float(value: Any, field: str, warnings: Warnings) -> Optional[float]:
    if value is None:
        return None
    number = _as_float(value, field, warnings, default=math.nan)
    return None if math.isnan(number) else number


def _as_optional_int(value: Any, field: str, warnings: Warnings) -> Optional[int]:
    number = _as_optional_float(value, field, warnings)
    return None if number is None else int(number)


def _as_list(value: Any, field: str, warnings: Warnings) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    warn(warnings, field, value, "expected a list; treating as empty")
    return []


def _as_str_list(value: Any, field: str, warnings: Warnings) -> list[str]:
    return [_as_str(item) for item in _as_list(value, field, warnings) if item is not None]


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


# ── Section readers ────────────────────────────────────────────────────────────

def _read_cost(raw: Any, field: str, warnings: Warnings) -> Optional[ActivityCost]:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return ActivityCost(
            amount=_as_float(_get(raw, "amount"), f"{field}.amount", warnings),
            currency=_as_str(_get(raw, "currency", default="")),
            per_person=_as_bool(_get(raw, "perPerson", "per_person", default=False)),
        )
    return ActivityCost(amount=_as_float(raw, field, warnings))


def _read_flat_cost(raw: Any, field: str, warnings: Warnings) -> float:
    """Accommodation / transport cost: a number or an {amount} mapping."""
    if isinstance(raw, dict):
        return _as_float(_get(raw, "amount"), f"{field}.amount", warnings)
    return _as_float(raw, field, warnings)


def _read_activity(raw: Any, field: str, warnings: Warnings) -> Activity:
    if not isinstance(raw, dict):
        warn(warnings, field, raw, "activity is not an object; keeping an empty placeholder")
        return Activity()

    duration = _as_optional_int(_get(raw, "duration"), f"{field}.duration", warnings)
    if duration is not None and duration < 0:
        warn(warnings, f"{field}.duration", duration, "negative duration; using default")
        duration = None

    cost_raw = _get(raw, "cost")
    if cost_raw is not None and not isinstance(cost_raw, dict) and _get(raw, "currency"):
        cost_raw = {"amount": cost_raw, "currency": raw["currency"]}

    return Activity(
        id=_as_str(_get(raw, "id", default="")),
        name=_as_str(_get(raw, "name", default="")),
        type=_as_str(_get(raw, "type", default="")),
        start_time=parse_time_of_day(_get(raw, "startTime", "start_time"), f"{field}.startTime", warnings),
        duration=duration,
        cost=_read_cost(cost_raw, f"{field}.cost", warnings),
        tags=_as_str_list(_get(raw, "tags"), f"{field}.tags", warnings),
    )


def _read_accommodation(raw: Any, field: str, warnings: Warnings) -> Accommodation:
    if not isinstance(raw, dict):
        return Accommodation(name=_as_str(raw))
    return Accommodation(
        id=_as_str(_get(raw, "id", default="")),
        name=_as_str(_get(raw, "name", default="")),
        cost=_read_flat_cost(_get(raw, "cost"), f"{field}.cost", warnings),
    )


def _read_transport(raw: Any, field: str, warnings: Warnings) -> Transport:
    if not isinstance(raw, dict):
        return Transport(mode=_as_str(raw))
    return Transport(
        id=_as_str(_get(raw, "id", default="")),
        mode=_as_str(_get(raw, "mode", "type", default="")),
        cost=_read_flat_cost(_get(raw, "cost"), f"{field}.cost", warnings),
    )


def _read_optional_list(raw: dict, keys: tuple[str, ...], field: str, reader, warnings: Warnings):
    value = _get(raw, *keys)
    if value is None:
        return None
    return [
        reader(item, f"{field}[{i}]", warnings)
        for i, item in enumerate(_as_list(value, field, warnings))
    ]


def _read_day(raw: Any, position: int, clock: Clock, warnings: Warnings) -> DayItinerary:
    field = f"itinerary[{position}]"
    if not isinstance(raw, dict):
        warn(warnings, field, raw, "day is not an object; treating as empty")
        raw = {}

    day_number = _as_optional_int(_get(raw, "dayNumber", "day_number"), f"{field}.dayNumber", warnings)
    if day_number is None:
        day_number = position + 1
        warn(warnings, f"{field}.dayNumber", None, f"missing day number; using {day_number}")

    activities = [
        _read_activity(item, f"{field}.activities[{i}]", warnings)
        for i, item in enumerate(_as_list(_get(raw, "activities"), f"{field}.activities", warnings))
    ]

    return DayItinerary(
        day_number=day_number,
        date=normalize_date(_get(raw, "date"), f"{field}.date", clock, warnings),
        activities=activities,
        accommodations=_read_optional_list(
            raw, ("accommodations", "accommodation"), f"{field}.accommodations",
            _read_accommodation, warnings,
        ),
        transportation=_read_optional_list(
            raw, ("transportation", "transport"), f"{field}.transportation",
            _read_transport, warnings,
        ),
    )


def _read_travelers(raw: Any, warnings: Warnings) -> list[Traveler]:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return [Traveler() for _ in range(raw)]
    travelers = []
    for i, item in enumerate(_as_list(raw, "travelers", warnings)):
        if isinstance(item, dict):
            travelers.append(Traveler(
                name=_as_str(_get(item, "name", default="")),
                relationship=_as_str(_get(item, "relationship", default="")).lower(),
            ))
        else:
            travelers.append(Traveler(name=_as_str(item)))
    return travelers


def _read_budget(raw: Any, warnings: Warnings) -> TripBudget:
    if raw is None:
        return TripBudget()
    if not isinstance(raw, dict):
        return TripBudget(total=_as_float(raw, "budget", warnings))

    breakdown_raw = _get(raw, "breakdown")
    breakdown = None
    if isinstance(breakdown_raw, dict):
        breakdown = {
            _as_str(k): _as_float(v, f"budget.breakdown.{k}", warnings)
            for k, v in breakdown_raw.items()
        }
    elif breakdown_raw is not None:
        warn(warnings, "budget.breakdown", breakdown_raw, "expected an object; ignoring")

    return TripBudget(
        total=_as_float(_get(raw, "total"), "budget.total", warnings),
        currency=_as_str(_get(raw, "currency", default="")),
        breakdown=breakdown,
    )


def _read_coordinates(raw: Any, warnings: Warnings) -> Optional[Coordinates]:
    if not isinstance(raw, dict):
        return None
    return Coordinates(
        lat=_as_float(_get(raw, "lat", "latitude"), "destinationCoordinates.lat", warnings),
        lng=_as_float(_get(raw, "lng", "lon", "longitude"), "destinationCoordinates.lng", warnings),
    )


# ── Public API ─────────────────────────────────────────────────────────────────

def trip_from_document(
    doc: Any,
    clock: Clock = system_clock,
) -> tuple[Trip, list[NormalizationWarning]]:
    """Normalise a raw trip document. Never raises."""
    warnings: Warnings = []
    if not isinstance(doc, dict):
        warn(warnings, "trip", doc, "trip document is not an object; using an empty trip")
        doc = {}

    days = [
        _read_day(raw_day, i, clock, warnings)
        for i, raw_day in enumerate(_as_list(_get(doc, "itinerary"), "itinerary", warnings))
    ]

    trip = Trip(
        id=_as_str(_get(doc, "id", "tripId", default="")),
        destination_name=_as_str(_get(doc, "destinationName", "destination_name", "destination", default="")),
        start_date=normalize_date(_get(doc, "startDate", "start_date"), "startDate", clock, warnings),
        end_date=normalize_date(_get(doc, "endDate", "end_date"), "endDate", clock, warnings),
        travelers=_read_travelers(_get(doc, "travelers"), warnings),
        budget=_read_budget(_get(doc, "budget"), warnings),
        itinerary=days,
        destination_coordinates=_read_coordinates(
            _get(doc, "destinationCoordinates", "destination_coordinates"), warnings
        ),
    )
    return trip, warnings


def weather_from_documents(
    rows: Any,
    warnings: Optional[Warnings] = None,
    clock: Clock = system_clock,
) -> Optional[list[WeatherDay]]:
    """Normalise a forecast list; None stays None (no forecast available)."""
    if rows is None:
        return None
    warnings = warnings if warnings is not None else []
    forecast: list[WeatherDay] = []
    for i, row in enumerate(_as_list(rows, "weather", warnings)):
        field = f"weather[{i}]"
        if not isinstance(row, dict):
            warn(warnings, field, row, "forecast entry is not an object; assuming fair weather")
            forecast.append(WeatherDay())
            continue

        temperature = _get(row, "temperature")
        if isinstance(temperature, dict):
            temperature = _get(temperature, "high", "value")
        date_raw = _get(row, "date")
        forecast.append(WeatherDay(
            temperature=_as_optional_float(temperature, f"{field}.temperature", warnings),
            precipitation=_as_float(_get(row, "precipitation"), f"{field}.precipitation", warnings),
            wind_speed=_as_float(_get(row, "windSpeed", "wind_speed"), f"{field}.windSpeed", warnings),
            condition=_as_str(_get(row, "condition", default="")),
            date=normalize_date(date_raw, f"{field}.date", clock, warnings) if date_raw is not None else None,
        ))
    return forecast


def preferences_from_document(
    doc: Any,
    warnings: Optional[Warnings] = None,
) -> Optional[TravelPreferences]:
    """Wrap a preference document; the original mapping is kept for pass-through."""
    if not isinstance(doc, dict):
        return None
    scratch = warnings if warnings is not None else []
    return TravelPreferences(
        travel_style=_as_str(_get(doc, "travelStyle", "travel_style", default="")),
        interests=_as_str_list(_get(doc, "interests"), "preferences.interests", scratch),
        activity_types=_as_str_list(_get(doc, "activityTypes", "activity_types"), "preferences.activityTypes", scratch),
        pace_preference=_as_str(_get(doc, "pacePreference", "pace_preference", default="")),
        dietary_restrictions=_as_str_list(
            _get(doc, "dietaryRestrictions", "dietary_restrictions"), "preferences.dietaryRestrictions", scratch
        ),
        raw=dict(doc),
    )

"""
modules/analysis/context_builder.py
-----------------------------------
Top-level orchestrator of the itinerary analysis engine.

    result = build_trip_context(trip, preferences, weather, clock=clock)
    result.context   # EnhancedTripContext
    result.warnings  # every default that was applied to degraded input

Pipeline (pure, synchronous, no I/O):
  1. Resolve trip dates and the inclusive day span.
  2. Per day, in itinerary order: sort activities, find overlaps, compute
     free slots, meal coverage, weather suitability and day cost.
  3. Budget analysis, progress metrics, issue scan and quick stats.

The only source of "now" is the injected clock, so two calls with the same
snapshot and the same clock return equal results.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import config
from modules.analysis.adapter import (
    preferences_from_document, trip_from_document, weather_from_documents,
)
from modules.analysis.budget import analyze_budget, day_cost
from modules.analysis.issues import detect_issues
from modules.analysis.meals import check_meals
from modules.analysis.progress import analyze_progress, calculate_stats
from modules.analysis.temporal import (
    Clock, inclusive_day_span, normalize_date, system_clock, warn,
)
from modules.analysis.time_slots import find_conflicts, free_time_slots, sort_by_start
from modules.analysis.weather import is_weather_suitable, weather_for_day
from modules.validation import validate_trip
from schemas.context import (
    ContextResult, DayContext, DestinationInfo, DetailedActivity,
    EnhancedTripContext, NormalizationWarning, TravelerSummary, TravelerType,
    TripDates,
)
from schemas.trip import DayItinerary, Timestamp, TravelPreferences, Traveler, Trip, WeatherDay

logger = logging.getLogger(__name__)

DATES_NOT_SET = "Date not set"
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# ── Trip-level helpers ─────────────────────────────────────────────────────────

def format_date_range(start: Timestamp, end: Timestamp) -> str:
    """"MMM d – MMM d, yyyy", or a placeholder when either date was defaulted."""
    if start.is_fallback or end.is_fallback:
        return DATES_NOT_SET
    s, e = start.value, end.value
    return f"{_MONTHS[s.month - 1]} {s.day} – {_MONTHS[e.month - 1]} {e.day}, {e.year}"


def traveler_type(travelers: list[Traveler]) -> TravelerType:
    count = len(travelers)
    relationships = {t.relationship for t in travelers}
    if count == 1:
        return "solo"
    if count == 2:
        return "couple" if "partner" in relationships else "friends"
    if "family" in relationships:
        return "family"
    return "group" if count > 4 else "friends"


def destination_info(trip: Trip) -> Optional[DestinationInfo]:
    if trip.destination_coordinates is None:
        return None
    return DestinationInfo(
        timezone=config.DEFAULT_TIMEZONE,
        currency=trip.budget.currency or config.DEFAULT_CURRENCY,
        languages=list(config.DEFAULT_LANGUAGES),
        coordinates=trip.destination_coordinates,
    )


# ── Per-day analysis ───────────────────────────────────────────────────────────

def build_day_context(
    day: DayItinerary,
    trip: Trip,
    weather: Optional[list[WeatherDay]],
    clock: Clock,
    warnings: list[NormalizationWarning],
) -> DayContext:
    ordered = sort_by_start(day.activities)
    conflicts = find_conflicts(ordered)
    detailed = [
        DetailedActivity(
            activity=activity,
            day_number=day.day_number,
            conflicts=names,
            weather_suitable=is_weather_suitable(activity, day.day_number, weather),
        )
        for activity, names in zip(ordered, conflicts)
    ]
    meals = check_meals(ordered)
    date = day.date or normalize_date(None, f"day {day.day_number} date", clock, warnings)

    return DayContext(
        day_number=day.day_number,
        date=date,
        activities=detailed,
        accommodations=day.accommodations,
        transportation=day.transportation,
        total_cost=day_cost(day, trip.traveler_count),
        free_time_slots=free_time_slots(ordered),
        has_breakfast=meals.breakfast,
        has_lunch=meals.lunch,
        has_dinner=meals.dinner,
        weather=weather_for_day(weather, day.day_number),
    )


# ── Orchestrator ───────────────────────────────────────────────────────────────

def build_trip_context(
    trip: Trip,
    preferences: Optional[TravelPreferences] = None,
    weather: Optional[list[WeatherDay]] = None,
    *,
    clock: Optional[Clock] = None,
    warnings: Optional[list[NormalizationWarning]] = None,
) -> ContextResult:
    """
    Derive the enriched context for one trip snapshot.

    ``warnings`` lets a caller seed the result with diagnostics gathered while
    adapting the raw documents. Never raises on data content.
    """
    clock = clock or system_clock
    collected: list[NormalizationWarning] = list(warnings or [])
    now = clock()

    start = trip.start_date or normalize_date(None, "startDate", clock, collected)
    end = trip.end_date or normalize_date(None, "endDate", clock, collected)

    total_days = inclusive_day_span(start, end)
    if total_days < 1:
        warn(collected, "endDate", end.value.isoformat(),
             f"trip spans {total_days} days; treating it as a 1-day trip")
        total_days = 1

    for field, message in validate_trip(trip, total_days).errors:
        warn(collected, field, None, message)

    days = [build_day_context(day, trip, weather, clock, collected) for day in trip.itinerary]
    budget = analyze_budget(trip, start.value, total_days, now)
    progress = analyze_progress(trip, total_days)
    issues = detect_issues(days, budget, trip.budget.currency)
    stats = calculate_stats(trip, days)

    context = EnhancedTripContext(
        trip_id=trip.id,
        destination=trip.destination_name or "Unknown",
        destinations=[trip.destination_name] if trip.destination_name else [],
        dates=TripDates(start=start, end=end, formatted=format_date_range(start, end)),
        travelers=TravelerSummary(count=trip.traveler_count, type=traveler_type(trip.travelers)),
        detailed_itinerary=days,
        budget=budget,
        progress=progress,
        issues=issues,
        stats=stats,
        user_preferences=preferences,
        weather_forecast=weather,
        current_destination=destination_info(trip),
    )

    logger.debug(
        "Built context for trip %r: %d days, %d issues, %d warnings",
        trip.id, len(days), len(issues), len(collected),
    )
    return ContextResult(context=context, warnings=collected)


def build_context_from_document(
    trip_doc: Any,
    preferences_doc: Any = None,
    weather_docs: Any = None,
    *,
    clock: Optional[Clock] = None,
) -> ContextResult:
    """Adapt raw store documents and build their context in one call."""
    clock = clock or system_clock
    trip, warnings = trip_from_document(trip_doc, clock)
    weather = weather_from_documents(weather_docs, warnings, clock)
    preferences = preferences_from_document(preferences_doc, warnings)
    return build_trip_context(trip, preferences, weather, clock=clock, warnings=warnings)

"""
modules/analysis/progress.py
----------------------------
Planning-completeness metrics and descriptive trip statistics.
"""

from __future__ import annotations

import math

import config
from modules.analysis.time_slots import free_minutes
from schemas.context import DayContext, TripProgress, TripStats
from schemas.trip import Activity, Trip

PHOTO_TAG = "photography"
PHOTO_TYPE = "sightseeing"
PHOTO_NAME_KEYWORD = "viewpoint"
RESTAURANT_TYPES: frozenset[str] = frozenset({"dining", "restaurant"})


def _activity_counts(trip: Trip) -> dict[int, int]:
    """Activity count per day number; the first entry wins on duplicate numbers."""
    counts: dict[int, int] = {}
    for day in trip.itinerary:
        counts.setdefault(day.day_number, len(day.activities))
    return counts


def analyze_progress(trip: Trip, total_days: int) -> TripProgress:
    counts = _activity_counts(trip)

    empty_days: list[int] = []
    packed_days: list[int] = []
    for day_number in range(1, total_days + 1):
        count = counts.get(day_number, 0)
        if count == 0:
            empty_days.append(day_number)
        elif count > config.PACKED_DAY_THRESHOLD:
            packed_days.append(day_number)

    days_planned = sum(1 for day in trip.itinerary if day.activities)
    accommodation_days = sum(1 for day in trip.itinerary if day.accommodations)
    total_activities = sum(len(day.activities) for day in trip.itinerary)

    return TripProgress(
        days_planned=days_planned,
        total_days=total_days,
        accommodation_coverage=accommodation_days / total_days * 100,
        activities_per_day=total_activities / total_days,
        empty_days=empty_days,
        packed_days=packed_days,
    )


def is_photo_spot(activity: Activity) -> bool:
    return (
        PHOTO_TAG in activity.tags
        or activity.type == PHOTO_TYPE
        or PHOTO_NAME_KEYWORD in activity.name.lower()
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_stats(trip: Trip, days: list[DayContext]) -> TripStats:
    activities = [a for day in trip.itinerary for a in day.activities]
    free = sum(free_minutes(day.free_time_slots) for day in days)

    return TripStats(
        total_activities=len(activities),
        photo_spots=sum(1 for a in activities if is_photo_spot(a)),
        restaurants=sum(1 for a in activities if a.type in RESTAURANT_TYPES),
        free_time=_round_half_up(free / 60),
    )

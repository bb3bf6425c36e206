"""
modules/validation/ingestion_validator.py
------------------------------------------
Semantic sanity checks applied to a normalised Trip before analysis.

The adapter already guarantees well-typed values; these checks catch
documents that are well-typed but inconsistent:

  Trip:
    ✓ budget.total >= 0
    ✓ end date >= start date
    ✓ span of at most config.MAX_TRIP_DAYS days
  Itinerary:
    ✓ day_number > 0
    ✓ no duplicate day numbers
    ✓ day numbers within 1..total_days
  Activity:
    ✓ non-empty name
    ✓ cost amount >= 0

Failures never stop the pipeline; the context builder turns every error
into a NormalizationWarning.

Usage:
    from modules.validation import validate_trip

    result = validate_trip(trip)
    if not result.valid:
        print(result.errors)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import config
from schemas.trip import Activity, DayItinerary, Trip


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: (field, message) pairs describing each failure.
    """
    valid: bool
    errors: list[tuple[str, str]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def _result(errors: list[tuple[str, str]]) -> ValidationResult:
    return ValidationResult(valid=len(errors) == 0, errors=errors)


# ── Trip validation ────────────────────────────────────────────────────────────

def validate_trip_header(trip: Trip) -> ValidationResult:
    """Budget sign, date ordering and a plausible trip length."""
    errors: list[tuple[str, str]] = []

    if trip.budget.total < 0:
        errors.append(("budget.total", f"total={trip.budget.total} must be >= 0"))

    start, end = trip.start_date, trip.end_date
    if start is not None and end is not None and not (start.is_fallback or end.is_fallback):
        if end.value.date() < start.value.date():
            errors.append((
                "endDate",
                f"end date {end.value.date()} is before start date {start.value.date()}",
            ))
        else:
            span = (end.value.date() - start.value.date()).days + 1
            if span > config.MAX_TRIP_DAYS:
                errors.append((
                    "endDate",
                    f"trip spans {span} days, more than {config.MAX_TRIP_DAYS}",
                ))

    return _result(errors)


# ── Day number validation ──────────────────────────────────────────────────────

def validate_day_numbers(days: list[DayItinerary], total_days: int) -> ValidationResult:
    """Day numbers must be positive, unique and inside the trip span."""
    errors: list[tuple[str, str]] = []
    seen: set[int] = set()

    for i, day in enumerate(days):
        label = f"itinerary[{i}].dayNumber"
        if day.day_number <= 0:
            errors.append((label, f"day_number={day.day_number} must be > 0"))
        elif day.day_number > total_days:
            errors.append((label, f"day_number={day.day_number} is beyond the {total_days}-day trip"))
        if day.day_number in seen:
            errors.append((label, f"day_number={day.day_number} appears more than once"))
        seen.add(day.day_number)

    return _result(errors)


# ── Activity validation ────────────────────────────────────────────────────────

def validate_activity(activity: Activity, label: str) -> ValidationResult:
    errors: list[tuple[str, str]] = []

    if not activity.name.strip():
        errors.append((f"{label}.name", "name must not be empty"))

    if activity.cost is not None and activity.cost.amount < 0:
        errors.append((f"{label}.cost.amount", f"amount={activity.cost.amount} must be >= 0"))

    return _result(errors)


# ── Whole-trip helper ──────────────────────────────────────────────────────────

def validate_trip(trip: Trip, total_days: int) -> ValidationResult:
    """Run every check above and merge their errors in a stable order."""
    errors = list(validate_trip_header(trip).errors)
    errors.extend(validate_day_numbers(trip.itinerary, total_days).errors)
    for i, day in enumerate(trip.itinerary):
        for j, activity in enumerate(day.activities):
            errors.extend(validate_activity(activity, f"itinerary[{i}].activities[{j}]").errors)
    return _result(errors)

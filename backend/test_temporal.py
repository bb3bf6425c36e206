"""
test_temporal.py: date and time-of-day normalisation.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from conftest import FROZEN_NOW, activity, build, day, frozen_clock, trip
from modules.analysis.temporal import (
    format_minutes, inclusive_day_span, normalize_date, parse_time_of_day,
)
from schemas.trip import Timestamp


class StoreTimestamp:
    """Stand-in for a document-store timestamp object."""

    def __init__(self, value: datetime) -> None:
        self._value = value

    def toDate(self) -> datetime:  # noqa: N802
        return self._value


class BrokenTimestamp:
    def to_date(self) -> datetime:
        raise ValueError("corrupt timestamp")


class UnavailableTimestamp:
    """Store timestamp whose backend fails with its own error type."""

    def toDate(self) -> datetime:  # noqa: N802
        raise RuntimeError("timestamp backend unavailable")


# ── Dates ──────────────────────────────────────────────────────────────────────

def test_native_datetime_passes_through():
    value = datetime(2025, 5, 10, 9, 30)
    stamp = normalize_date(value, "startDate", frozen_clock)
    assert stamp == Timestamp(value, "native")


def test_plain_date_becomes_midnight():
    stamp = normalize_date(date(2025, 5, 10), "startDate", frozen_clock)
    assert stamp.value == datetime(2025, 5, 10)
    assert stamp.kind == "native"


def test_iso_strings():
    assert normalize_date("2025-05-10", "d", frozen_clock).value.date() == date(2025, 5, 10)
    stamp = normalize_date("2025-05-10T09:00:00Z", "d", frozen_clock)
    assert stamp.kind == "iso"
    assert stamp.value == datetime(2025, 5, 10, 9, 0, tzinfo=timezone.utc)


def test_object_with_to_date_method():
    stamp = normalize_date(StoreTimestamp(datetime(2025, 6, 1, 8)), "d", frozen_clock)
    assert stamp.kind == "to_date"
    assert stamp.value == datetime(2025, 6, 1, 8)


def test_serialised_store_timestamp():
    stamp = normalize_date({"_seconds": 1746835200, "_nanoseconds": 0}, "d", frozen_clock)
    assert stamp.kind == "epoch"
    assert stamp.value.date() == date(2025, 5, 10)


def test_missing_date_falls_back_to_clock_with_warning():
    warnings = []
    stamp = normalize_date(None, "startDate", frozen_clock, warnings)
    assert stamp.is_fallback
    assert stamp.value == FROZEN_NOW
    assert len(warnings) == 1
    assert warnings[0].field == "startDate"


def test_malformed_dates_never_raise():
    for raw in ("not a date", "2025-13-45", 42, [], BrokenTimestamp(), object()):
        warnings = []
        stamp = normalize_date(raw, "endDate", frozen_clock, warnings)
        assert stamp.is_fallback, raw
        assert stamp.value == FROZEN_NOW
        assert warnings and warnings[0].field == "endDate"


def test_inclusive_day_span_counts_both_ends():
    start = Timestamp(datetime(2025, 5, 10, 23, 0))
    end = Timestamp(datetime(2025, 5, 14, 1, 0))
    assert inclusive_day_span(start, end) == 5
    assert inclusive_day_span(start, start) == 1


# ── Times of day ───────────────────────────────────────────────────────────────

def test_hhmm_strings():
    assert parse_time_of_day("10:00", "t") == 600
    assert parse_time_of_day("9:05", "t") == 545
    assert parse_time_of_day("10:30:00", "t") == 630
    assert parse_time_of_day("00:00", "t") == 0
    assert parse_time_of_day("23:59", "t") == 1439


def test_date_like_times():
    assert parse_time_of_day(datetime(2025, 1, 1, 14, 15), "t") == 855
    assert parse_time_of_day(time(7, 45), "t") == 465
    assert parse_time_of_day("2025-05-10T18:20:00", "t") == 1100
    assert parse_time_of_day(StoreTimestamp(datetime(2025, 1, 1, 6, 0)), "t") == 360


def test_absent_time_is_unscheduled():
    assert parse_time_of_day(None, "t") is None
    assert parse_time_of_day("  ", "t") is None


def test_unreadable_time_becomes_midnight_with_warning():
    warnings = []
    assert parse_time_of_day("noon", "activities[0].startTime", warnings) == 0
    assert warnings[0].field == "activities[0].startTime"


def test_out_of_range_time_is_clamped():
    warnings = []
    assert parse_time_of_day("25:00", "t", warnings) == 1439
    assert len(warnings) == 1


def test_format_minutes():
    assert format_minutes(0) == "00:00"
    assert format_minutes(545) == "09:05"
    assert format_minutes(1320) == "22:00"


# ── Failing store conversions ──────────────────────────────────────────────────

def test_failing_to_date_method_falls_back():
    warnings = []
    stamp = normalize_date(UnavailableTimestamp(), "startDate", frozen_clock, warnings)
    assert stamp.is_fallback
    assert stamp.value == FROZEN_NOW
    assert "RuntimeError" in warnings[0].message


def test_failing_to_date_method_as_time_of_day():
    warnings = []
    assert parse_time_of_day(UnavailableTimestamp(), "t", warnings) == 0
    assert warnings[0].field == "t"


def test_failing_store_timestamps_do_not_stop_the_build():
    doc = trip(
        [day(1, [activity("Tour", start=UnavailableTimestamp())])],
        start=UnavailableTimestamp(),
    )
    result = build(doc)
    fields = {w.field for w in result.warnings}
    assert {"startDate", "itinerary[0].activities[0].startTime"} <= fields
    assert result.context.dates.formatted == "Date not set"
    assert result.context.detailed_itinerary[0].activities[0].activity.start_time == 0

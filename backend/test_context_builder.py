"""
test_context_builder.py: end-to-end context assembly from raw documents.
"""

from __future__ import annotations

import copy
import json
from datetime import datetime

import pytest

from conftest import FROZEN_NOW, activity, build, day, frozen_clock, trip
from main import SAMPLE_TRIP, SAMPLE_WEATHER
from modules.analysis.adapter import trip_from_document
from modules.analysis.context_builder import build_trip_context


# ── Determinism and purity ─────────────────────────────────────────────────────

def test_same_snapshot_and_clock_give_equal_output():
    first = build(SAMPLE_TRIP, weather=SAMPLE_WEATHER).to_dict()
    second = build(SAMPLE_TRIP, weather=SAMPLE_WEATHER).to_dict()
    assert first == second


def test_source_documents_are_not_mutated():
    doc = copy.deepcopy(SAMPLE_TRIP)
    weather = copy.deepcopy(SAMPLE_WEATHER)
    build(doc, weather=weather, preferences={"interests": ["food"]})
    assert doc == SAMPLE_TRIP
    assert weather == SAMPLE_WEATHER


def test_normalised_trip_is_not_mutated():
    trip_obj, _ = trip_from_document(trip([day(1, [
        activity("Late", "18:00"),
        activity("Early", "08:00"),
    ])]), frozen_clock)
    before = copy.deepcopy(trip_obj)
    result = build_trip_context(trip_obj, clock=frozen_clock)
    assert trip_obj == before
    assert [a.name for a in trip_obj.itinerary[0].activities] == ["Late", "Early"]
    assert [a.name for a in result.context.detailed_itinerary[0].activities] == ["Early", "Late"]


# ── The sample trip ────────────────────────────────────────────────────────────

def test_sample_trip_context():
    result = build(SAMPLE_TRIP, weather=SAMPLE_WEATHER)
    ctx = result.context

    assert result.warnings == []
    assert not result.degraded
    assert ctx.trip_id == "trip_sample_lisbon"
    assert ctx.destination == "Lisbon"
    assert ctx.destinations == ["Lisbon"]
    assert ctx.dates.formatted == "May 10 – May 12, 2025"
    assert (ctx.travelers.count, ctx.travelers.type) == (2, "couple")

    assert [(i.type, i.day) for i in ctx.issues] == [
        ("time_conflict", 1),
        ("time_conflict", 1),
        ("meal_gap", 2),
        ("no_accommodation", 2),
    ]
    assert ctx.budget.spent == 250
    assert ctx.progress.empty_days == [3]
    assert ctx.stats.free_time == 20

    day_two = ctx.detailed_itinerary[1]
    assert day_two.weather.precipitation == 85
    assert day_two.activities[0].weather_suitable is False
    assert day_two.total_cost == 80


def test_output_is_camel_case_and_json_ready():
    out = build(SAMPLE_TRIP, weather=SAMPLE_WEATHER).to_dict()
    json.dumps(out)

    ctx = out["context"]
    assert {"tripId", "detailedItinerary", "budget", "progress", "issues", "stats"} <= ctx.keys()
    assert "projectedOverage" not in ctx["budget"]
    assert ctx["budget"]["spentByCategory"]["food"] == 110
    assert ctx["dates"]["start"].startswith("2025-05-10")

    day_one = ctx["detailedItinerary"][0]
    assert {"dayNumber", "freeTimeSlots", "hasBreakfast", "hasLunch", "hasDinner", "totalCost"} <= day_one.keys()
    tower = day_one["activities"][0]
    assert tower["startTime"] == "09:30"
    assert tower["dayNumber"] == 1
    assert tower["weatherSuitable"] is True
    assert tower["conflicts"] == []
    assert day_one["activities"][1]["duration"] == 60


# ── Degraded input ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("doc", [
    None,
    42,
    "trip",
    [],
    {},
    {"itinerary": "nope"},
    {"itinerary": [None, 5, {"activities": [None, {"startTime": "late", "duration": -5, "cost": "abc"}]}]},
    {"startDate": {"seconds": "x"}, "endDate": object(), "budget": {"total": float("nan")}},
    {"travelers": 3, "budget": "a lot", "destinationCoordinates": {"lat": "north"}},
])
def test_garbage_documents_never_raise(doc):
    result = build(doc, weather="cloudy", preferences=["not", "a", "dict"])
    assert result.degraded
    json.dumps(result.to_dict())


def test_missing_dates_fall_back_to_clock():
    doc = trip([], start=None, end=None)
    result = build(doc)
    assert result.context.dates.start.value == FROZEN_NOW
    assert result.context.dates.formatted == "Date not set"
    assert {"startDate", "endDate"} <= {w.field for w in result.warnings}


def test_end_before_start_is_a_one_day_trip():
    result = build(trip([], start="2025-05-14", end="2025-05-10"))
    assert result.context.progress.total_days == 1
    assert result.context.budget.daily_average == 1000
    assert "endDate" in {w.field for w in result.warnings}


def test_missing_day_number_uses_position():
    doc = trip([day(1, []), {"date": "2025-05-11", "activities": []}])
    result = build(doc)
    assert [d.day_number for d in result.context.detailed_itinerary] == [1, 2]
    assert "itinerary[1].dayNumber" in {w.field for w in result.warnings}


def test_inconsistent_day_numbers_become_warnings():
    result = build(trip([day(1, []), day(1, []), day(9, [])]))
    fields = [w.field for w in result.warnings]
    assert fields.count("itinerary[1].dayNumber") == 1
    assert fields.count("itinerary[2].dayNumber") == 1


def test_unnamed_activity_is_flagged_but_analysed():
    result = build(trip([day(1, [{"startTime": "10:00"}])]))
    assert "itinerary[0].activities[0].name" in {w.field for w in result.warnings}
    assert result.context.stats.total_activities == 1


def test_empty_trip_baseline():
    result = build(trip([]))
    ctx = result.context
    assert result.warnings == []
    assert ctx.issues == []
    assert ctx.detailed_itinerary == []
    assert ctx.progress.empty_days == [1, 2, 3, 4, 5]
    assert ctx.budget.spent == 0
    assert ctx.stats.free_time == 0


def test_unknown_destination():
    result = build(trip([], destinationName=None))
    assert result.context.destination == "Unknown"
    assert result.context.destinations == []


# ── Optional sections ──────────────────────────────────────────────────────────

def test_current_destination_needs_coordinates():
    assert "currentDestination" not in build(trip([])).to_dict()["context"]

    doc = trip([], destinationCoordinates={"lat": 38.72, "lng": -9.14})
    info = build(doc).to_dict()["context"]["currentDestination"]
    assert info == {
        "timezone": "UTC",
        "currency": "USD",
        "languages": ["English"],
        "coordinates": {"lat": 38.72, "lng": -9.14},
    }


def test_preferences_pass_through_unchanged():
    prefs = {"travelStyle": "slow", "interests": ["food"], "customFlag": True}
    out = build(trip([]), preferences=prefs).to_dict()["context"]
    assert out["userPreferences"] == prefs


def test_weather_is_attached_by_day_number():
    doc = trip([day(1, []), day(2, [])])
    result = build(doc, weather=[{"condition": "Sunny", "temperature": {"high": 24}}])
    first, second = result.context.detailed_itinerary
    assert first.weather.condition == "Sunny"
    assert first.weather.temperature == 24
    assert second.weather is None


def test_clock_is_the_only_source_of_now():
    late = datetime(2025, 5, 13)
    result = build_trip_context(
        trip_from_document(trip([]), frozen_clock)[0],
        clock=lambda: late,
    )
    # 2025-05-10 .. 2025-05-14 with three days elapsed
    assert result.context.budget.remaining_daily == 500

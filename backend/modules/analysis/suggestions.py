"""
modules/analysis/suggestions.py
-------------------------------
Assistant-facing nudges derived from a built EnhancedTripContext.

Each rule contributes zero or more SmartSuggestion entries with a fixed
priority; the result is the top config.MAX_SUGGESTIONS by priority (ties
keep rule order). generate_quick_prompts() returns short chat prompts.

This module only reads the context; it never touches the trip snapshot.
"""

from __future__ import annotations

import math

import config
from schemas.context import DayContext, EnhancedTripContext, SmartSuggestion

LONG_FREE_SLOT_MIN = 120
LOW_BUDGET_SHARE = 0.2
MIN_PHOTO_SPOTS = 3
ROUTE_OPTIMIZATION_MIN_ACTIVITIES = 3
LUNCH_SUGGESTION_MIN_ACTIVITIES = 2


def _is_rainy(day: DayContext) -> bool:
    return day.weather is not None and day.weather.precipitation > config.RAINY_DAY_PRECIPITATION_PCT


def _interests(ctx: EnhancedTripContext) -> list[str]:
    return ctx.user_preferences.interests if ctx.user_preferences else []


# ── Rules ──────────────────────────────────────────────────────────────────────

def accommodation_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    out: list[SmartSuggestion] = []
    progress = ctx.progress

    if progress.accommodation_coverage < 100:
        nights = math.ceil(progress.total_days * (1 - progress.accommodation_coverage / 100))
        out.append(SmartSuggestion(
            id="accommodation-missing",
            text=f"Find hotels for {nights} nights",
            icon="🏨", priority=10, category="booking",
            metadata={"placeType": "lodging"},
        ))

    for day in ctx.detailed_itinerary:
        if not day.accommodations and day.activities:
            out.append(SmartSuggestion(
                id=f"accommodation-day-{day.day_number}",
                text=f"Find accommodation near Day {day.day_number} activities",
                icon="🛏️", priority=8, category="booking",
                metadata={"day": day.day_number, "placeType": "lodging"},
            ))
    return out


def activity_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    out: list[SmartSuggestion] = []

    for day_number in ctx.progress.empty_days:
        out.append(SmartSuggestion(
            id=f"activities-day-{day_number}",
            text=f"Plan activities for Day {day_number}",
            icon="📅", priority=9, category="planning",
            metadata={"day": day_number},
        ))

    for day in ctx.detailed_itinerary:
        long_slots = [s for s in day.free_time_slots if s.duration >= LONG_FREE_SLOT_MIN]
        if long_slots:
            out.append(SmartSuggestion(
                id=f"fill-free-time-{day.day_number}",
                text=f"Fill {len(long_slots)} free time slots on Day {day.day_number}",
                icon="⏰", priority=6, category="planning",
                metadata={"day": day.day_number},
            ))

    if "photography" in _interests(ctx) and ctx.stats.photo_spots < MIN_PHOTO_SPOTS:
        out.append(SmartSuggestion(
            id="photo-spots",
            text="Find the best photo spots nearby",
            icon="📸", priority=5, category="discovery",
            metadata={"placeType": "tourist_attraction"},
        ))
    return out


def budget_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    budget = ctx.budget
    if budget.is_over_budget:
        return [
            SmartSuggestion(
                id="budget-overrun",
                text=f"Reduce costs - over budget by {budget.projected_overage:,.2f}",
                icon="💰", priority=9, category="alert",
            ),
            SmartSuggestion(
                id="free-activities",
                text="Find free activities to balance budget",
                icon="🆓", priority=8, category="discovery",
            ),
        ]
    if budget.remaining < budget.total * LOW_BUDGET_SHARE:
        return [SmartSuggestion(
            id="budget-warning",
            text="Find budget-friendly options",
            icon="💵", priority=7, category="optimization",
        )]
    return []


def meal_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    out: list[SmartSuggestion] = []

    for day in ctx.detailed_itinerary:
        if not day.has_lunch and len(day.activities) > LUNCH_SUGGESTION_MIN_ACTIVITIES:
            out.append(SmartSuggestion(
                id=f"lunch-day-{day.day_number}",
                text=f"Find lunch spot for Day {day.day_number}",
                icon="🍽️", priority=7, category="planning",
                metadata={"day": day.day_number, "placeType": "restaurant"},
            ))
        if not day.has_dinner:
            out.append(SmartSuggestion(
                id=f"dinner-day-{day.day_number}",
                text=f"Find dinner restaurant for Day {day.day_number}",
                icon="🍝", priority=6, category="planning",
                metadata={"day": day.day_number, "placeType": "restaurant"},
            ))

    prefs = ctx.user_preferences
    if prefs and prefs.dietary_restrictions:
        out.append(SmartSuggestion(
            id="dietary-restaurants",
            text=f"Find {', '.join(prefs.dietary_restrictions)} restaurants",
            icon="🥗", priority=7, category="discovery",
            metadata={"placeType": "restaurant"},
        ))
    return out


def weather_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    if not ctx.weather_forecast:
        return []
    rainy_days = [day for day in ctx.detailed_itinerary if _is_rainy(day)]
    if not rainy_days:
        return []

    out = [SmartSuggestion(
        id="rainy-day-activities",
        text=f"Find indoor activities for {len(rainy_days)} rainy days",
        icon="🌧️", priority=7, category="planning",
    )]
    for day in rainy_days:
        if any(not a.weather_suitable for a in day.activities):
            out.append(SmartSuggestion(
                id=f"weather-conflict-{day.day_number}",
                text=f"Find alternatives for outdoor activities on rainy Day {day.day_number}",
                icon="⛈️", priority=8, category="alert",
                metadata={"day": day.day_number},
            ))
    return out


def optimization_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    out: list[SmartSuggestion] = []

    for day_number in ctx.progress.packed_days:
        out.append(SmartSuggestion(
            id=f"optimize-day-{day_number}",
            text=f"Optimize packed Day {day_number} itinerary",
            icon="🗓️", priority=6, category="optimization",
            metadata={"day": day_number},
        ))

    if any(len(day.activities) >= ROUTE_OPTIMIZATION_MIN_ACTIVITIES for day in ctx.detailed_itinerary):
        out.append(SmartSuggestion(
            id="optimize-routes",
            text="Optimize routes to save travel time",
            icon="🗺️", priority=5, category="optimization",
        ))

    conflict_days = {i.day for i in ctx.issues if i.type == "time_conflict"}
    if conflict_days:
        out.append(SmartSuggestion(
            id="resolve-conflicts",
            text=f"Resolve time conflicts on {len(conflict_days)} days",
            icon="⚠️", priority=9, category="alert",
        ))
    return out


def preference_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    prefs = ctx.user_preferences
    if prefs is None:
        return []

    out: list[SmartSuggestion] = []
    planned_types = {a.type for day in ctx.detailed_itinerary for a in day.activities}
    for activity_type in prefs.activity_types:
        if activity_type not in planned_types:
            out.append(SmartSuggestion(
                id=f"activity-type-{activity_type}",
                text=f"Add {activity_type} activities you enjoy",
                icon="✨", priority=4, category="discovery",
                metadata={"placeType": activity_type},
            ))

    if prefs.pace_preference == "relaxed" and ctx.progress.packed_days:
        out.append(SmartSuggestion(
            id="slow-down-pace",
            text="Reduce activities for a more relaxed pace",
            icon="🌴", priority=6, category="optimization",
        ))
    return out


_RULES = (
    accommodation_suggestions,
    activity_suggestions,
    budget_suggestions,
    meal_suggestions,
    weather_suggestions,
    optimization_suggestions,
    preference_suggestions,
)


# ── Public API ─────────────────────────────────────────────────────────────────

def generate_suggestions(ctx: EnhancedTripContext) -> list[SmartSuggestion]:
    suggestions = [s for rule in _RULES for s in rule(ctx)]
    suggestions.sort(key=lambda s: s.priority, reverse=True)
    return suggestions[:config.MAX_SUGGESTIONS]


def generate_quick_prompts(ctx: EnhancedTripContext) -> list[str]:
    prompts: list[str] = []

    if ctx.progress.empty_days:
        prompts.append(f"What should I do on Day {ctx.progress.empty_days[0]}?")

    if ctx.progress.accommodation_coverage < 100:
        prompts.append("Find hotels near my activities")

    no_lunch = [d.day_number for d in ctx.detailed_itinerary if not d.has_lunch and d.activities]
    if no_lunch:
        prompts.append(f"Where should I have lunch on Day {no_lunch[0]}?")

    if ctx.budget.remaining > 0:
        prompts.append("What can I do with my remaining budget?")

    if any(_is_rainy(day) for day in ctx.detailed_itinerary):
        prompts.append("What indoor activities do you recommend?")

    interests = _interests(ctx)
    if "food" in interests:
        prompts.append("Find the best local food experiences")
    if "photography" in interests:
        prompts.append("Where are the best photo spots?")

    prompts.extend([
        "Optimize my daily routes",
        "Find hidden gems locals love",
        "What should I pack for this trip?",
    ])
    return prompts[:config.MAX_QUICK_PROMPTS]

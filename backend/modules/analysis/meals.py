"""
modules/analysis/meals.py
-------------------------
Breakfast / lunch / dinner coverage for one day.

An activity covers a meal when it starts inside the meal's window AND one of:
  - its type equals a meal keyword,
  - its lowercased name contains a meal keyword,
  - its type is "dining".
Windows are half-open [start, end) in minutes since midnight.
"""

from __future__ import annotations
from dataclasses import dataclass

from schemas.trip import Activity

DINING_TYPE = "dining"


@dataclass(frozen=True)
class MealWindow:
    start: int
    end: int
    keywords: tuple[str, ...]


BREAKFAST = MealWindow(6 * 60,  11 * 60, ("breakfast", "brunch", "cafe"))
LUNCH     = MealWindow(11 * 60, 15 * 60, ("lunch", "brunch", "restaurant"))
DINNER    = MealWindow(17 * 60, 22 * 60, ("dinner", "restaurant"))


@dataclass(frozen=True)
class MealCoverage:
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False


def _covers(activity: Activity, window: MealWindow) -> bool:
    if activity.start_time is None:
        return False
    if not (window.start <= activity.start_time < window.end):
        return False
    if activity.type == DINING_TYPE:
        return True
    name = activity.name.lower()
    return any(activity.type == kw or kw in name for kw in window.keywords)


def has_meal(activities: list[Activity], window: MealWindow) -> bool:
    return any(_covers(a, window) for a in activities)


def check_meals(activities: list[Activity]) -> MealCoverage:
    return MealCoverage(
        breakfast=has_meal(activities, BREAKFAST),
        lunch=has_meal(activities, LUNCH),
        dinner=has_meal(activities, DINNER),
    )

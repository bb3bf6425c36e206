"""
modules/analysis/budget.py
--------------------------
Cost aggregation and budget analysis over the whole itinerary.

Cost rules
~~~~~~~~~~
  Activity       amount × traveler count when flagged per-person, else amount.
                 "dining" → food bucket, anything else → activities bucket.
  Accommodation  face value (already trip-scoped) → accommodation bucket.
  Transport      face value (already trip-scoped) → transport bucket.
  shopping / other are reserved buckets and stay at 0.

Budget figures
~~~~~~~~~~~~~~
  spent            Σ(all buckets)
  remaining        total − spent           (may be negative)
  isOverBudget     spent > total
  projectedOverage spent − total when over budget, unset otherwise
  dailyAverage     total / totalDays
  remainingDaily   remaining / max(daysRemaining, 1)
                   daysRemaining = max(totalDays − daysElapsed, 1)
                   daysElapsed   = clamp(now − start, 0, totalDays)

Amounts are summed as given; no currency conversion is attempted.
"""

from __future__ import annotations
from datetime import datetime

from modules.analysis.temporal import days_between
from schemas.context import BudgetAnalysis, BudgetBreakdown
from schemas.trip import Activity, DayItinerary, Trip

FOOD_ACTIVITY_TYPE = "dining"


def activity_cost(activity: Activity, traveler_count: int) -> float:
    if activity.cost is None:
        return 0.0
    multiplier = traveler_count if activity.cost.per_person else 1
    return activity.cost.amount * multiplier


def day_cost(day: DayItinerary, traveler_count: int) -> float:
    """Total spend attributable to one day: activities, lodging and transport."""
    cost = sum(activity_cost(a, traveler_count) for a in day.activities)
    cost += sum(acc.cost for acc in day.accommodations or [])
    cost += sum(t.cost for t in day.transportation or [])
    return cost


def aggregate_costs(trip: Trip) -> BudgetBreakdown:
    breakdown = BudgetBreakdown()
    travelers = trip.traveler_count

    for day in trip.itinerary:
        for activity in day.activities:
            cost = activity_cost(activity, travelers)
            if activity.type == FOOD_ACTIVITY_TYPE:
                breakdown.food += cost
            else:
                breakdown.activities += cost
        for acc in day.accommodations or []:
            breakdown.accommodation += acc.cost
        for transport in day.transportation or []:
            breakdown.transport += transport.cost

    return breakdown


def days_elapsed(start: datetime, now: datetime, total_days: int) -> int:
    return max(0, min(days_between(start, now), total_days))


def analyze_budget(
    trip: Trip,
    start: datetime,
    total_days: int,
    now: datetime,
) -> BudgetAnalysis:
    """
    Compare computed spend against the trip budget.

    ``total_days`` must already be ≥ 1 (the context builder guarantees it);
    ``start`` is the resolved trip start and ``now`` comes from the injected clock.
    """
    total = trip.budget.total
    spent_by_category = aggregate_costs(trip)
    spent = spent_by_category.total
    remaining = total - spent
    over = spent > total

    elapsed = days_elapsed(start, now, total_days)
    days_remaining = max(total_days - elapsed, 1)

    return BudgetAnalysis(
        total=total,
        spent=spent,
        remaining=remaining,
        breakdown=trip.budget.breakdown or spent_by_category,
        daily_average=total / total_days,
        spent_by_category=spent_by_category,
        remaining_daily=remaining / max(days_remaining, 1),
        is_over_budget=over,
        projected_overage=spent - total if over else None,
    )

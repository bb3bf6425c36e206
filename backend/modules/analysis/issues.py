"""
modules/analysis/issues.py
--------------------------
Rule scan over the analysed days that emits plan defects in a fixed order:

  1. time_conflict     (high)    one per activity that overlaps another
  2. meal_gap          (medium)  day has activities but no lunch
  3. no_accommodation  (high)    day has no accommodation entry
  4. budget_overrun    (high)    once, trip-level, when over budget

Rules 1–3 run day by day in itinerary order. Nothing is ranked or deduplicated:
one overlapping pair yields two time_conflict issues.

Only lunch is checked for meal_gap; missing breakfast or dinner is not
reported. Weather-unsuitable activities do not produce weather_conflict
issues either; both are current product behaviour.
"""

from __future__ import annotations

from schemas.context import BudgetAnalysis, DayContext, TripIssue


def _format_amount(amount: float, currency: str) -> str:
    text = f"{amount:,.2f}"
    return f"{text} {currency}" if currency else text


def conflict_issues(day: DayContext) -> list[TripIssue]:
    return [
        TripIssue(
            type="time_conflict",
            severity="high",
            day=day.day_number,
            message=f"{activity.name} overlaps with {', '.join(activity.conflicts)}",
            suggestion="Adjust timing or choose one activity",
            activities=[activity.name, *activity.conflicts],
        )
        for activity in day.activities
        if activity.conflicts
    ]


def meal_gap_issue(day: DayContext) -> TripIssue | None:
    if day.activities and not day.has_lunch:
        return TripIssue(
            type="meal_gap",
            severity="medium",
            day=day.day_number,
            message="No lunch planned",
            suggestion="Add a lunch break between activities",
        )
    return None


def accommodation_issue(day: DayContext) -> TripIssue | None:
    if not day.accommodations:
        return TripIssue(
            type="no_accommodation",
            severity="high",
            day=day.day_number,
            message=f"No accommodation for Day {day.day_number}",
            suggestion="Book accommodation for this night",
        )
    return None


def budget_issue(budget: BudgetAnalysis, currency: str = "") -> TripIssue | None:
    if not budget.is_over_budget:
        return None
    overage = budget.projected_overage or 0.0
    return TripIssue(
        type="budget_overrun",
        severity="high",
        message=f"Over budget by {_format_amount(overage, currency)}",
        suggestion="Review expensive activities or find free alternatives",
    )


def detect_issues(
    days: list[DayContext],
    budget: BudgetAnalysis,
    currency: str = "",
) -> list[TripIssue]:
    issues: list[TripIssue] = []
    for day in days:
        issues.extend(conflict_issues(day))
        for issue in (meal_gap_issue(day), accommodation_issue(day)):
            if issue is not None:
                issues.append(issue)

    overrun = budget_issue(budget, currency)
    if overrun is not None:
        issues.append(overrun)
    return issues

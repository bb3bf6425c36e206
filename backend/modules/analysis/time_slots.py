"""
modules/analysis/time_slots.py
------------------------------
Per-day schedule analysis: chronological ordering, pairwise overlap
detection and free-time windows inside the 08:00–22:00 planning day.

Intervals are half-open [start, start + duration). Two activities conflict
iff aStart < bEnd and aEnd > bStart. Unscheduled activities (no start time)
never conflict with anything.
"""

from __future__ import annotations

import config
from modules.analysis.temporal import format_minutes
from schemas.context import TimeSlot
from schemas.trip import Activity


def sort_by_start(activities: list[Activity]) -> list[Activity]:
    """Ascending by start minute; sorted() is stable so ties keep input order."""
    return sorted(activities, key=lambda a: a.start_minute)


def _overlaps(a: Activity, b: Activity) -> bool:
    return a.start_minute < b.end_minute and a.end_minute > b.start_minute


def find_conflicts(activities: list[Activity]) -> list[list[str]]:
    """
    Return, for each activity (same order as given), the names of every other
    activity on the day whose interval overlaps it.

    The relation is symmetric: i lists j iff j lists i.
    """
    overlapping: list[list[int]] = [[] for _ in activities]
    for i, current in enumerate(activities):
        if current.start_time is None:
            continue
        for j in range(i + 1, len(activities)):
            other = activities[j]
            if other.start_time is not None and _overlaps(current, other):
                overlapping[i].append(j)
                overlapping[j].append(i)
    # Names follow the day order of the other activity
    return [[activities[k].name for k in sorted(idx)] for idx in overlapping]


def _slot(start: int, end: int) -> TimeSlot | None:
    start = max(start, config.DAY_WINDOW_START_MIN)
    end = min(end, config.DAY_WINDOW_END_MIN)
    if end - start < config.MIN_FREE_SLOT_MIN:
        return None
    return TimeSlot(start=format_minutes(start), end=format_minutes(end), duration=end - start)


def free_time_slots(activities: list[Activity]) -> list[TimeSlot]:
    """
    Unscheduled windows of at least MIN_FREE_SLOT_MIN minutes within the day.

    - No activities: the whole window is free.
    - Before the first activity, if it starts after the window opens.
    - Between consecutive activities whose gap exceeds the minimum.
    - After the last activity, if it ends before the window closes.
    """
    window_start = config.DAY_WINDOW_START_MIN
    window_end = config.DAY_WINDOW_END_MIN

    if not activities:
        slot = _slot(window_start, window_end)
        return [slot] if slot else []

    ordered = sort_by_start(activities)
    candidates: list[TimeSlot | None] = []

    first_start = ordered[0].start_minute
    if first_start > window_start:
        candidates.append(_slot(window_start, first_start))

    for current, nxt in zip(ordered, ordered[1:]):
        gap_start = current.end_minute
        gap_end = nxt.start_minute
        if gap_end - gap_start > config.MIN_FREE_SLOT_MIN:
            candidates.append(_slot(gap_start, gap_end))

    last_end = ordered[-1].end_minute
    if last_end < window_end:
        candidates.append(_slot(last_end, window_end))

    return [slot for slot in candidates if slot is not None]


def free_minutes(slots: list[TimeSlot]) -> int:
    return sum(slot.duration for slot in slots)

"""Interval arithmetic over aware datetimes.

All intervals are half-open ``[start, end)``. Durations are whole minutes
obtained by truncating total seconds, never rounded, so the same inputs always
give the same result.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Tuple

from ..breaks.model import BreakRuleSet
from ..common.datetime_utils import at_business_time

Interval = Tuple[datetime, datetime]


def whole_minutes(start: datetime, end: datetime) -> int:
    seconds = int((end - start).total_seconds())
    return seconds // 60


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Union of possibly overlapping intervals, sorted by start."""
    ordered = sorted((s, e) for s, e in intervals if s < e)
    merged: List[Interval] = []
    for start, end in ordered:
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def clip(interval: Interval, window: Interval) -> Interval | None:
    start = max(interval[0], window[0])
    end = min(interval[1], window[1])
    if start >= end:
        return None
    return start, end


def overlap_minutes(window: Interval, intervals: Iterable[Interval]) -> int:
    """Minutes of ``window`` covered by the union of ``intervals``.

    Overlapping intervals are merged first so a misconfigured pair of rules is
    never subtracted twice.
    """
    total = 0
    for interval in merge_intervals(intervals):
        clipped = clip(interval, window)
        if clipped:
            total += whole_minutes(*clipped)
    return total


def resolve_break_intervals(rule_set: BreakRuleSet, work_date: date) -> List[Interval]:
    """Absolute break windows on ``work_date`` in the business timezone."""
    return [
        (at_business_time(work_date, rule.start_time), at_business_time(work_date, rule.end_time))
        for rule in rule_set.rules_for(work_date.weekday())
    ]

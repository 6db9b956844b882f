from __future__ import annotations

from datetime import datetime

from ...breaks.model import BreakRuleSet
from ...common.datetime_utils import business_date, to_business
from ...core.exceptions import InvalidOrder
from ..intervals import overlap_minutes, resolve_break_intervals, whole_minutes
from .base import WorkTimeCalculator


class BreakWindowCalculator(WorkTimeCalculator):
    """Standard rule: (out - in) - overlap with break windows, not below 0.

    Break windows are resolved on the business date of ``clock_in`` only; a
    shift that ends on the next day is not checked against that day's rules.
    """

    @staticmethod
    def _validated(clock_in: datetime, clock_out: datetime) -> tuple[datetime, datetime]:
        start, end = to_business(clock_in), to_business(clock_out)
        if end <= start:
            raise InvalidOrder(f"Clock-out {end.isoformat()} must be after clock-in {start.isoformat()}")
        return start, end

    def gross_minutes(self, clock_in: datetime, clock_out: datetime) -> int:
        start, end = self._validated(clock_in, clock_out)
        return whole_minutes(start, end)

    def break_minutes(self, clock_in: datetime, clock_out: datetime, rule_set: BreakRuleSet) -> int:
        start, end = self._validated(clock_in, clock_out)
        breaks = resolve_break_intervals(rule_set, business_date(start))
        return overlap_minutes((start, end), breaks)

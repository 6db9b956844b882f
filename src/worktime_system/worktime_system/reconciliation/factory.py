from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_EXCESSIVE_THRESHOLD_MINUTES, DEFAULT_LOW_TOLERANCE_MINUTES
from .strategies.balanced_strategy import BalancedStrategy
from .strategies.base import ReconciliationStrategy
from .strategies.excessive_strategy import ExcessiveStrategy
from .strategies.low_strategy import LowStrategy


@dataclass
class ReconciliationStrategyFactory:
    """Factory Pattern: choose the classification for a day's totals.

    ``excessive`` wins when task time exceeds attendance by more than the
    threshold; ``low`` when task time is below attendance by more than the
    tolerance; anything else is ``balanced``.
    """

    excessive_threshold_minutes: int = DEFAULT_EXCESSIVE_THRESHOLD_MINUTES
    low_tolerance_minutes: int = DEFAULT_LOW_TOLERANCE_MINUTES

    def for_totals(self, *, attendance_minutes: int, work_minutes: int) -> ReconciliationStrategy:
        difference = work_minutes - attendance_minutes
        if difference > self.excessive_threshold_minutes:
            return ExcessiveStrategy()
        if work_minutes < attendance_minutes - self.low_tolerance_minutes:
            return LowStrategy()
        return BalancedStrategy()

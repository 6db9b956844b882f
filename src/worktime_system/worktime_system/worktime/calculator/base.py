from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...breaks.model import BreakRuleSet


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked minutes)."""

    @abstractmethod
    def gross_minutes(self, clock_in: datetime, clock_out: datetime) -> int:
        raise NotImplementedError

    @abstractmethod
    def break_minutes(self, clock_in: datetime, clock_out: datetime, rule_set: BreakRuleSet) -> int:
        raise NotImplementedError

    def net_minutes(self, clock_in: datetime, clock_out: datetime, rule_set: BreakRuleSet) -> int:
        minutes = self.gross_minutes(clock_in, clock_out) - self.break_minutes(clock_in, clock_out, rule_set)
        return max(minutes, 0)

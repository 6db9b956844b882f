from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import time
from typing import FrozenSet, Iterable, Optional

from ..core.enums import Weekday
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class BreakRule:
    """Recurring break window ``[start_time, end_time)`` on selected weekdays.

    ``applies_on=None`` means every day of the week.
    """

    rule_id: int
    name: str
    start_time: time
    end_time: time
    applies_on: Optional[FrozenSet[Weekday]] = None
    is_active: bool = True

    def __post_init__(self):
        if not self.start_time < self.end_time:
            raise ValidationError(
                f"Break rule {self.name!r}: start {self.start_time} must be before end {self.end_time}"
            )

    def applies_to(self, weekday: int) -> bool:
        return self.applies_on is None or Weekday(weekday) in self.applies_on

    def canonical(self) -> str:
        days = "all" if self.applies_on is None else ",".join(d.name for d in sorted(self.applies_on))
        return f"{self.rule_id}|{self.start_time.isoformat()}|{self.end_time.isoformat()}|{days}"


@dataclass(frozen=True)
class BreakRuleSet:
    """Immutable snapshot of the active break rules, passed into every computation."""

    rules: tuple[BreakRule, ...] = ()
    version: str = field(default="")

    @classmethod
    def from_rules(cls, rules: Iterable[BreakRule]) -> "BreakRuleSet":
        active = tuple(sorted((r for r in rules if r.is_active), key=lambda r: (r.start_time, r.rule_id)))
        digest = hashlib.sha256("\n".join(r.canonical() for r in active).encode("utf-8")).hexdigest()
        return cls(rules=active, version=digest[:16])

    def rules_for(self, weekday: int) -> tuple[BreakRule, ...]:
        return tuple(r for r in self.rules if r.applies_to(weekday))


EMPTY_RULE_SET = BreakRuleSet.from_rules(())

from __future__ import annotations

from ...core.enums import Classification
from .base import ClassificationDecision, ReconciliationStrategy


class ExcessiveStrategy(ReconciliationStrategy):
    """More task time logged than attended: a data-entry problem, not overtime."""

    def decide(self, *, attendance_minutes: int, work_minutes: int) -> ClassificationDecision:
        over = work_minutes - attendance_minutes
        return ClassificationDecision(
            classification=Classification.EXCESSIVE,
            note=f"Task records exceed attendance by {over} min",
        )

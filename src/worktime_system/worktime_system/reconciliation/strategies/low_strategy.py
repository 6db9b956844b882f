from __future__ import annotations

from ...core.enums import Classification
from .base import ClassificationDecision, ReconciliationStrategy


class LowStrategy(ReconciliationStrategy):
    """Attended but under-logged tasks."""

    def decide(self, *, attendance_minutes: int, work_minutes: int) -> ClassificationDecision:
        missing = attendance_minutes - work_minutes
        return ClassificationDecision(
            classification=Classification.LOW,
            note=f"{missing} min of attendance not covered by task records",
        )

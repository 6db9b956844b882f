from __future__ import annotations

from ...core.enums import Classification
from .base import ClassificationDecision, ReconciliationStrategy


class BalancedStrategy(ReconciliationStrategy):
    def decide(self, *, attendance_minutes: int, work_minutes: int) -> ClassificationDecision:
        return ClassificationDecision(classification=Classification.BALANCED)

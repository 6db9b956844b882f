from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import Classification


@dataclass(frozen=True)
class ClassificationDecision:
    classification: Classification
    note: Optional[str] = None


class ReconciliationStrategy(ABC):
    """Strategy Pattern: how a logged-vs-attended gap is reported."""

    @abstractmethod
    def decide(self, *, attendance_minutes: int, work_minutes: int) -> ClassificationDecision:
        raise NotImplementedError

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import WorkRecord


class WorkRecordRepository(Protocol):
    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[WorkRecord]:
        """Records whose start time falls on ``work_date`` (business timezone)."""

        raise NotImplementedError

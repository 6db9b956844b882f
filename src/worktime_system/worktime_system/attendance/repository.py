from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        """Oldest record of the user that has no clock-out."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_closed_refs(self) -> Sequence[tuple[int, int]]:
        """``(attendance_id, user_id)`` of every record that has a clock-out."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        device: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def close(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        work_minutes: int,
        device: Optional[str] = None,
    ) -> bool:
        """Set clock-out only if the record is still open. False when it was not."""

        raise NotImplementedError

    def update_times(
        self,
        *,
        attendance_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime],
        work_minutes: Optional[int],
        expected_version: int,
    ) -> bool:
        """Admin override, guarded by the version that was read."""

        raise NotImplementedError

    def update_work_minutes(self, *, attendance_id: int, work_minutes: int, expected_version: int) -> bool:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso
from ..core.enums import AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user, business date)."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    work_minutes: Optional[int] = None
    clock_in_device: Optional[str] = None
    clock_out_device: Optional[str] = None
    version: int = 1

    @property
    def state(self) -> AttendanceState:
        return AttendanceState.OPEN if self.clock_out is None else AttendanceState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def with_work_minutes(self, work_minutes: Optional[int]) -> "AttendanceRecord":
        return replace(self, work_minutes=work_minutes)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "workDate": self.work_date.isoformat(),
            "clockIn": format_iso(self.clock_in),
            "clockOut": format_iso(self.clock_out),
            "workMinutes": self.work_minutes,
            "clockInDevice": self.clock_in_device,
            "clockOutDevice": self.clock_out_device,
            "state": self.state.value,
        }


@dataclass(frozen=True)
class AutoCloseResult:
    scanned: int
    closed: int
    skipped_ids: tuple[int, ...] = ()
    failed_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "scanned": self.scanned,
            "closed": self.closed,
            "skippedIds": list(self.skipped_ids),
            "failedIds": list(self.failed_ids),
        }

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_iso, to_business
from ..core.enums import Classification
from ..worktime.intervals import whole_minutes


@dataclass(frozen=True)
class WorkRecord:
    """Task-level work log owned by the work-records feature (read-only here)."""

    record_id: int
    user_id: int
    vehicle_id: int
    process_id: int
    start_time: datetime
    end_time: Optional[datetime]
    work_description: Optional[str] = None

    def duration_minutes(self, now: datetime) -> int:
        """End minus start; an in-progress record counts elapsed time so far."""
        end = self.end_time if self.end_time is not None else now
        return max(whole_minutes(to_business(self.start_time), to_business(end)), 0)


@dataclass(frozen=True)
class WorkLine:
    record_id: int
    vehicle_id: int
    process_id: int
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: int

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "vehicleId": self.vehicle_id,
            "processId": self.process_id,
            "startTime": format_iso(self.start_time),
            "endTime": format_iso(self.end_time),
            "durationMinutes": self.duration_minutes,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    user_id: int
    work_date: date
    attendance_minutes: int
    work_minutes: int
    difference_minutes: int
    classification: Classification
    note: Optional[str] = None
    lines: tuple[WorkLine, ...] = ()

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "workDate": self.work_date.isoformat(),
            "attendanceMinutes": self.attendance_minutes,
            "workMinutes": self.work_minutes,
            "differenceMinutes": self.difference_minutes,
            "classification": self.classification.value,
            "note": self.note,
            "workRecords": [line.to_dict() for line in self.lines],
        }


@dataclass(frozen=True)
class FlaggedUser:
    user_id: int
    dates: tuple[date, ...]

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "dates": [d.isoformat() for d in self.dates]}

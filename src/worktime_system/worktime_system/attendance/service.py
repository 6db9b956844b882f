from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..audit.service import AuditService
from ..breaks.model import BreakRuleSet
from ..breaks.service import BreakRuleStore
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import at_business_time, business_date, to_business
from ..common.locks import KeyedLock
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import (
    AUTO_CLOSE_TIME,
    DEFAULT_SYSTEM_EDITOR_ID,
    DEVICE_ADMIN,
    DEVICE_AUTO_CLOSE,
    DEVICE_PC,
)
from ..core.enums import AuditField
from ..core.exceptions import (
    AlreadyOpen,
    DomainError,
    DuplicateDay,
    InvalidOrder,
    NoOpenRecord,
    NotFound,
    ValidationError,
)
from ..database.unit_of_work import UnitOfWork
from ..worktime.calculator.base import WorkTimeCalculator
from ..worktime.calculator.break_window_calculator import BreakWindowCalculator
from .model import AttendanceRecord, AutoCloseResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance ledger: one record per (user, business date).

    Every mutation of a user's records runs under that user's lock, so a
    clock-out and an auto-close can never both close the same record. A
    change and the audit entries describing it are written in one
    transaction of ``unit_of_work``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        audit: AuditService,
        break_rules: BreakRuleStore,
        unit_of_work: UnitOfWork,
        *,
        calculator: WorkTimeCalculator | None = None,
        clock: Clock | None = None,
        locks: KeyedLock | None = None,
        system_editor_id: int = DEFAULT_SYSTEM_EDITOR_ID,
    ):
        self._attendance = attendance
        self._audit = audit
        self._break_rules = break_rules
        self._uow = unit_of_work
        self._calculator = calculator or BreakWindowCalculator()
        self._clock = clock or SystemClock()
        self._locks = locks or KeyedLock()
        self._system_editor_id = int(system_editor_id)

    @property
    def locks(self) -> KeyedLock:
        return self._locks

    def _now(self, at: Optional[datetime]) -> datetime:
        return to_business(at) if at is not None else self._clock.now()

    def compute_work_minutes(self, clock_in: datetime, clock_out: datetime, rule_set: BreakRuleSet) -> int:
        return self._calculator.net_minutes(clock_in, clock_out, rule_set)

    # -- punches -----------------------------------------------------------

    def clock_in(self, user_id: int, *, at: datetime | None = None, device: str = DEVICE_PC) -> AttendanceRecord:
        user_id = require_positive_int(user_id, "user_id")
        device = require_non_empty(device, "device")
        at = self._now(at)
        work_date = business_date(at)

        with self._locks.hold(user_id):
            if self._attendance.get_open_for_user(user_id):
                raise AlreadyOpen(f"User {user_id} is already clocked in")
            if self._attendance.get_for_user_and_date(user_id, work_date):
                raise DuplicateDay(f"User {user_id} already has an attendance record on {work_date.isoformat()}")

            record = self._attendance.create_clock_in(
                user_id=user_id,
                work_date=work_date,
                clock_in=at,
                device=device,
            )

        logger.info("Clock-in: user=%s date=%s at=%s device=%s", user_id, work_date, at.isoformat(), device)
        return record

    def clock_out(self, user_id: int, *, at: datetime | None = None, device: str = DEVICE_PC) -> AttendanceRecord:
        user_id = require_positive_int(user_id, "user_id")
        device = require_non_empty(device, "device")
        at = self._now(at)

        with self._locks.hold(user_id):
            record = self._attendance.get_open_for_user(user_id)
            if not record:
                raise NoOpenRecord(f"User {user_id} has no open attendance record")
            closed = self._close(record, clock_out=at, device=device)

        logger.info(
            "Clock-out: user=%s date=%s work_minutes=%s", user_id, closed.work_date, closed.work_minutes
        )
        return closed

    def admin_clock_in(
        self, user_id: int, *, at: datetime, editor_id: int, device: str = DEVICE_PC
    ) -> AttendanceRecord:
        """Clock a worker in on their behalf (same rules as a normal clock-in)."""
        editor_id = require_positive_int(editor_id, "editor_id")
        record = self.clock_in(user_id, at=at, device=device)
        logger.info("Clock-in for user=%s recorded by editor=%s", record.user_id, editor_id)
        return record

    def admin_clock_out(self, user_id: int, *, at: datetime, editor_id: int) -> AttendanceRecord:
        """Close the worker's open record on their behalf; audited like a correction."""
        user_id = require_positive_int(user_id, "user_id")
        editor_id = require_positive_int(editor_id, "editor_id")
        at = to_business(at)

        with self._locks.hold(user_id):
            record = self._attendance.get_open_for_user(user_id)
            if not record:
                raise NoOpenRecord(f"User {user_id} has no open attendance record")
            with self._uow.transaction():
                closed = self._close(record, clock_out=at, device=DEVICE_ADMIN)
                self._audit.record_change(
                    attendance_id=closed.attendance_id,
                    field=AuditField.CLOCK_OUT,
                    old_value=None,
                    new_value=at,
                    editor_id=editor_id,
                )
        return closed

    def _close(self, record: AttendanceRecord, *, clock_out: datetime, device: str) -> AttendanceRecord:
        if clock_out <= record.clock_in:
            raise InvalidOrder(
                f"Clock-out {clock_out.isoformat()} must be after clock-in {record.clock_in.isoformat()}"
            )
        work_minutes = self.compute_work_minutes(record.clock_in, clock_out, self._break_rules.current())

        if not self._attendance.close(
            attendance_id=record.attendance_id,
            clock_out=clock_out,
            work_minutes=work_minutes,
            device=device,
        ):
            raise NoOpenRecord(f"Attendance {record.attendance_id} was already closed")

        return replace(
            record,
            clock_out=clock_out,
            work_minutes=work_minutes,
            clock_out_device=device,
            version=record.version + 1,
        )

    # -- corrections -------------------------------------------------------

    def admin_correct(
        self, attendance_id: int, field: AuditField | str, new_value: datetime, editor_id: int
    ) -> AttendanceRecord:
        try:
            field = AuditField(field)
        except ValueError:
            raise ValidationError(f"Unknown attendance field: {field!r}")

        if field == AuditField.CLOCK_IN:
            return self.admin_update(attendance_id, editor_id=editor_id, clock_in=new_value)
        return self.admin_update(attendance_id, editor_id=editor_id, clock_out=new_value)

    def admin_update(
        self,
        attendance_id: int,
        *,
        editor_id: int,
        clock_in: datetime | None = None,
        clock_out: datetime | None = None,
    ) -> AttendanceRecord:
        """Apply an admin edit to one or both timestamps.

        One audit entry is appended per field whose value actually changed,
        holding the value stored before the edit. A clock-out can be set on an
        open record (closing it) but never removed.
        """
        attendance_id = require_positive_int(attendance_id, "attendance_id")
        editor_id = require_positive_int(editor_id, "editor_id")
        if clock_in is None and clock_out is None:
            raise ValidationError("Nothing to update")

        found = self._attendance.get_by_id(attendance_id)
        if not found:
            raise NotFound(f"Attendance {attendance_id} does not exist")

        with self._locks.hold(found.user_id):
            record = self._attendance.get_by_id(attendance_id)
            if not record:
                raise NotFound(f"Attendance {attendance_id} does not exist")

            new_in = to_business(clock_in) if clock_in is not None else record.clock_in
            new_out = to_business(clock_out) if clock_out is not None else record.clock_out

            changes: list[tuple[AuditField, Optional[datetime], datetime]] = []
            if clock_in is not None and new_in != record.clock_in:
                changes.append((AuditField.CLOCK_IN, record.clock_in, new_in))
            if clock_out is not None and new_out != record.clock_out:
                changes.append((AuditField.CLOCK_OUT, record.clock_out, new_out))
            if not changes:
                return record

            if new_out is not None and new_out <= new_in:
                raise InvalidOrder(f"Clock-out {new_out.isoformat()} must be after clock-in {new_in.isoformat()}")

            work_date = business_date(new_in)
            if work_date != record.work_date:
                other = self._attendance.get_for_user_and_date(record.user_id, work_date)
                if other and other.attendance_id != record.attendance_id:
                    raise DuplicateDay(
                        f"User {record.user_id} already has an attendance record on {work_date.isoformat()}"
                    )

            work_minutes = None
            if new_out is not None:
                work_minutes = self.compute_work_minutes(new_in, new_out, self._break_rules.current())

            with self._uow.transaction():
                if not self._attendance.update_times(
                    attendance_id=record.attendance_id,
                    work_date=work_date,
                    clock_in=new_in,
                    clock_out=new_out,
                    work_minutes=work_minutes,
                    expected_version=record.version,
                ):
                    raise ValidationError(f"Attendance {attendance_id} was modified concurrently, reload and retry")

                for field, old_value, new_value in changes:
                    self._audit.record_change(
                        attendance_id=record.attendance_id,
                        field=field,
                        old_value=old_value,
                        new_value=new_value,
                        editor_id=editor_id,
                    )

        return replace(
            record,
            work_date=work_date,
            clock_in=new_in,
            clock_out=new_out,
            work_minutes=work_minutes,
            version=record.version + 1,
        )

    def delete_record(self, attendance_id: int) -> None:
        """Privileged hard delete. Audit entries of the record are kept."""
        attendance_id = require_positive_int(attendance_id, "attendance_id")
        if not self._attendance.delete(attendance_id):
            raise NotFound(f"Attendance {attendance_id} does not exist")
        logger.warning("Attendance %s deleted", attendance_id)

    # -- scheduled ---------------------------------------------------------

    def auto_close(self, cutoff: datetime | None = None) -> AutoCloseResult:
        """Force-close records still open past 23:59:00 of their own business date.

        Membership is "currently open", re-checked under the user's lock, so
        running it again for the same date closes nothing twice.
        """
        cutoff = self._now(cutoff)
        candidates = [
            r for r in self._attendance.list_open() if at_business_time(r.work_date, AUTO_CLOSE_TIME) <= cutoff
        ]

        closed = 0
        skipped: list[int] = []
        failed: list[int] = []
        for candidate in candidates:
            with self._locks.hold(candidate.user_id):
                record = self._attendance.get_by_id(candidate.attendance_id)
                if not record or not record.is_open:
                    continue

                close_at = at_business_time(record.work_date, AUTO_CLOSE_TIME)
                if close_at <= record.clock_in:
                    logger.warning(
                        "Auto-close skipped attendance %s: clock-in %s is not before %s; "
                        "close it with an admin clock-out",
                        record.attendance_id,
                        record.clock_in.isoformat(),
                        close_at.isoformat(),
                    )
                    skipped.append(record.attendance_id)
                    continue

                try:
                    with self._uow.transaction():
                        self._close(record, clock_out=close_at, device=DEVICE_AUTO_CLOSE)
                        self._audit.record_change(
                            attendance_id=record.attendance_id,
                            field=AuditField.CLOCK_OUT,
                            old_value=None,
                            new_value=close_at,
                            editor_id=self._system_editor_id,
                        )
                except NoOpenRecord:
                    continue
                except Exception:
                    # Rolled back, so the record is still open for the next run.
                    logger.exception("Auto-close failed for attendance %s", record.attendance_id)
                    failed.append(record.attendance_id)
                    continue
                closed += 1

        if closed:
            logger.info("Auto-close: %d open record(s) closed at %s", closed, AUTO_CLOSE_TIME.isoformat())
        return AutoCloseResult(
            scanned=len(candidates), closed=closed, skipped_ids=tuple(skipped), failed_ids=tuple(failed)
        )

    # -- queries -----------------------------------------------------------

    def get_status(self, user_id: int, work_date: date | None = None) -> Optional[AttendanceRecord]:
        """The user's record for a date with worked minutes under today's rules."""
        user_id = require_positive_int(user_id, "user_id")
        work_date = work_date or business_date(self._clock.now())
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if not record:
            return None
        return self._with_live_minutes(record, self._break_rules.current())

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        rule_set = self._break_rules.current()
        return [self._with_live_minutes(r, rule_set) for r in self._attendance.list_for_date(work_date)]

    def _with_live_minutes(self, record: AttendanceRecord, rule_set: BreakRuleSet) -> AttendanceRecord:
        if record.clock_out is None:
            return record
        try:
            return record.with_work_minutes(self.compute_work_minutes(record.clock_in, record.clock_out, rule_set))
        except DomainError as e:
            logger.warning("Keeping stored work minutes for attendance %s: %s", record.attendance_id, e)
            return record

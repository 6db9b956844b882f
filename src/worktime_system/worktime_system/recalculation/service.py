from __future__ import annotations

import logging
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..breaks.model import BreakRuleSet
from ..breaks.service import BreakRuleStore
from ..common.locks import KeyedLock
from ..worktime.calculator.base import WorkTimeCalculator
from ..worktime.calculator.break_window_calculator import BreakWindowCalculator
from .model import RecalculationSummary

logger = logging.getLogger(__name__)


class RecalculationService:
    """Refreshes stored ``work_minutes`` of every closed record.

    This is a system-level refresh of a derived value, not a human edit, so it
    never writes to the audit log. It is the only mutation path without audit
    entries.

    No lock is held across the run: each record is re-read and written on its
    own under its user's lock, and the write is guarded by the version that was
    read. A record modified in between is reported as skipped, not overwritten.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        break_rules: BreakRuleStore,
        *,
        calculator: WorkTimeCalculator | None = None,
        locks: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._break_rules = break_rules
        self._calculator = calculator or BreakWindowCalculator()
        self._locks = locks or KeyedLock()

    def recalculate_all(self, *, should_stop: Optional[Callable[[], bool]] = None) -> RecalculationSummary:
        rule_set = self._break_rules.current()
        summary = RecalculationSummary(rule_set_version=rule_set.version)

        refs = self._attendance.list_closed_refs()
        logger.info("Recalculation started: %d closed record(s), rules=%s", len(refs), rule_set.version)

        for attendance_id, user_id in refs:
            if should_stop and should_stop():
                summary.interrupted = True
                logger.warning("Recalculation interrupted after %d record(s)", summary.total)
                break

            summary.total += 1
            try:
                with self._locks.hold(user_id):
                    self._recalculate_one(attendance_id, rule_set, summary)
            except Exception as e:
                logger.exception("Recalculation failed for attendance %s", attendance_id)
                summary.add_failure(attendance_id, str(e) or e.__class__.__name__)

        logger.info(
            "Recalculation finished: total=%d updated=%d errors=%d skipped=%d",
            summary.total,
            summary.updated,
            summary.errors,
            summary.skipped,
        )
        return summary

    def _recalculate_one(self, attendance_id: int, rule_set: BreakRuleSet, summary: RecalculationSummary) -> None:
        record = self._attendance.get_by_id(attendance_id)
        if not record or record.clock_out is None:
            # deleted or reopened since the scan; nothing to recompute
            summary.skipped += 1
            return

        work_minutes = self._calculator.net_minutes(record.clock_in, record.clock_out, rule_set)
        if work_minutes == record.work_minutes:
            return

        if self._attendance.update_work_minutes(
            attendance_id=record.attendance_id,
            work_minutes=work_minutes,
            expected_version=record.version,
        ):
            summary.updated += 1
        else:
            summary.skipped += 1
            logger.warning("Attendance %s changed during recalculation; left as is", attendance_id)

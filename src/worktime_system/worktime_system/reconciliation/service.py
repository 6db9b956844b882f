from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import business_date
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_RECENT_ISSUE_BUSINESS_DAYS
from ..core.enums import Classification
from .factory import ReconciliationStrategyFactory
from .model import FlaggedUser, ReconciliationResult, WorkLine
from .repository import WorkRecordRepository

logger = logging.getLogger(__name__)


def previous_business_days(today: date, count: int) -> list[date]:
    """``count`` weekdays before ``today``, newest first (today excluded)."""
    days: list[date] = []
    current = today - timedelta(days=1)
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    return days


class ReconciliationService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        work_records: WorkRecordRepository,
        *,
        strategy_factory: ReconciliationStrategyFactory | None = None,
        clock: Clock | None = None,
        recent_business_days: int = DEFAULT_RECENT_ISSUE_BUSINESS_DAYS,
    ):
        self._attendance = attendance
        self._work_records = work_records
        self._factory = strategy_factory or ReconciliationStrategyFactory()
        self._clock = clock or SystemClock()
        self._recent_business_days = int(recent_business_days)

    def reconcile(self, user_id: int, work_date: date) -> ReconciliationResult:
        user_id = require_positive_int(user_id, "user_id")

        record = self._attendance.get_for_user_and_date(user_id, work_date)
        attendance_minutes = int(record.work_minutes or 0) if record else 0

        now = self._clock.now()
        lines = tuple(
            WorkLine(
                record_id=wr.record_id,
                vehicle_id=wr.vehicle_id,
                process_id=wr.process_id,
                start_time=wr.start_time,
                end_time=wr.end_time,
                duration_minutes=wr.duration_minutes(now),
            )
            for wr in self._work_records.list_for_user_and_date(user_id, work_date)
        )
        work_minutes = sum(line.duration_minutes for line in lines)

        strategy = self._factory.for_totals(attendance_minutes=attendance_minutes, work_minutes=work_minutes)
        decision = strategy.decide(attendance_minutes=attendance_minutes, work_minutes=work_minutes)

        return ReconciliationResult(
            user_id=user_id,
            work_date=work_date,
            attendance_minutes=attendance_minutes,
            work_minutes=work_minutes,
            difference_minutes=work_minutes - attendance_minutes,
            classification=decision.classification,
            note=decision.note,
            lines=lines,
        )

    def find_recent_issues(
        self,
        classification: Classification | str,
        *,
        today: date | None = None,
        business_days: int | None = None,
    ) -> Sequence[FlaggedUser]:
        """Users whose reconciliation had ``classification`` on recent business days.

        Only days on which the user has an attendance record are considered.
        """
        classification = Classification(classification)
        today = today or business_date(self._clock.now())
        days = previous_business_days(today, business_days or self._recent_business_days)

        flagged: dict[int, list[date]] = {}
        for work_date in days:
            for record in self._attendance.list_for_date(work_date):
                result = self.reconcile(record.user_id, work_date)
                if result.classification == classification:
                    flagged.setdefault(record.user_id, []).append(work_date)

        logger.debug("Recent %s issues over %s: %d user(s)", classification.value, days, len(flagged))
        return [
            FlaggedUser(user_id=user_id, dates=tuple(sorted(dates, reverse=True)))
            for user_id, dates in sorted(flagged.items())
        ]

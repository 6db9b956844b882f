from __future__ import annotations

from datetime import date, datetime, timezone

from src.worktime_system.worktime_system.core.enums import Classification
from src.worktime_system.worktime_system.reconciliation.service import ReconciliationService, previous_business_days
from tests.fakes import FixedClock, InMemoryWorkRecords, build_ledger, jst, work_record


def _closed(ledger, user_id, day, start=(8, 0), end=(17, 0)):
    ledger.service.clock_in(user_id, at=jst(2025, 1, day, *start))
    return ledger.service.clock_out(user_id, at=jst(2025, 1, day, *end))


def test_task_time_far_above_attendance_is_excessive():
    ledger = build_ledger()
    _closed(ledger, 1, 6)  # 495 min
    work = InMemoryWorkRecords(
        [
            work_record(1, 1, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 13, 0)),  # 300
            work_record(2, 1, jst(2025, 1, 6, 13, 0), jst(2025, 1, 6, 17, 20)),  # 260
        ]
    )
    svc = ReconciliationService(ledger.attendance, work, clock=ledger.clock)

    result = svc.reconcile(1, date(2025, 1, 6))

    assert result.attendance_minutes == 495
    assert result.work_minutes == 560
    assert result.difference_minutes == 65
    assert result.classification == Classification.EXCESSIVE
    assert [line.duration_minutes for line in result.lines] == [300, 260]


def test_missing_attendance_counts_as_zero():
    ledger = build_ledger()
    work = InMemoryWorkRecords([work_record(1, 1, jst(2025, 1, 6, 9, 0), jst(2025, 1, 6, 9, 20))])
    svc = ReconciliationService(ledger.attendance, work, clock=ledger.clock)

    result = svc.reconcile(1, date(2025, 1, 6))

    assert result.attendance_minutes == 0
    assert result.difference_minutes == 20
    assert result.classification == Classification.BALANCED


def test_in_progress_task_counts_elapsed_time():
    ledger = build_ledger(now=jst(2025, 1, 6, 11, 30))
    _closed(ledger, 1, 6, start=(8, 0), end=(11, 0))  # 180
    work = InMemoryWorkRecords([work_record(1, 1, jst(2025, 1, 6, 8, 0), None)])
    svc = ReconciliationService(ledger.attendance, work, clock=ledger.clock)

    result = svc.reconcile(1, date(2025, 1, 6))

    assert result.work_minutes == 210
    assert result.classification == Classification.BALANCED


def test_under_logged_day_is_low():
    ledger = build_ledger()
    _closed(ledger, 1, 6)
    work = InMemoryWorkRecords([work_record(1, 1, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 12, 0))])
    svc = ReconciliationService(ledger.attendance, work, clock=ledger.clock)

    result = svc.reconcile(1, date(2025, 1, 6))

    assert result.difference_minutes == -255
    assert result.classification == Classification.LOW


def test_other_days_and_users_are_ignored():
    ledger = build_ledger()
    _closed(ledger, 1, 6)
    work = InMemoryWorkRecords(
        [
            work_record(1, 1, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 16, 15)),  # 495
            work_record(2, 1, jst(2025, 1, 7, 8, 0), jst(2025, 1, 7, 9, 0)),
            work_record(3, 2, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 9, 0)),
        ]
    )
    svc = ReconciliationService(ledger.attendance, work, clock=ledger.clock)

    result = svc.reconcile(1, date(2025, 1, 6))

    assert result.work_minutes == 495
    assert result.classification == Classification.BALANCED


def test_previous_business_days_skip_weekends():
    # Tuesday 2025-01-07 -> Mon 6, Fri 3, Thu 2
    assert previous_business_days(date(2025, 1, 7), 3) == [date(2025, 1, 6), date(2025, 1, 3), date(2025, 1, 2)]


def test_find_recent_issues_groups_dates_per_user():
    ledger = build_ledger()
    _closed(ledger, 1, 6)
    _closed(ledger, 1, 3)
    _closed(ledger, 2, 6)
    work = InMemoryWorkRecords(
        [
            work_record(1, 1, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 18, 0)),  # 600 vs 495
            work_record(2, 1, jst(2025, 1, 3, 8, 0), jst(2025, 1, 3, 17, 0)),  # 540 vs 495
            work_record(3, 2, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 16, 15)),  # balanced
        ]
    )
    svc = ReconciliationService(ledger.attendance, work, clock=FixedClock(jst(2025, 1, 7, 9, 0)))

    excessive = svc.find_recent_issues(Classification.EXCESSIVE)

    assert [(f.user_id, f.dates) for f in excessive] == [(1, (date(2025, 1, 6), date(2025, 1, 3)))]
    assert svc.find_recent_issues("low") == []


def test_recent_issues_count_back_from_business_today_of_a_utc_clock():
    ledger = build_ledger()
    _closed(ledger, 1, 6)
    work = InMemoryWorkRecords([work_record(1, 1, jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 18, 0))])
    # 2025-01-06 15:30 UTC is already Tuesday the 7th in business time, so Monday is "yesterday"
    clock = FixedClock(datetime(2025, 1, 6, 15, 30, tzinfo=timezone.utc))
    svc = ReconciliationService(ledger.attendance, work, clock=clock)

    flagged = svc.find_recent_issues(Classification.EXCESSIVE)

    assert [(f.user_id, f.dates) for f in flagged] == [(1, (date(2025, 1, 6),))]

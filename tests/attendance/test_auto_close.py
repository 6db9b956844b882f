from __future__ import annotations

from src.worktime_system.worktime_system.core.enums import AuditField
from tests.fakes import build_ledger, jst


def test_auto_close_at_cutoff_same_date():
    ledger = build_ledger(system_editor_id=0)
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 20, 0))

    result = ledger.service.auto_close(jst(2025, 1, 6, 23, 59, 0))

    assert result.closed == 1
    closed = ledger.attendance.get_by_id(rec.attendance_id)
    assert closed.clock_out == jst(2025, 1, 6, 23, 59, 0)
    assert closed.work_minutes == 239
    assert closed.clock_out_device == "auto-23:59"

    assert len(ledger.audit.entries) == 1
    entry = ledger.audit.entries[0]
    assert entry.field_name == AuditField.CLOCK_OUT
    assert entry.old_value is None
    assert entry.new_value == jst(2025, 1, 6, 23, 59, 0)
    assert entry.editor_id == 0


def test_auto_close_subtracts_overlapping_break():
    ledger = build_ledger()
    ledger.service.clock_in(1, at=jst(2025, 1, 6, 8, 0))

    ledger.service.auto_close(jst(2025, 1, 7, 0, 5))

    # 08:00 -> 23:59 is 959 min, minus the 45 min lunch
    assert ledger.attendance.get_for_user_and_date(1, jst(2025, 1, 6).date()).work_minutes == 914


def test_auto_close_is_idempotent():
    ledger = build_ledger()
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 20, 0))

    first = ledger.service.auto_close(jst(2025, 1, 6, 23, 59, 30))
    second = ledger.service.auto_close(jst(2025, 1, 7, 0, 10))

    assert first.closed == 1
    assert second.closed == 0
    assert len(ledger.audit.entries) == 1
    assert ledger.attendance.get_by_id(rec.attendance_id).clock_out == jst(2025, 1, 6, 23, 59, 0)


def test_auto_close_before_cutoff_leaves_record_open():
    ledger = build_ledger()
    ledger.service.clock_in(1, at=jst(2025, 1, 6, 20, 0))

    result = ledger.service.auto_close(jst(2025, 1, 6, 23, 58, 59))

    assert result.scanned == 0
    assert ledger.attendance.get_open_for_user(1) is not None


def test_auto_close_does_not_touch_records_already_clocked_out():
    ledger = build_ledger()
    ledger.service.clock_in(1, at=jst(2025, 1, 6, 20, 0))
    ledger.service.clock_out(1, at=jst(2025, 1, 6, 22, 0))

    result = ledger.service.auto_close(jst(2025, 1, 7, 0, 0))

    assert result.closed == 0
    assert ledger.audit.entries == []


def test_auto_close_uses_each_records_own_date():
    ledger = build_ledger()
    ledger.service.clock_in(1, at=jst(2025, 1, 5, 21, 0))
    ledger.service.clock_in(2, at=jst(2025, 1, 6, 21, 0))

    result = ledger.service.auto_close(jst(2025, 1, 7, 1, 0))

    assert result.closed == 2
    assert ledger.attendance.get_for_user_and_date(1, jst(2025, 1, 5).date()).clock_out == jst(2025, 1, 5, 23, 59)
    assert ledger.attendance.get_for_user_and_date(2, jst(2025, 1, 6).date()).clock_out == jst(2025, 1, 6, 23, 59)


def test_clock_in_after_cutoff_time_is_skipped():
    ledger = build_ledger()
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 23, 59, 30))

    result = ledger.service.auto_close(jst(2025, 1, 7, 0, 5))

    assert result.closed == 0
    assert result.skipped_ids == (rec.attendance_id,)
    assert ledger.attendance.get_by_id(rec.attendance_id).clock_out is None
    assert ledger.audit.entries == []


def test_skipped_record_is_closed_by_admin_clock_out():
    ledger = build_ledger()
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 23, 59, 30))
    ledger.service.auto_close(jst(2025, 1, 7, 0, 5))

    ledger.service.admin_clock_out(1, at=jst(2025, 1, 7, 0, 30), editor_id=9)

    assert ledger.attendance.get_by_id(rec.attendance_id).work_minutes == 30
    assert ledger.service.clock_in(1, at=jst(2025, 1, 7, 8, 0)).work_date == jst(2025, 1, 7).date()


class _ClockOutBeforeLock:
    """Runs ``interleave`` after the open records are listed, before any lock is taken."""

    def __init__(self, inner):
        self._inner = inner
        self.interleave = None

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def list_open(self):
        records = self._inner.list_open()
        if self.interleave:
            self.interleave()
        return records


class _StaleReads(_ClockOutBeforeLock):
    """Keeps answering ``get_by_id`` with the record as it was when listed."""

    def __init__(self, inner):
        super().__init__(inner)
        self._listed = {}

    def list_open(self):
        records = super().list_open()
        self._listed = {r.attendance_id: r for r in records}
        return records

    def get_by_id(self, attendance_id):
        return self._listed.get(attendance_id) or self._inner.get_by_id(attendance_id)


def _race(wrapper_cls):
    wrappers = []

    def wrap(inner):
        wrappers.append(wrapper_cls(inner))
        return wrappers[0]

    ledger = build_ledger(wrap_attendance=wrap)
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 20, 0))
    wrappers[0].interleave = lambda: ledger.service.clock_out(1, at=jst(2025, 1, 6, 23, 30))
    return ledger, rec


def test_clock_out_between_scan_and_lock_wins():
    ledger, rec = _race(_ClockOutBeforeLock)

    result = ledger.service.auto_close(jst(2025, 1, 7, 0, 0))

    assert result.scanned == 1
    assert result.closed == 0
    stored = ledger.attendance.get_by_id(rec.attendance_id)
    assert stored.clock_out == jst(2025, 1, 6, 23, 30)
    assert stored.clock_out_device == "pc"
    assert ledger.audit.entries == []


def test_close_refused_by_store_is_not_counted_or_audited():
    ledger, rec = _race(_StaleReads)

    result = ledger.service.auto_close(jst(2025, 1, 7, 0, 0))

    assert result.closed == 0
    assert result.failed_ids == ()
    assert ledger.attendance.get_by_id(rec.attendance_id).clock_out == jst(2025, 1, 6, 23, 30)
    assert ledger.audit.entries == []

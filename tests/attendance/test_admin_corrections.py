from __future__ import annotations

from datetime import date

import pytest

from src.worktime_system.worktime_system.core.enums import AuditField
from src.worktime_system.worktime_system.core.exceptions import DuplicateDay, InvalidOrder, NotFound, ValidationError
from tests.fakes import build_ledger, jst


def _closed_day(ledger, user_id=1):
    ledger.service.clock_in(user_id, at=jst(2025, 1, 6, 8, 0))
    return ledger.service.clock_out(user_id, at=jst(2025, 1, 6, 17, 0))


def test_correcting_clock_out_appends_one_entry_and_recomputes():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    updated = ledger.service.admin_correct(rec.attendance_id, AuditField.CLOCK_OUT, jst(2025, 1, 6, 18, 0), editor_id=7)

    assert updated.work_minutes == 555
    assert ledger.attendance.get_by_id(rec.attendance_id).work_minutes == 555
    assert len(ledger.audit.entries) == 1
    entry = ledger.audit.entries[0]
    assert entry.field_name == AuditField.CLOCK_OUT
    assert entry.old_value == jst(2025, 1, 6, 17, 0)
    assert entry.new_value == jst(2025, 1, 6, 18, 0)
    assert entry.editor_id == 7


def test_editing_both_fields_appends_two_entries():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    ledger.service.admin_update(
        rec.attendance_id,
        editor_id=7,
        clock_in=jst(2025, 1, 6, 9, 0),
        clock_out=jst(2025, 1, 6, 18, 0),
    )

    fields = [(e.field_name, e.old_value) for e in ledger.audit.entries]
    assert fields == [
        (AuditField.CLOCK_IN, jst(2025, 1, 6, 8, 0)),
        (AuditField.CLOCK_OUT, jst(2025, 1, 6, 17, 0)),
    ]


def test_each_correction_records_the_value_before_it():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    ledger.service.admin_correct(rec.attendance_id, "clockOut", jst(2025, 1, 6, 18, 0), editor_id=7)
    ledger.service.admin_correct(rec.attendance_id, "clockOut", jst(2025, 1, 6, 16, 30), editor_id=8)

    assert [e.old_value for e in ledger.audit.entries] == [jst(2025, 1, 6, 17, 0), jst(2025, 1, 6, 18, 0)]


def test_unchanged_value_appends_nothing():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    ledger.service.admin_correct(rec.attendance_id, "clockIn", jst(2025, 1, 6, 8, 0), editor_id=7)

    assert ledger.audit.entries == []


def test_correction_violating_order_is_rejected_without_audit():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    with pytest.raises(InvalidOrder):
        ledger.service.admin_correct(rec.attendance_id, "clockIn", jst(2025, 1, 6, 17, 30), editor_id=7)
    with pytest.raises(InvalidOrder):
        ledger.service.admin_correct(rec.attendance_id, "clockOut", jst(2025, 1, 6, 7, 0), editor_id=7)

    assert ledger.audit.entries == []
    assert ledger.attendance.get_by_id(rec.attendance_id).clock_out == jst(2025, 1, 6, 17, 0)


def test_correcting_clock_in_of_open_record_keeps_it_open():
    ledger = build_ledger()
    rec = ledger.service.clock_in(1, at=jst(2025, 1, 6, 8, 10))

    updated = ledger.service.admin_correct(rec.attendance_id, "clockIn", jst(2025, 1, 6, 8, 0), editor_id=7)

    assert updated.clock_out is None
    assert updated.work_minutes is None
    assert len(ledger.audit.entries) == 1


def test_unknown_field_and_missing_record():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    with pytest.raises(ValidationError):
        ledger.service.admin_correct(rec.attendance_id, "clockin", jst(2025, 1, 6, 9, 0), editor_id=7)
    with pytest.raises(NotFound):
        ledger.service.admin_correct(999, "clockIn", jst(2025, 1, 6, 9, 0), editor_id=7)


def test_moving_clock_in_onto_an_occupied_day_is_duplicate_day():
    ledger = build_ledger()
    _closed_day(ledger)
    ledger.service.clock_in(1, at=jst(2025, 1, 7, 8, 0))
    tuesday = ledger.service.clock_out(1, at=jst(2025, 1, 7, 17, 0))

    with pytest.raises(DuplicateDay):
        ledger.service.admin_correct(tuesday.attendance_id, "clockIn", jst(2025, 1, 6, 23, 0), editor_id=7)


def test_moving_clock_in_to_a_free_day_rebuckets_record():
    ledger = build_ledger()
    rec = _closed_day(ledger)

    updated = ledger.service.admin_correct(rec.attendance_id, "clockIn", jst(2025, 1, 5, 22, 0), editor_id=7)

    assert updated.work_date == date(2025, 1, 5)
    assert ledger.attendance.get_for_user_and_date(1, date(2025, 1, 5)) is not None

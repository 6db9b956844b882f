from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_iso
from ..core.enums import AuditField


@dataclass(frozen=True)
class AuditLogEntry:
    """One field-level change to an attendance record. Never updated or removed."""

    entry_id: int
    attendance_id: int
    field_name: AuditField
    old_value: Optional[datetime]
    new_value: Optional[datetime]
    editor_id: int
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "attendanceId": self.attendance_id,
            "fieldName": self.field_name.value,
            "oldValue": format_iso(self.old_value),
            "newValue": format_iso(self.new_value),
            "editorId": self.editor_id,
            "createdAt": format_iso(self.created_at),
        }

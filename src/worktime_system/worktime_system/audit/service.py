from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..core.enums import AuditField
from .model import AuditLogEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    def __init__(self, audit: AuditRepository, *, clock: Clock | None = None):
        self._audit = audit
        self._clock = clock or SystemClock()

    def record_change(
        self,
        *,
        attendance_id: int,
        field: AuditField,
        old_value: Optional[datetime],
        new_value: Optional[datetime],
        editor_id: int,
    ) -> AuditLogEntry:
        entry = self._audit.append(
            attendance_id=attendance_id,
            field_name=AuditField(field),
            old_value=old_value,
            new_value=new_value,
            editor_id=editor_id,
            created_at=self._clock.now(),
        )
        logger.info(
            "Audit: attendance=%s field=%s editor=%s %s -> %s",
            attendance_id,
            entry.field_name.value,
            editor_id,
            old_value.isoformat() if old_value else None,
            new_value.isoformat() if new_value else None,
        )
        return entry

    def list_entries(
        self,
        *,
        attendance_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuditLogEntry]:
        return self._audit.list_entries(attendance_id=attendance_id, start=start, end=end)

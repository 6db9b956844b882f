from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AuditField
from .model import AuditLogEntry


class AuditRepository(Protocol):
    """Append-only store: there is deliberately no update or delete method."""

    def append(
        self,
        *,
        attendance_id: int,
        field_name: AuditField,
        old_value: Optional[datetime],
        new_value: Optional[datetime],
        editor_id: int,
        created_at: datetime,
    ) -> AuditLogEntry:
        raise NotImplementedError

    def list_entries(
        self,
        *,
        attendance_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuditLogEntry]:
        raise NotImplementedError

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AuditField
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from .model import AuditLogEntry
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_edit_logs(attendance_id, editor_id, field_name, old_value, new_value, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(attendance_id),
                    int(editor_id),
                    field_name.value,
                    to_db_datetime(old_value),
                    to_db_datetime(new_value),
                    to_db_datetime(created_at),
                ),
            )
            entry_id = int(cur.lastrowid)

        return AuditLogEntry(
            entry_id=entry_id,
            attendance_id=int(attendance_id),
            field_name=field_name,
            old_value=old_value,
            new_value=new_value,
            editor_id=int(editor_id),
            created_at=created_at,
        )

    def list_entries(
        self,
        *,
        attendance_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuditLogEntry]:
        clauses = ["1=1"]
        params: list[object] = []

        if attendance_id is not None:
            clauses.append("attendance_id=%s")
            params.append(int(attendance_id))
        if start is not None:
            clauses.append("created_at >= %s")
            params.append(to_db_datetime(start))
        if end is not None:
            clauses.append("created_at <= %s")
            params.append(to_db_datetime(end))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT entry_id, attendance_id, editor_id, field_name, old_value, new_value, created_at
                FROM attendance_edit_logs
                WHERE {where}
                ORDER BY created_at ASC, entry_id ASC
                """,
                tuple(params),
            )
            return [
                AuditLogEntry(
                    entry_id=int(r["entry_id"]),
                    attendance_id=int(r["attendance_id"]),
                    field_name=AuditField(r["field_name"]),
                    old_value=from_db_datetime(r.get("old_value")),
                    new_value=from_db_datetime(r.get("new_value")),
                    editor_id=int(r["editor_id"]),
                    created_at=from_db_datetime(r["created_at"]),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateDay
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, work_date, clock_in, clock_out, work_minutes,
    clock_in_device, clock_out_device, version
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    work_minutes = r.get("work_minutes")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=from_db_datetime(r["clock_in"]),
        clock_out=from_db_datetime(r.get("clock_out")),
        work_minutes=int(work_minutes) if work_minutes is not None else None,
        clock_in_device=r.get("clock_in_device"),
        clock_out_device=r.get("clock_out_device"),
        version=int(r.get("version") or 1),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY clock_in ASC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_open(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE clock_out IS NULL ORDER BY clock_in")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY user_id",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_closed_refs(self) -> Sequence[tuple[int, int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id
                FROM attendance_records
                WHERE clock_out IS NOT NULL
                ORDER BY attendance_id
                """
            )
            return [(int(r["attendance_id"]), int(r["user_id"])) for r in fetchall(cur)]

    def create_clock_in(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        device: Optional[str] = None,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, clock_in, clock_in_device, version)
                    VALUES(%s,%s,%s,%s,1)
                    """,
                    (int(user_id), work_date, to_db_datetime(clock_in), device),
                )
                attendance_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_attendance_user_date lost a race with another process
            raise DuplicateDay(f"User {user_id} already has an attendance record on {work_date.isoformat()}")

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            clock_in_device=device,
        )

    def close(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        work_minutes: int,
        device: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, work_minutes=%s, clock_out_device=%s, version=version+1
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (to_db_datetime(clock_out), int(work_minutes), device, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_times(
        self,
        *,
        attendance_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime],
        work_minutes: Optional[int],
        expected_version: int,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET work_date=%s, clock_in=%s, clock_out=%s, work_minutes=%s, version=version+1
                    WHERE attendance_id=%s AND version=%s
                    """,
                    (
                        work_date,
                        to_db_datetime(clock_in),
                        to_db_datetime(clock_out),
                        work_minutes,
                        int(attendance_id),
                        int(expected_version),
                    ),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError:
            raise DuplicateDay(f"Another attendance record already exists on {work_date.isoformat()}")

    def update_work_minutes(self, *, attendance_id: int, work_minutes: int, expected_version: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET work_minutes=%s, version=version+1
                WHERE attendance_id=%s AND version=%s AND clock_out IS NOT NULL
                """,
                (int(work_minutes), int(attendance_id), int(expected_version)),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

from __future__ import annotations

from datetime import date, time, timedelta
from typing import Sequence

from ..common.datetime_utils import at_business_time
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from .model import WorkRecord
from .repository import WorkRecordRepository


class MySQLWorkRecordRepository(WorkRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[WorkRecord]:
        day_start = at_business_time(work_date, time(0, 0))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, vehicle_id, process_id, start_time, end_time, work_description
                FROM work_records
                WHERE user_id=%s AND start_time >= %s AND start_time < %s
                ORDER BY start_time ASC
                """,
                (int(user_id), to_db_datetime(day_start), to_db_datetime(day_start + timedelta(days=1))),
            )
            return [
                WorkRecord(
                    record_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    vehicle_id=int(r["vehicle_id"]),
                    process_id=int(r["process_id"]),
                    start_time=from_db_datetime(r["start_time"]),
                    end_time=from_db_datetime(r.get("end_time")),
                    work_description=r.get("work_description"),
                )
                for r in fetchall(cur)
            ]

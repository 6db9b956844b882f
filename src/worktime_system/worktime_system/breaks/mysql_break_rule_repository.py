from __future__ import annotations

from typing import FrozenSet, Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import BreakRule
from .repository import BreakRuleRepository


def parse_applies_on(value: Optional[str]) -> Optional[FrozenSet[Weekday]]:
    """``NULL``/``'all'`` means every day, otherwise e.g. ``'mon,tue,wed'``."""
    if value is None or not value.strip() or value.strip().lower() == "all":
        return None
    return frozenset(Weekday.parse(part) for part in value.split(",") if part.strip())


class MySQLBreakRuleRepository(BreakRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[BreakRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, name, start_time, end_time, applies_on, is_active
                FROM break_rules
                WHERE is_active=1
                ORDER BY start_time, rule_id
                """
            )
            rows = fetchall(cur)
            return [
                BreakRule(
                    rule_id=int(r["rule_id"]),
                    name=r["name"],
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    applies_on=parse_applies_on(r.get("applies_on")),
                    is_active=bool(r["is_active"]),
                )
                for r in rows
            ]

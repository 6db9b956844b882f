from __future__ import annotations

import mysql.connector
import pytest

from src.worktime_system.worktime_system.database.connection import DBConfig, DatabaseConnection
from src.worktime_system.worktime_system.database.mysql_base import db_cursor
from src.worktime_system.worktime_system.database.unit_of_work import MySQLUnitOfWork


class _Cursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):
        self._conn.executed.append(sql)

    def close(self):
        pass


class _Connection:
    def __init__(self):
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return _Cursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


@pytest.fixture()
def connections(monkeypatch):
    opened = []

    def connect(**kwargs):
        conn = _Connection()
        opened.append(conn)
        return conn

    monkeypatch.setattr(mysql.connector, "connect", connect)
    return opened


@pytest.fixture()
def factory():
    return DatabaseConnection(DBConfig.from_dict({"database": "worktime_test"}))


def test_calls_outside_a_transaction_commit_on_their_own(connections, factory):
    for sql in ("UPDATE attendance_records", "INSERT INTO attendance_edit_logs"):
        with db_cursor(factory) as (_, cur):
            cur.execute(sql)

    assert len(connections) == 2
    assert [c.commits for c in connections] == [1, 1]


def test_transaction_shares_one_connection_and_commits_once(connections, factory):
    with MySQLUnitOfWork(factory).transaction():
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE attendance_records")
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT INTO attendance_edit_logs")

    assert len(connections) == 1
    conn = connections[0]
    assert conn.executed == ["UPDATE attendance_records", "INSERT INTO attendance_edit_logs"]
    assert (conn.commits, conn.rollbacks, conn.closed) == (1, 0, True)
    assert factory.active_connection() is None


def test_failure_inside_transaction_rolls_back_everything(connections, factory):
    with pytest.raises(RuntimeError):
        with factory.transaction():
            with db_cursor(factory) as (_, cur):
                cur.execute("UPDATE attendance_records")
            raise RuntimeError("audit insert failed")

    conn = connections[0]
    assert (conn.commits, conn.rollbacks, conn.closed) == (0, 1, True)
    assert factory.active_connection() is None


def test_nested_transaction_joins_the_outer_one(connections, factory):
    with factory.transaction():
        with factory.transaction():
            with db_cursor(factory) as (_, cur):
                cur.execute("UPDATE attendance_records")

    assert len(connections) == 1
    assert connections[0].commits == 1

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import mysql.connector

# DATETIME columns are business-local; the session zone keeps NOW() in line with them.
BUSINESS_SESSION_TIME_ZONE = "+09:00"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    time_zone: str = BUSINESS_SESSION_TIME_ZONE
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "worktime_db")),
            time_zone=str(db_config.get("time_zone", BUSINESS_SESSION_TIME_ZONE)),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide connection factory.

    Outside a transaction every repository call opens its own short-lived
    connection. Inside ``transaction()`` all calls made by the same thread
    share one connection and commit together.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        cfg = self._config
        kwargs = dict(
            host=cfg.host,
            port=cfg.port,
            user=cfg.user,
            password=cfg.password,
            time_zone=cfg.time_zone,
            connection_timeout=cfg.connect_timeout,
            autocommit=False,
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = cfg.database
        return mysql.connector.connect(**kwargs)

    def active_connection(self):
        """The connection of the current thread's open transaction, if any."""
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        # Nested calls join the outer transaction.
        if self.active_connection() is not None:
            yield
            return

        conn = self.connect()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()

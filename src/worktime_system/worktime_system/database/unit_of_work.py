from __future__ import annotations

from typing import ContextManager, Protocol

from .connection import DatabaseConnection


class UnitOfWork(Protocol):
    """Groups repository writes so they commit or roll back together."""

    def transaction(self) -> ContextManager[None]: ...


class MySQLUnitOfWork(UnitOfWork):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def transaction(self) -> ContextManager[None]:
        return self._conn_factory.transaction()

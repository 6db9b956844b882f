from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

# Quoted strings and comments are consumed whole so a ';' inside them never splits.
_TOKEN = re.compile(
    r"""
      '(?:[^'\\]|\\.|'')*'      # single-quoted literal
    | "(?:[^"\\]|\\.)*"         # double-quoted identifier
    | `[^`]*`                   # backtick identifier
    | --[^\n]*                  # line comment
    | /\*.*?\*/                 # block comment
    | ;                         # statement terminator
    | [^'"`;/-]+                # plain run
    | .                         # lone '-', '/' and the like
    """,
    re.VERBOSE | re.DOTALL,
)

_DB_LEVEL = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema script into statements, dropping comments.

    ``CREATE DATABASE`` and ``USE`` statements are skipped; the target
    database always comes from the connection settings.
    """
    parts: list[str] = []
    for match in _TOKEN.finditer(sql):
        token = match.group(0)
        if token.startswith("--") or token.startswith("/*"):
            continue
        if token != ";":
            parts.append(token)
            continue
        stmt = "".join(parts).strip()
        parts.clear()
        if stmt and not _DB_LEVEL.match(stmt):
            yield stmt

    tail = "".join(parts).strip()
    if tail and not _DB_LEVEL.match(tail):
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of ``schema_path``."""
    ensure_database_exists(db_config)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %d schema statement(s) to %s", len(statements), config.describe())
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()

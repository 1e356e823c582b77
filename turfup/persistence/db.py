"""
Database connection, initialization and transaction scope.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from turfup.config import config

from .schema import all_schema_sql

logger = logging.getLogger(__name__)

_db_path: Path | None = None


def set_db_path(path: str | Path | None) -> None:
    """Set the database path. None restores the configured default."""
    global _db_path
    _db_path = Path(path) if path is not None else None


def get_db_path() -> Path:
    """Return the current database path."""
    if _db_path is not None:
        return _db_path
    return Path(config.DB_PATH)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """
    Return a new SQLite connection with foreign keys enforced.
    Use as context manager or ensure close() is called.
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), timeout=config.DB_TIMEOUT)
    conn.row_factory = sqlite3.Row
    # Needed per connection for ON DELETE CASCADE.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection, immediate: bool = False) -> Generator[sqlite3.Connection, None, None]:
    """
    Run the block as one transaction: commit on success, rollback on any exception.

    immediate=True issues BEGIN IMMEDIATE, taking the database write lock before
    the first read. Concurrent writers then queue behind each other (up to the
    connection timeout), so a read-check-write sequence inside the block cannot
    interleave with another one.
    """
    conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()


def check_connection(conn: sqlite3.Connection) -> str:
    """Round-trip to the store; returns the database's current timestamp."""
    row = conn.execute("SELECT CURRENT_TIMESTAMP AS now").fetchone()
    return row["now"]


def init_db(db_path: str | Path | None = None) -> None:
    """
    Create or ensure all tables exist.
    """
    path = Path(db_path) if db_path else get_db_path()
    conn = get_connection(path)
    try:
        conn.executescript(all_schema_sql())
        conn.commit()
        logger.info("Database ready at %s (server time %s)", path, check_connection(conn))
    finally:
        conn.close()

"""
Shared fixtures: each test gets its own SQLite file.
"""
from __future__ import annotations

import pytest

from turfup.persistence.db import get_connection, init_db, set_db_path
from turfup.services import MatchService


@pytest.fixture
def db_path(tmp_path):
    """Temporary DB with the full schema; also the default for get_connection()."""
    path = tmp_path / "turfup_test.db"
    set_db_path(path)
    init_db(db_path=path)
    yield path
    set_db_path(None)


@pytest.fixture
def db_conn(db_path):
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def make_match(db_conn):
    """Factory: create a match needing `players_needed` players."""
    def _make(players_needed: int = 5, location: str = "Central Park", date: str = "2026-05-01", time: str | None = "18:00"):
        return MatchService().create_match(
            db_conn,
            location=location,
            date=date,
            time=time,
            players_needed=players_needed,
            creator={"name": "Rahul Kumar", "contact": "+91 9876543210"},
        ).match
    return _make

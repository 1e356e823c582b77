"""
Demo fixtures: two open matches, inserted only into an empty store.
"""
from __future__ import annotations

import logging
import sqlite3

from .db import transaction
from .repositories import MatchRepository

logger = logging.getLogger(__name__)

DEMO_MATCHES: list[dict] = [
    {
        "location": "Imphal Stadium",
        "date": "2026-02-25",
        "time": "18:00",
        "players_needed": 5,
        "creator_name": "Rahul Kumar",
        "creator_contact": "+91 9876543210",
    },
    {
        "location": "Shillong Sports Complex",
        "date": "2026-02-26",
        "time": "17:30",
        "players_needed": 8,
        "creator_name": "Priya Singh",
        "creator_contact": "@priya_sports",
    },
]


def seed_demo_matches(conn: sqlite3.Connection) -> int:
    """Insert DEMO_MATCHES if there are no matches yet. Returns number inserted."""
    repo = MatchRepository()
    with transaction(conn, immediate=True):
        if repo.count(conn) > 0:
            return 0
        for m in DEMO_MATCHES:
            repo.create(conn, **m)
    logger.info("Seeded %d demo matches", len(DEMO_MATCHES))
    return len(DEMO_MATCHES)

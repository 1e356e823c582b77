"""
Match creation and deletion, with input validation ahead of the store's
own NOT NULL / CHECK constraints.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from turfup.errors import NotFoundError, ValidationError
from turfup.models import MatchAggregate
from turfup.persistence.db import transaction
from turfup.persistence.repositories import MatchRepository
from turfup.services.validation import clean_text, parse_iso_date, parse_iso_time, parse_players_needed

logger = logging.getLogger(__name__)


class MatchService:
    """Create and delete matches. Reads go through MatchAggregateReader."""

    def __init__(self) -> None:
        self._match_repo = MatchRepository()

    def create_match(
        self,
        conn: sqlite3.Connection,
        location: Any,
        date: Any,
        players_needed: Any,
        creator: Any,
        time: Any = None,
    ) -> MatchAggregate:
        creator = creator if isinstance(creator, dict) else {}
        location = clean_text(location)
        date = clean_text(date)
        creator_name = clean_text(creator.get("name"))
        creator_contact = clean_text(creator.get("contact"))
        if not location or not date or players_needed in (None, "") or not creator_name or not creator_contact:
            raise ValidationError("Missing required fields")
        needed = parse_players_needed(players_needed)
        iso_date = parse_iso_date(date)
        time = clean_text(time)
        iso_time = parse_iso_time(time) if time else None

        try:
            with transaction(conn):
                match = self._match_repo.create(
                    conn, location, iso_date, iso_time, needed, creator_name, creator_contact
                )
        except sqlite3.IntegrityError as e:
            # CHECK on players_needed; pre-validation should make this unreachable
            raise ValidationError(f"Invalid match: {e}")
        logger.info("Created match %s at %s on %s (needs %d)", match.id, location, iso_date, needed)
        return MatchAggregate(match=match, players=[])

    def delete_match(self, conn: sqlite3.Connection, match_id: str) -> None:
        """Remove match and, by cascade, all its players."""
        with transaction(conn):
            deleted = self._match_repo.delete(conn, match_id)
        if not deleted:
            raise NotFoundError("Match not found")
        logger.info("Deleted match %s", match_id)

"""
Membership service: join and leave matches under the capacity and
one-name-per-match rules.

join_match is the one operation whose correctness depends on transaction
isolation. It runs count -> compare -> insert -> re-read inside a single
BEGIN IMMEDIATE transaction, so two joins on the same near-full match are
serialized by the database write lock and the second one sees the first's row.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from turfup.errors import DuplicateMemberError, MatchFullError, NotFoundError, ValidationError
from turfup.models import MatchAggregate
from turfup.persistence.db import transaction
from turfup.persistence.repositories import MatchRepository, PlayerRepository
from turfup.services.match_reader import MatchAggregateReader
from turfup.services.validation import clean_text

logger = logging.getLogger(__name__)


class MembershipService:
    """
    Domain logic for match membership. Persistence is delegated to repositories.
    """

    def __init__(self) -> None:
        self._match_repo = MatchRepository()
        self._player_repo = PlayerRepository()
        self._reader = MatchAggregateReader()

    def join_match(self, conn: sqlite3.Connection, match_id: str, name: Any, contact: Any) -> MatchAggregate:
        """
        Add (name, contact) to the match and return the refreshed aggregate.

        Raises, in this order of precedence: ValidationError (missing fields),
        NotFoundError, MatchFullError, DuplicateMemberError.
        """
        name, contact = clean_text(name), clean_text(contact)
        if not name or not contact:
            raise ValidationError("Name and contact required")

        with transaction(conn, immediate=True):
            match = self._match_repo.get(conn, match_id)
            if match is None:
                raise NotFoundError("Match not found")
            if self._player_repo.count_by_match(conn, match_id) >= match.players_needed:
                raise MatchFullError("Match is full!")
            if self._player_repo.get(conn, match_id, name) is not None:
                raise DuplicateMemberError("You have already joined this match")
            try:
                self._player_repo.create(conn, match_id, name, contact)
            except sqlite3.IntegrityError:
                # unique (match_id, name) index is the backstop for the check above
                raise DuplicateMemberError("You have already joined this match")
            aggregate = self._reader.get_match(conn, match_id)

        logger.info(
            "%s joined match %s (%d/%d)",
            name, match_id, aggregate.player_count, match.players_needed,
        )
        return aggregate

    def leave_match(self, conn: sqlite3.Connection, match_id: str, name: Any) -> None:
        """Remove name from the match. NotFoundError if not a member."""
        name = clean_text(name)
        if not name:
            raise ValidationError("Name required")
        with transaction(conn):
            removed = self._player_repo.delete(conn, match_id, name)
        if not removed:
            raise NotFoundError("Player not found in this match")
        logger.info("%s left match %s", name, match_id)

"""
Match aggregate reader: match + ordered players, as returned to clients.
"""
from __future__ import annotations

import sqlite3
from contextlib import nullcontext

from turfup.errors import NotFoundError
from turfup.models import MatchAggregate
from turfup.persistence.db import transaction
from turfup.persistence.repositories import MatchRepository, PlayerRepository


def _read_scope(conn: sqlite3.Connection):
    """One read transaction, or the caller's if one is already open."""
    return nullcontext(conn) if conn.in_transaction else transaction(conn)


class MatchAggregateReader:
    """
    Builds MatchAggregate views. Every call reads through one transaction so the
    match row and its players come from the same snapshot.
    """

    def __init__(self) -> None:
        self._match_repo = MatchRepository()
        self._player_repo = PlayerRepository()

    def list_matches(self, conn: sqlite3.Connection) -> list[MatchAggregate]:
        """All matches, newest first, each with players ordered by joined_at."""
        with _read_scope(conn):
            matches = self._match_repo.list_all(conn)
            players = self._player_repo.list_grouped_by_match(conn)
        return [MatchAggregate(match=m, players=players.get(m.id, [])) for m in matches]

    def find_match(self, conn: sqlite3.Connection, match_id: str) -> MatchAggregate | None:
        with _read_scope(conn):
            match = self._match_repo.get(conn, match_id)
            if match is None:
                return None
            return MatchAggregate(match=match, players=self._player_repo.list_by_match(conn, match_id))

    def get_match(self, conn: sqlite3.Connection, match_id: str) -> MatchAggregate:
        """Raise NotFoundError if the match does not exist."""
        aggregate = self.find_match(conn, match_id)
        if aggregate is None:
            raise NotFoundError("Match not found")
        return aggregate

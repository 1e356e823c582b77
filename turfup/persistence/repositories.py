"""
Repository interfaces for TurfUp data.
No business logic — only read/write operations.
Writes never commit: callers own the transaction (see db.transaction).
"""
from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone

from turfup.models import Creator, Match, Player, User


def _parse_datetime(s: str | None) -> datetime:
    if s is None:
        raise ValueError("expected datetime string")
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


# ---------- UserRepository ----------


class UserRepository:
    """CRUD for users. username unique; password_hash stored, never returned by the API."""

    _COLS = "id, username, password_hash, name, contact, created_at"

    def create(
        self,
        conn: sqlite3.Connection,
        username: str,
        password_hash: str,
        name: str,
        contact: str,
        id: str | None = None,
    ) -> User:
        uid = id or str(uuid.uuid4())
        now = _now_iso()
        conn.execute(
            "INSERT INTO users (id, username, password_hash, name, contact, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (uid, username, password_hash, name, contact, now),
        )
        return User(
            id=uid, username=username, password_hash=password_hash,
            name=name, contact=contact, created_at=_parse_datetime(now),
        )

    def get(self, conn: sqlite3.Connection, user_id: str) -> User | None:
        row = conn.execute(f"SELECT {self._COLS} FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row is not None else None

    def get_by_username(self, conn: sqlite3.Connection, username: str) -> User | None:
        row = conn.execute(f"SELECT {self._COLS} FROM users WHERE username = ?", (username,)).fetchone()
        return self._row_to_user(row) if row is not None else None

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            name=row["name"],
            contact=row["contact"],
            created_at=_parse_datetime(row["created_at"]),
        )


# ---------- RevokedTokenRepository ----------


class RevokedTokenRepository:
    """Token ids invalidated by logout, kept until they would have expired anyway."""

    def add(self, conn: sqlite3.Connection, jti: str, expires_at: datetime) -> None:
        conn.execute(
            "INSERT OR IGNORE INTO revoked_tokens (jti, expires_at) VALUES (?, ?)",
            (jti, expires_at.isoformat()),
        )

    def exists(self, conn: sqlite3.Connection, jti: str) -> bool:
        row = conn.execute("SELECT 1 FROM revoked_tokens WHERE jti = ?", (jti,)).fetchone()
        return row is not None

    def purge_expired(self, conn: sqlite3.Connection, now: datetime | None = None) -> int:
        """Delete rows whose token has expired. Returns number removed."""
        cutoff = (now or datetime.now(timezone.utc)).isoformat()
        cur = conn.execute("DELETE FROM revoked_tokens WHERE expires_at < ?", (cutoff,))
        return cur.rowcount


# ---------- MatchRepository ----------


class MatchRepository:
    """CRUD for matches. Columns are always enumerated."""

    _COLS = "id, location, date, time, players_needed, creator_name, creator_contact, created_at"

    def create(
        self,
        conn: sqlite3.Connection,
        location: str,
        date: str,
        time: str | None,
        players_needed: int,
        creator_name: str,
        creator_contact: str,
        id: str | None = None,
    ) -> Match:
        mid = id or str(uuid.uuid4())
        now = _now_iso()
        conn.execute(
            f"INSERT INTO matches ({self._COLS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (mid, location, date, time, players_needed, creator_name, creator_contact, now),
        )
        return Match(
            id=mid,
            location=location,
            date=date,
            time=time,
            players_needed=players_needed,
            creator=Creator(name=creator_name, contact=creator_contact),
            created_at=_parse_datetime(now),
        )

    def get(self, conn: sqlite3.Connection, match_id: str) -> Match | None:
        row = conn.execute(f"SELECT {self._COLS} FROM matches WHERE id = ?", (match_id,)).fetchone()
        return self._row_to_match(row) if row is not None else None

    def list_all(self, conn: sqlite3.Connection) -> list[Match]:
        """Newest first; rowid breaks created_at ties in insertion order."""
        rows = conn.execute(
            f"SELECT {self._COLS} FROM matches ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [self._row_to_match(r) for r in rows]

    def count(self, conn: sqlite3.Connection) -> int:
        return conn.execute("SELECT COUNT(*) FROM matches").fetchone()[0]

    def delete(self, conn: sqlite3.Connection, match_id: str) -> bool:
        """Delete match (players cascade). Returns False if it did not exist."""
        cur = conn.execute("DELETE FROM matches WHERE id = ?", (match_id,))
        return cur.rowcount > 0

    @staticmethod
    def _row_to_match(row: sqlite3.Row) -> Match:
        return Match(
            id=row["id"],
            location=row["location"],
            date=row["date"],
            time=row["time"],
            players_needed=row["players_needed"],
            creator=Creator(name=row["creator_name"], contact=row["creator_contact"]),
            created_at=_parse_datetime(row["created_at"]),
        )


# ---------- PlayerRepository ----------


class PlayerRepository:
    """CRUD for players (match membership rows)."""

    _COLS = "id, match_id, name, contact, joined_at"

    def create(
        self,
        conn: sqlite3.Connection,
        match_id: str,
        name: str,
        contact: str,
        id: str | None = None,
    ) -> Player:
        pid = id or str(uuid.uuid4())
        now = _now_iso()
        conn.execute(
            f"INSERT INTO players ({self._COLS}) VALUES (?, ?, ?, ?, ?)",
            (pid, match_id, name, contact, now),
        )
        return Player(id=pid, match_id=match_id, name=name, contact=contact, joined_at=_parse_datetime(now))

    def get(self, conn: sqlite3.Connection, match_id: str, name: str) -> Player | None:
        row = conn.execute(
            f"SELECT {self._COLS} FROM players WHERE match_id = ? AND name = ?",
            (match_id, name),
        ).fetchone()
        return self._row_to_player(row) if row is not None else None

    def count_by_match(self, conn: sqlite3.Connection, match_id: str) -> int:
        return conn.execute("SELECT COUNT(*) FROM players WHERE match_id = ?", (match_id,)).fetchone()[0]

    def list_by_match(self, conn: sqlite3.Connection, match_id: str) -> list[Player]:
        rows = conn.execute(
            f"SELECT {self._COLS} FROM players WHERE match_id = ? ORDER BY joined_at, rowid",
            (match_id,),
        ).fetchall()
        return [self._row_to_player(r) for r in rows]

    def list_grouped_by_match(self, conn: sqlite3.Connection) -> dict[str, list[Player]]:
        """All players keyed by match_id, each list ordered by joined_at."""
        rows = conn.execute(
            f"SELECT {self._COLS} FROM players ORDER BY match_id, joined_at, rowid"
        ).fetchall()
        grouped: dict[str, list[Player]] = {}
        for r in rows:
            grouped.setdefault(r["match_id"], []).append(self._row_to_player(r))
        return grouped

    def delete(self, conn: sqlite3.Connection, match_id: str, name: str) -> bool:
        """Remove one membership. Returns False if no such row."""
        cur = conn.execute("DELETE FROM players WHERE match_id = ? AND name = ?", (match_id, name))
        return cur.rowcount > 0

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            match_id=row["match_id"],
            name=row["name"],
            contact=row["contact"],
            joined_at=_parse_datetime(row["joined_at"]),
        )

"""
Data models for the TurfUp backend.
Domain objects only — no persistence or API logic.

A Match is a proposed sports session with a player quota; Players are the
membership records attached to it. to_dict() is the client-facing shape and
lists every field explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Quota bounds; the matches table enforces the same range with a CHECK.
MIN_PLAYERS_NEEDED = 1
MAX_PLAYERS_NEEDED = 20


# ---------- Creator ----------
@dataclass
class Creator:
    name: str
    contact: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "contact": self.contact}


# ---------- Player (membership) ----------
@dataclass
class Player:
    """
    One named participant in a match. (match_id, name) is unique.
    """
    id: str
    match_id: str
    name: str
    contact: str
    joined_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "contact": self.contact,
            "joinedAt": self.joined_at.isoformat(),
        }


# ---------- Match ----------
@dataclass
class Match:
    """
    A match row. Immutable once created; removed only by deletion,
    which cascades to its players.
    """
    id: str
    location: str
    date: str  # ISO date
    time: str | None  # ISO time, optional
    players_needed: int
    creator: Creator
    created_at: datetime


# ---------- MatchAggregate ----------
@dataclass
class MatchAggregate:
    """
    Match plus its players ordered by joined_at. Empty list when nobody joined.
    """
    match: Match
    players: list[Player] = field(default_factory=list)

    @property
    def player_count(self) -> int:
        return len(self.players)

    def to_dict(self) -> dict[str, Any]:
        m = self.match
        return {
            "id": m.id,
            "location": m.location,
            "date": m.date,
            "time": m.time,
            "playersNeeded": m.players_needed,
            "creator": m.creator.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "createdAt": m.created_at.isoformat(),
        }


# ---------- User ----------
@dataclass
class User:
    """
    An account. password_hash is never serialized.
    """
    id: str
    username: str
    password_hash: str
    name: str
    contact: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "contact": self.contact,
        }

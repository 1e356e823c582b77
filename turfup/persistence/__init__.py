"""
Persistence layer for TurfUp data.
No business logic — only read/write interfaces.
"""
from .db import get_connection, init_db, transaction
from .repositories import (
    UserRepository,
    RevokedTokenRepository,
    MatchRepository,
    PlayerRepository,
)

__all__ = [
    "get_connection",
    "init_db",
    "transaction",
    "UserRepository",
    "RevokedTokenRepository",
    "MatchRepository",
    "PlayerRepository",
]

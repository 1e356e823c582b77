"""
Service layer: validation, membership rules, sessions.
Services own transactions; repositories only read and write rows.
"""
from .match_reader import MatchAggregateReader
from .match_service import MatchService
from .membership_service import MembershipService
from .session_service import SessionService

__all__ = [
    "MatchAggregateReader",
    "MatchService",
    "MembershipService",
    "SessionService",
]

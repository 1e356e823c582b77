"""
Error taxonomy shared by services and the HTTP layer.
Each error carries the HTTP status it maps to; the message is user-safe.
"""
from __future__ import annotations


class TurfupError(Exception):
    """Base for every failure the API reports as {"error": message}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TurfupError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(TurfupError):
    """Match, membership or user does not exist."""

    status_code = 404


class ConflictError(TurfupError):
    """Unique value already taken (e.g. username)."""

    status_code = 400


class DuplicateMemberError(ConflictError):
    """Name already joined this match."""


class MatchFullError(TurfupError):
    """Player count reached players_needed."""

    status_code = 400


class UnauthorizedError(TurfupError):
    """Credentials did not match."""

    status_code = 401


class UnauthenticatedError(TurfupError):
    """No usable session token."""

    status_code = 401


class ServiceError(TurfupError):
    """Unexpected store failure."""

    status_code = 500

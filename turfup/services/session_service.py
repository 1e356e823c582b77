"""
Sign-up, login, logout and token resolution.
Revoked token ids live in the store, so sessions survive restarts and are
shared by every process pointed at the same database.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from turfup.auth import create_access_token, decode_token, hash_password, verify_password
from turfup.errors import ConflictError, UnauthenticatedError, UnauthorizedError, ValidationError
from turfup.models import User
from turfup.persistence.db import transaction
from turfup.persistence.repositories import RevokedTokenRepository, UserRepository
from turfup.services.validation import clean_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class SessionService:

    def __init__(self) -> None:
        self._user_repo = UserRepository()
        self._revoked_repo = RevokedTokenRepository()

    def sign_up(
        self, conn: sqlite3.Connection, username: Any, password: Any, name: Any, contact: Any
    ) -> tuple[str, User]:
        """Create account and return (token, user). ConflictError if username taken."""
        username, name, contact = clean_text(username), clean_text(name), clean_text(contact)
        if not username or not isinstance(password, str) or not password or not name or not contact:
            raise ValidationError("Missing required fields")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        password_hash = hash_password(password)
        try:
            with transaction(conn, immediate=True):
                if self._user_repo.get_by_username(conn, username) is not None:
                    raise ConflictError("Username already taken")
                user = self._user_repo.create(conn, username, password_hash, name, contact)
        except sqlite3.IntegrityError:
            raise ConflictError("Username already taken")
        logger.info("Signed up user %s (%s)", user.username, user.id)
        return create_access_token(user.id), user

    def login(self, conn: sqlite3.Connection, username: Any, password: Any) -> tuple[str, User]:
        username = clean_text(username)
        if not username or not isinstance(password, str) or not password:
            raise ValidationError("Username and password required")
        user = self._user_repo.get_by_username(conn, username)
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid username or password")
        logger.info("User %s logged in", user.username)
        return create_access_token(user.id), user

    def logout(self, conn: sqlite3.Connection, token: str | None) -> None:
        """Revoke token. Missing or invalid tokens are ignored."""
        claims = decode_token(token) if token else None
        if claims is None:
            return
        with transaction(conn):
            self._revoked_repo.add(conn, claims.jti, claims.expires_at)
            self._revoked_repo.purge_expired(conn)
        logger.info("User %s logged out", claims.user_id)

    def current_user(self, conn: sqlite3.Connection, token: str | None) -> User:
        """Resolve the bearer token to a user or raise UnauthenticatedError."""
        if not token:
            raise UnauthenticatedError("Not authenticated")
        claims = decode_token(token)
        if claims is None or self._revoked_repo.exists(conn, claims.jti):
            raise UnauthenticatedError("Invalid or expired token")
        user = self._user_repo.get(conn, claims.user_id)
        if user is None:
            raise UnauthenticatedError("Invalid or expired token")
        return user

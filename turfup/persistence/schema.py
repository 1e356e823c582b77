"""
SQLite schema for TurfUp entities.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def users_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL,
        password_hash TEXT NOT NULL,
        name TEXT NOT NULL,
        contact TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    CREATE UNIQUE INDEX IF NOT EXISTS ix_users_username ON users(username);
    """


def revoked_tokens_schema() -> str:
    """Logged-out token ids (jti). Rows past expires_at can be purged."""
    return """
    CREATE TABLE IF NOT EXISTS revoked_tokens (
        jti TEXT PRIMARY KEY,
        expires_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_revoked_tokens_expires_at ON revoked_tokens(expires_at);
    """


def matches_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS matches (
        id TEXT PRIMARY KEY,
        location TEXT NOT NULL,
        date TEXT NOT NULL,
        time TEXT,
        players_needed INTEGER NOT NULL CHECK (players_needed > 0 AND players_needed <= 20),
        creator_name TEXT NOT NULL,
        creator_contact TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_matches_date ON matches(date);
    CREATE INDEX IF NOT EXISTS ix_matches_created_at ON matches(created_at);
    """


def players_schema() -> str:
    """Membership rows. One name per match; cascade on match delete."""
    return """
    CREATE TABLE IF NOT EXISTS players (
        id TEXT PRIMARY KEY,
        match_id TEXT NOT NULL,
        name TEXT NOT NULL,
        contact TEXT NOT NULL,
        joined_at TEXT NOT NULL,
        FOREIGN KEY (match_id) REFERENCES matches(id) ON DELETE CASCADE
    );
    CREATE INDEX IF NOT EXISTS ix_players_match_id ON players(match_id);
    CREATE UNIQUE INDEX IF NOT EXISTS ix_players_match_name ON players(match_id, name);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: users, revoked_tokens, matches, players."""
    return "\n".join([
        users_schema(),
        revoked_tokens_schema(),
        matches_schema(),
        players_schema(),
    ])

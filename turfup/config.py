"""
Environment-driven settings for the TurfUp backend.
"""
from __future__ import annotations

import os
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


class Config:
    # Database
    DB_PATH = os.getenv("TURFUP_DB_PATH", str(_project_root() / "data" / "turfup.db"))
    DB_TIMEOUT = float(os.getenv("TURFUP_DB_TIMEOUT", "5.0"))  # seconds a writer waits for the lock
    SEED_DEMO = os.getenv("TURFUP_SEED_DEMO", "false").lower() == "true"

    # Auth
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "turfup-dev-secret-change-in-production")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # HTTP
    FRONTEND_URL = os.getenv("FRONTEND_URL", "*")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))

    LOG_LEVEL = os.getenv("TURFUP_LOG_LEVEL", "INFO").upper()


config = Config()

"""
Serve the TurfUp API with uvicorn.
Run from project root: python -m turfup.run_server [--host H] [--port P] [--reload]
"""
from __future__ import annotations

import argparse
import logging

import uvicorn

from turfup.config import config

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "GET    /matches",
    "GET    /matches/{id}",
    "POST   /matches",
    "POST   /matches/{id}/join",
    "POST   /matches/{id}/leave",
    "DELETE /matches/{id}",
    "POST   /auth/signup",
    "POST   /auth/login",
    "GET    /auth/me",
    "POST   /auth/logout",
    "GET    /health",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the TurfUp API server.")
    parser.add_argument("--host", default=config.HOST, help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=config.PORT, help="Port (default: PORT or 3000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL)
    logger.info("Server running at http://%s:%d", args.host, args.port)
    logger.info("Endpoints:\n  %s", "\n  ".join(ENDPOINTS))
    uvicorn.run("turfup.api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()

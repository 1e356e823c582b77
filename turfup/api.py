"""
REST API for the TurfUp backend.
Thin wrappers around the services; every error renders as {"error": message}.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, StrictInt
from starlette.exceptions import HTTPException as StarletteHTTPException

from turfup.config import config
from turfup.errors import ServiceError, TurfupError
from turfup.persistence import get_connection, init_db
from turfup.persistence.db import check_connection, get_db_path
from turfup.persistence.seed import seed_demo_matches
from turfup.services import MatchAggregateReader, MatchService, MembershipService, SessionService

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@contextmanager
def db_conn() -> Generator[sqlite3.Connection, None, None]:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def store_errors(action: str) -> Generator[None, None, None]:
    """Report unexpected store failures as ServiceError("Failed to <action>")."""
    try:
        yield
    except sqlite3.Error as e:
        logger.exception("Store failure while trying to %s", action)
        raise ServiceError(f"Failed to {action}") from e


# ---------- Startup ----------
def _ensure_db() -> None:
    init_db(db_path=get_db_path())
    if config.SEED_DEMO:
        with db_conn() as conn:
            seed_demo_matches(conn)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    _ensure_db()
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="TurfUp API",
    description="Create sports matches, join and leave them",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_methods=["*"],
    allow_headers=["*"],
)

security = HTTPBearer(auto_error=False)


# ---------- Error rendering ----------


@app.exception_handler(TurfupError)
async def turfup_error_handler(request: Request, exc: TurfupError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s -> 500: unhandled error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------- Request models ----------
# Fields are optional so missing values reach the services, which answer
# with the domain's own "Missing required fields" style messages.


class CreatorIn(BaseModel):
    name: str | None = None
    contact: str | None = None


class CreateMatchRequest(BaseModel):
    location: str | None = None
    date: str | None = None
    time: str | None = None
    playersNeeded: StrictInt | str | None = None
    creator: CreatorIn | None = None


class JoinMatchRequest(BaseModel):
    name: str | None = None
    contact: str | None = None


class LeaveMatchRequest(BaseModel):
    name: str | None = None


class SignupRequest(BaseModel):
    username: str | None = None
    password: str | None = None
    name: str | None = None
    contact: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


def _bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> str | None:
    """Raw bearer token or None; resolution happens in SessionService."""
    if credentials is None:
        return None
    return credentials.credentials


# ---------- Health ----------


@app.get("/health")
def health() -> dict[str, Any]:
    with store_errors("reach database"), db_conn() as conn:
        return {"status": "ok", "database": check_connection(conn)}


# ---------- Matches ----------


@app.get("/matches")
def list_matches() -> list[dict[str, Any]]:
    """All matches, newest first, with players in join order."""
    with store_errors("fetch matches"), db_conn() as conn:
        return [a.to_dict() for a in MatchAggregateReader().list_matches(conn)]


@app.get("/matches/{match_id}")
def get_match(match_id: str) -> dict[str, Any]:
    with store_errors("fetch match"), db_conn() as conn:
        return MatchAggregateReader().get_match(conn, match_id).to_dict()


@app.post("/matches")
def create_match(req: CreateMatchRequest) -> dict[str, Any]:
    creator = {"name": req.creator.name, "contact": req.creator.contact} if req.creator else None
    with store_errors("create match"), db_conn() as conn:
        aggregate = MatchService().create_match(
            conn,
            location=req.location,
            date=req.date,
            time=req.time,
            players_needed=req.playersNeeded,
            creator=creator,
        )
        return aggregate.to_dict()


@app.post("/matches/{match_id}/join")
def join_match(match_id: str, req: JoinMatchRequest) -> dict[str, Any]:
    """Join a match. 400 when full or already joined; returns the updated match."""
    with store_errors("join match"), db_conn() as conn:
        return MembershipService().join_match(conn, match_id, req.name, req.contact).to_dict()


@app.post("/matches/{match_id}/leave")
def leave_match(match_id: str, req: LeaveMatchRequest) -> dict[str, Any]:
    with store_errors("leave match"), db_conn() as conn:
        MembershipService().leave_match(conn, match_id, req.name)
    return {"message": "Left match successfully"}


@app.delete("/matches/{match_id}")
def delete_match(match_id: str) -> dict[str, Any]:
    with store_errors("delete match"), db_conn() as conn:
        MatchService().delete_match(conn, match_id)
    return {"message": "Match deleted successfully"}


# ---------- Auth ----------


@app.post("/auth/signup")
def signup(req: SignupRequest) -> dict[str, Any]:
    """Create account. Passwords hashed, never stored plain."""
    with store_errors("sign up"), db_conn() as conn:
        token, user = SessionService().sign_up(conn, req.username, req.password, req.name, req.contact)
    return {"token": token, "user": user.to_dict()}


@app.post("/auth/login")
def login(req: LoginRequest) -> dict[str, Any]:
    with store_errors("log in"), db_conn() as conn:
        token, user = SessionService().login(conn, req.username, req.password)
    return {"token": token, "user": user.to_dict()}


@app.get("/auth/me")
def me(token: str | None = Depends(_bearer_token)) -> dict[str, Any]:
    with store_errors("fetch user"), db_conn() as conn:
        user = SessionService().current_user(conn, token)
    return {"user": user.to_dict()}


@app.post("/auth/logout")
def logout(token: str | None = Depends(_bearer_token)) -> dict[str, Any]:
    with store_errors("log out"), db_conn() as conn:
        SessionService().logout(conn, token)
    return {"success": True}


# ---------- Run with: python -m turfup.run_server (or uvicorn turfup.api:app --reload) ----------

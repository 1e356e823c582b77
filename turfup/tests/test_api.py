"""
API integration tests.
Uses TestClient to avoid starting a server.
"""
from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from turfup.api import app
from turfup.services import MatchAggregateReader, MembershipService


@pytest.fixture
def client(db_path):
    return TestClient(app)


def _create(client, players_needed=2, location="Imphal Stadium"):
    resp = client.post(
        "/matches",
        json={
            "location": location,
            "date": "2026-02-25",
            "time": "18:00",
            "playersNeeded": players_needed,
            "creator": {"name": "Rahul Kumar", "contact": "+91 9876543210"},
        },
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_list_matches_empty(client):
    resp = client.get("/matches")
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_and_get_match(client):
    created = _create(client, players_needed=5)
    assert created["players"] == []
    assert created["playersNeeded"] == 5
    assert created["creator"] == {"name": "Rahul Kumar", "contact": "+91 9876543210"}
    resp = client.get(f"/matches/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_create_match_players_needed_as_string(client):
    resp = client.post(
        "/matches",
        json={"location": "Field", "date": "2026-02-25", "playersNeeded": "3",
              "creator": {"name": "R", "contact": "r@x"}},
    )
    assert resp.status_code == 200
    assert resp.json()["playersNeeded"] == 3
    assert resp.json()["time"] is None


def test_create_match_missing_fields(client):
    resp = client.post("/matches", json={"location": "Field", "date": "2026-02-25", "playersNeeded": 3})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}


def test_create_match_quota_out_of_range(client):
    resp = client.post(
        "/matches",
        json={"location": "Field", "date": "2026-02-25", "playersNeeded": 25,
              "creator": {"name": "R", "contact": "r@x"}},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.parametrize("players_needed", [True, 3.0])
def test_create_match_players_needed_must_be_integer(client, players_needed):
    resp = client.post(
        "/matches",
        json={"location": "Field", "date": "2026-02-25", "playersNeeded": players_needed,
              "creator": {"name": "R", "contact": "r@x"}},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert client.get("/matches").json() == []


def test_create_match_time_drops_utc_offset(client):
    resp = client.post(
        "/matches",
        json={"location": "Field", "date": "2026-02-25", "time": "18:00:00+05:30", "playersNeeded": 2,
              "creator": {"name": "R", "contact": "r@x"}},
    )
    assert resp.status_code == 200
    assert resp.json()["time"] == "18:00"


def test_get_unknown_match_404(client):
    resp = client.get("/matches/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Match not found"}


def test_join_full_duplicate_and_leave_flow(client):
    match = _create(client, players_needed=1)
    mid = match["id"]

    resp = client.post(f"/matches/{mid}/join", json={"name": "A", "contact": "a@x"})
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["players"]] == ["A"]
    assert set(resp.json()["players"][0]) == {"name", "contact", "joinedAt"}

    resp = client.post(f"/matches/{mid}/join", json={"name": "B", "contact": "b@x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Match is full!"}

    resp = client.post(f"/matches/{mid}/leave", json={"name": "A"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Left match successfully"}

    resp = client.post(f"/matches/{mid}/join", json={"name": "B", "contact": "b@x"})
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["players"]] == ["B"]


def test_join_duplicate_returns_400(client):
    mid = _create(client, players_needed=3)["id"]
    client.post(f"/matches/{mid}/join", json={"name": "A", "contact": "a@x"})
    resp = client.post(f"/matches/{mid}/join", json={"name": "A", "contact": "a@x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "You have already joined this match"}
    assert len(client.get(f"/matches/{mid}").json()["players"]) == 1


def test_join_errors(client):
    mid = _create(client)["id"]
    resp = client.post(f"/matches/{mid}/join", json={"name": "A"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Name and contact required"}
    resp = client.post("/matches/missing/join", json={"name": "A", "contact": "a@x"})
    assert resp.status_code == 404


def test_leave_errors(client):
    mid = _create(client)["id"]
    resp = client.post(f"/matches/{mid}/leave", json={})
    assert resp.status_code == 400
    resp = client.post(f"/matches/{mid}/leave", json={"name": "Ghost"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Player not found in this match"}


def test_delete_match(client):
    mid = _create(client)["id"]
    client.post(f"/matches/{mid}/join", json={"name": "A", "contact": "a@x"})
    resp = client.delete(f"/matches/{mid}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Match deleted successfully"}
    assert client.get(f"/matches/{mid}").status_code == 404
    assert client.delete(f"/matches/{mid}").status_code == 404


def test_list_matches_newest_first(client):
    old = _create(client, location="Old")
    new = _create(client, location="New")
    assert [m["id"] for m in client.get("/matches").json()] == [new["id"], old["id"]]


def test_malformed_body_is_400_with_error(client):
    resp = client.post("/matches", content="not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}


def test_unknown_route_uses_error_body(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert "error" in resp.json()


def test_store_failure_maps_to_500(client):
    with patch.object(MatchAggregateReader, "list_matches", side_effect=sqlite3.OperationalError("disk I/O error")):
        resp = client.get("/matches")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch matches"}


def test_join_store_failure_maps_to_500(client):
    mid = _create(client)["id"]
    with patch.object(MembershipService, "join_match", side_effect=sqlite3.DatabaseError("boom")):
        resp = client.post(f"/matches/{mid}/join", json={"name": "A", "contact": "a@x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to join match"}


def test_unexpected_error_uses_error_body(db_path):
    client = TestClient(app, raise_server_exceptions=False)
    with patch.object(MatchAggregateReader, "list_matches", side_effect=ValueError("corrupt created_at")):
        resp = client.get("/matches")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# ---------- Auth ----------


def test_signup_me_logout(client):
    resp = client.post(
        "/auth/signup",
        json={"username": "asha", "password": "secret123", "name": "Asha", "contact": "a@x"},
    )
    assert resp.status_code == 200
    body = resp.json()
    token = body["token"]
    assert body["user"] == {"id": body["user"]["id"], "username": "asha", "name": "Asha", "contact": "a@x"}

    resp = client.get("/auth/me", headers=_auth(token))
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "asha"

    resp = client.post("/auth/logout", headers=_auth(token))
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    resp = client.get("/auth/me", headers=_auth(token))
    assert resp.status_code == 401
    assert "error" in resp.json()


def test_signup_conflict_and_missing(client):
    payload = {"username": "asha", "password": "secret123", "name": "Asha", "contact": "a@x"}
    assert client.post("/auth/signup", json=payload).status_code == 200
    resp = client.post("/auth/signup", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username already taken"}
    resp = client.post("/auth/signup", json={"username": "bo"})
    assert resp.status_code == 400


def test_login(client):
    client.post("/auth/signup", json={"username": "asha", "password": "secret123", "name": "Asha", "contact": "a@x"})
    resp = client.post("/auth/login", json={"username": "asha", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "asha"
    assert client.get("/auth/me", headers=_auth(resp.json()["token"])).status_code == 200

    resp = client.post("/auth/login", json={"username": "asha", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid username or password"}
    assert client.post("/auth/login", json={"username": "asha"}).status_code == 400


def test_me_without_token(client):
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Not authenticated"}


def test_logout_without_token_succeeds(client):
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

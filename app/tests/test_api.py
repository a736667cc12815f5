# app/tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from app.core.auth import create_access_token
from app.database import get_db
from app.main import app


@pytest.fixture
def client(db):
    def _override_db():
        yield db

    app.dependency_overrides[get_db] = _override_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict:
        token = create_access_token({"sub": str(user.user_id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


def test_requires_token(client):
    r = client.get("/v1/entries")
    assert r.status_code == 401
    assert r.json()["reason"] == "not_authenticated"

    r = client.post("/v1/entries", json={"movie_id": 1}, headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401


def test_add_list_and_delete_entry(client, make_user, make_movie, auth_headers):
    user = make_user()
    make_movie(1, 90)
    headers = auth_headers(user)

    r = client.post("/v1/entries", json={"movie_id": 1, "rating": 4}, headers=headers)
    assert r.status_code == 201
    body = r.json()
    assert body["points_earned"] == 25
    assert body["calculation"]["watchtime_points"] == 20
    entry_id = body["entry"]["entry_id"]

    r = client.get("/v1/users/me", headers=headers)
    assert r.json()["total_points"] == 25

    r = client.get("/v1/entries", headers=headers)
    assert r.status_code == 200
    assert [e["entry_id"] for e in r.json()] == [entry_id]
    assert r.json()[0]["can_rate"] is True

    r = client.delete(f"/v1/entries/{entry_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["points_deducted"] == 25

    r = client.get("/v1/users/me/stats", headers=headers)
    assert r.json()["total_points"] == 0
    assert r.json()["movie_count"] == 0


def test_duplicate_add_reports_zero_points(client, make_user, make_movie, auth_headers):
    user = make_user()
    make_movie(1, 90)
    headers = auth_headers(user)
    client.post("/v1/entries", json={"movie_id": 1}, headers=headers)

    r = client.post("/v1/entries", json={"movie_id": 1, "rating": 5}, headers=headers)

    assert r.status_code == 201
    assert r.json()["duplicate"] is True
    assert r.json()["reason"] == "duplicate_entry"
    assert r.json()["points_earned"] == 0


def test_try_hard_rating_too_early(client, make_user, make_movie, auth_headers):
    user = make_user()
    make_movie(1, 120)
    headers = auth_headers(user)

    r = client.put("/v1/users/me/try-hard-mode", json={"enabled": True}, headers=headers)
    assert r.status_code == 200
    assert r.json()["try_hard_mode"] is True

    r = client.post("/v1/entries", json={"movie_id": 1}, headers=headers)
    assert r.status_code == 201
    assert r.json()["points_pending"] is True
    entry_id = r.json()["entry"]["entry_id"]

    r = client.patch(f"/v1/entries/{entry_id}/rating", json={"rating": 5}, headers=headers)
    assert r.status_code == 409
    assert r.json()["reason"] == "rating_too_early"
    assert 0 < r.json()["remaining_seconds"] <= 110 * 60

    r = client.post("/v1/users/me/unlocks/resolve", headers=headers)
    assert r.status_code == 200
    assert r.json()["awarded"] == 0


def test_unknown_entry_and_movie(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    r = client.post("/v1/entries", json={"movie_id": 12345}, headers=headers)
    assert r.status_code == 404
    assert r.json()["reason"] == "movie_not_found"

    r = client.delete("/v1/entries/999", headers=headers)
    assert r.status_code == 404

    r = client.patch("/v1/entries/999/rating", json={"rating": 9}, headers=headers)
    assert r.status_code == 422


def test_today_watchtime(client, make_user, make_movie, auth_headers):
    user = make_user()
    make_movie(1, 150)
    headers = auth_headers(user)
    client.post("/v1/entries", json={"movie_id": 1}, headers=headers)

    r = client.get("/v1/users/me/watchtime/today", headers=headers)

    assert r.json() == {"watchtime_minutes": 150, "cap_minutes": 420, "remaining_minutes": 270}


def test_health(client):
    r = client.get("/v1/system/health")
    assert r.status_code == 200
    assert r.json()["unlock_sweep_interval_seconds"] == 30

# tests/test_app.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasktracker.auth import get_password_hash, verify_password
from tasktracker.config import Settings
from tasktracker.tasks import reconcile_status


def test_health_ok(client) -> None:
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "database": "ok"}


def test_health_reports_unavailable_store(client, db) -> None:
    db.available = False

    resp = client.get("/api/health")

    assert resp.status_code == 503
    assert resp.json()["database"] == "unavailable"


def test_unexpected_store_error_is_500(app, db) -> None:
    async def broken_find_one(query):
        raise RuntimeError("store exploded")

    db.users.find_one = broken_find_one
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.post("/api/login", json={"email": "a@example.com", "password": "x"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal Server Error"}


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("correct horse")

    assert hashed.startswith("$2")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
    assert not verify_password("correct horse", "")


def test_long_passwords_do_not_raise() -> None:
    hashed = get_password_hash("x" * 100)

    assert verify_password("x" * 100, hashed)


@pytest.mark.parametrize(
    "updates, expected",
    [
        ({"title": "t"}, {"title": "t"}),
        ({"completed": True}, {"completed": True, "status": "Completed"}),
        ({"completed": False}, {"completed": False, "status": "Not Started"}),
        ({"status": "In Progress"}, {"status": "In Progress", "completed": False}),
        ({"status": "Completed", "completed": False}, {"status": "Completed", "completed": True}),
        ({"completed": None, "status": None}, {}),
    ],
)
def test_reconcile_status(updates, expected) -> None:
    assert reconcile_status(updates) == expected


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("MONGODB_URL", "mongodb://db.internal:27017")
    monkeypatch.setenv("MONGODB_TIMEOUT_MS", "1500")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://tasks.example.com")

    settings = Settings()

    assert settings.mongodb_url == "mongodb://db.internal:27017"
    assert settings.mongodb_timeout_ms == 1500
    assert settings.cors_origins == ["http://localhost:3000", "https://tasks.example.com"]

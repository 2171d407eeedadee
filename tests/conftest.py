# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasktracker.config import Settings
from tasktracker.database import get_db
from tasktracker.main import create_app

from .fakes import FakeDatabase


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        project_name="Task Tracker API (tests)",
        mongodb_url="mongodb://unused:27017",
        mongodb_db="tests",
        cors_origins=["*"],
        log_level="DEBUG",
        log_file="",
    )


@pytest.fixture()
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def app(settings: Settings, db: FakeDatabase) -> FastAPI:
    """
    App wired to the in-memory database.

    The client is not used as a context manager, so the lifespan hook
    (which would connect to a real MongoDB) never runs.
    """
    app = create_app(settings)
    app.dependency_overrides[get_db] = lambda: db
    return app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def user(client: TestClient) -> dict:
    resp = client.post(
        "/api/register",
        json={"name": "Ada", "email": "ada@example.com", "password": "s3cret"},
    )
    return resp.json()["user"]

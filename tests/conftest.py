"""Shared fixtures: a fresh application and store per test."""
import pytest
from fastapi.testclient import TestClient

from exercise_tracker.app.core.config import Settings
from exercise_tracker.app.core.db import Database, get_database_path
from exercise_tracker.app.main import create_app


@pytest.fixture
def app_settings(tmp_path):
    return Settings(database_url=str(tmp_path), db_name="tracker_test")


@pytest.fixture
def client(app_settings):
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(app_settings):
    db = Database(get_database_path(app_settings))
    db.open()
    yield db
    db.close()


@pytest.fixture
def create_user(client):
    def _create(username: str) -> dict:
        response = client.post("/api/users", data={"username": username})
        assert response.status_code == 200
        return response.json()

    return _create


@pytest.fixture
def add_exercise(client):
    def _add(user_id: str, description: str, duration, date=None) -> dict:
        payload = {"description": description, "duration": str(duration)}
        if date is not None:
            payload["date"] = date
        response = client.post(f"/api/users/{user_id}/exercises", data=payload)
        assert response.status_code == 200
        return response.json()

    return _add

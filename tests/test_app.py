"""Tests for configuration, storage lifecycle and the landing page."""
import os

import pytest

from exercise_tracker.app.core.config import Settings
from exercise_tracker.app.core.db import Database, get_database_path
from exercise_tracker.app.core.errors import PersistenceError


def test_database_path_from_directory(tmp_path):
    settings = Settings(database_url=str(tmp_path), db_name="tracker")

    assert get_database_path(settings) == str(tmp_path / "tracker.db")


def test_database_path_from_sqlite_url(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path}", db_name="tracker.db")

    assert get_database_path(settings) == str(tmp_path / "tracker.db")


def test_relative_database_path_is_absolute():
    settings = Settings(database_url="data", db_name="tracker")

    path = get_database_path(settings)

    assert os.path.isabs(path)
    assert path.endswith(os.path.join("data", "tracker.db"))


def test_cors_origin_list():
    settings = Settings(cors_origins="https://a.example, https://b.example,")

    assert settings.cors_origin_list == ["https://a.example", "https://b.example"]


def test_open_is_repeatable(tmp_path):
    db = Database(str(tmp_path / "nested" / "tracker.db"))
    db.open()
    db.open()

    with db.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
    db.close()

    assert versions == [1, 2]


def test_closed_database_raises_persistence_error(tmp_path):
    db = Database(str(tmp_path / "tracker.db"))

    with pytest.raises(PersistenceError) as excinfo:
        with db.cursor("lookup failed"):
            pass

    assert excinfo.value.message == "lookup failed"


def test_sql_errors_become_persistence_errors(database):
    with pytest.raises(PersistenceError):
        with database.cursor("bad query") as cursor:
            cursor.execute("SELECT * FROM no_such_table")


def test_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert 'action="/api/users"' in response.text


def test_static_assets(client):
    response = client.get("/public/style.css")

    assert response.status_code == 200
    assert "text/css" in response.headers["content-type"]


def test_integer_overflow_becomes_persistence_error(database):
    with pytest.raises(PersistenceError) as excinfo:
        with database.cursor("oversized value") as cursor:
            cursor.execute("SELECT ?", (2**64,))

    assert excinfo.value.message == "oversized value"

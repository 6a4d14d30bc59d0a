import sqlite3

import pytest
from fastapi.testclient import TestClient

from message_service_api.app.core.config import settings
from message_service_api.app.core.db import init_db
from message_service_api.app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "messages.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def conn(db_path):
    connection = sqlite3.connect(db_path)
    connection.row_factory = sqlite3.Row
    yield connection
    connection.close()


@pytest.fixture
def client(db_path):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed(conn):
    """Insert rows with explicit timestamps, bypassing the service."""

    def _seed(*rows):
        conn.executemany(
            "INSERT INTO messages (username, message, timestamp) VALUES (?, ?, ?)",
            rows,
        )
        conn.commit()

    return _seed

"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core import auth, config  # noqa: E402
from core.database import get_connection, init_schema, update_member  # noqa: E402
from services.accounts import login, register_member  # noqa: E402

PASSWORD = "mountain123"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Keep PBKDF2 cheap in tests."""
    monkeypatch.setattr(auth, "pwd_context", auth.make_password_context(rounds=1000))


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the app at a fresh database with the full schema."""
    path = tmp_path / "mslog-test.db"
    monkeypatch.setattr(config, "DB_PATH", path)
    conn = get_connection()
    init_schema(conn)
    conn.close()
    return path


@pytest.fixture
def conn(db_path):
    connection = get_connection()
    yield connection
    connection.close()


@pytest.fixture
def make_member(conn):
    """Factory: register a member and return (member, session token)."""
    counter = {"n": 0}

    def _make(name="Pat Example", role="member", status="approved", email=None, lot="58221.0137"):
        counter["n"] += 1
        email = email or f"member{counter['n']}@example.com"
        member = register_member(conn, name, email, lot, PASSWORD, PASSWORD, phone="509-555-0100")
        update_member(conn, member["id"], role=role, status=status)
        token, _ = login(conn, email, PASSWORD)
        member = {**member, "role": role, "status": status}
        return member, token

    return _make


@pytest.fixture
def client(db_path):
    from fastapi.testclient import TestClient

    from api.main import app

    with TestClient(app) as test_client:
        yield test_client


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_event():
    """Sample event dictionary for testing."""
    return {
        "id": 1,
        "title": "Board Meeting",
        "date": "2024-02-05",
        "time": "18:30",
        "location": "Fire Station 9",
        "description": "Monthly board meeting",
        "created_at": "2024-01-20T17:00:00+00:00",
        "created_by": 1,
    }


@pytest.fixture
def sample_events(sample_event):
    """List of sample events for testing."""
    return [
        sample_event,
        {
            **sample_event,
            "id": 2,
            "title": "Road Work Party",
            "date": "2024-02-17",
            "time": "09:00",
        },
        {
            **sample_event,
            "id": 3,
            "title": "Snow Plow Briefing",
            "date": "2024-02-05",
            "time": "19:30",
        },
    ]

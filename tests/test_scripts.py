"""Tests for the command-line scripts."""

import sys

import pytest

from core import config
from core.database import get_connection, get_member_credentials
from scripts import create_admin


def test_create_admin_on_fresh_checkout(tmp_path, monkeypatch):
    db_path = tmp_path / "data" / "db" / "mslog.db"
    monkeypatch.setattr(config, "DB_PATH", db_path)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "create_admin.py",
            "--email", "admin@example.com",
            "--name", "Jane Doe",
            "--lot", "58221.0137",
            "--password", "mountain123",
        ],
    )

    with pytest.raises(SystemExit) as exc_info:
        create_admin.main()
    assert exc_info.value.code == 0

    conn = get_connection()
    try:
        member, _ = get_member_credentials(conn, "admin@example.com")
    finally:
        conn.close()
    assert member["role"] == "admin"
    assert member["status"] == "approved"

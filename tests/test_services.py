"""Tests for accounts, directory, library, forum, gate and report services."""

from datetime import date, datetime, timedelta, timezone
from io import BytesIO

import pytest
from openpyxl import load_workbook

from core.auth import hash_password, verify_password
from core.config import LOT_NUMBER_MESSAGE
from core.database import insert_thread, list_documents
from services.accounts import (
    EmailAlreadyRegisteredError,
    approve_member,
    build_auth_profile,
    login,
    logout,
    member_for_token,
    register_member,
    role_of,
    set_member_role,
)
from services.directory import directory_count_text, directory_row, search_directory
from services.email import format_registration_email, send_registration_email
from services.events import add_event, month_calendar, remove_event, upcoming_events
from services.forum import add_thread, can_delete_thread, is_new_thread, load_threads
from services.gate import gate_code_display, update_gate_code
from services.library import add_document, add_video, filter_by_category, load_documents, load_videos
from services.reports import directory_workbook_bytes, format_posted, format_updated


def member_row(**overrides):
    member = {
        "id": 1,
        "email": "pat@example.com",
        "name": "Pat Example",
        "lot": "58221.0137",
        "phone": "509-555-0100",
        "role": "member",
        "status": "approved",
        "created_at": "2025-01-01T00:00:00+00:00",
    }
    member.update(overrides)
    return member


class TestAccounts:
    def test_register_creates_pending_member(self, conn):
        member = register_member(conn, "Pat", " Pat@Example.com ", "58221.0137", "mountain123", "mountain123")
        assert member["email"] == "pat@example.com"
        assert member["status"] == "pending"
        assert member["role"] == "member"

    def test_register_validation_errors(self, conn):
        with pytest.raises(ValueError) as exc_info:
            register_member(conn, "Pat", "pat@example.com", "bad", "mountain123", "mountain123")
        assert str(exc_info.value) == LOT_NUMBER_MESSAGE

    def test_register_duplicate_email(self, conn):
        register_member(conn, "Pat", "pat@example.com", "58221.0137", "mountain123", "mountain123")
        with pytest.raises(EmailAlreadyRegisteredError):
            register_member(conn, "Pat", "PAT@example.com", "58221.0137", "mountain123", "mountain123")

    def test_login_and_logout(self, conn):
        register_member(conn, "Pat", "pat@example.com", "58221.0137", "mountain123", "mountain123")
        assert login(conn, "pat@example.com", "wrongpass1") is None
        assert login(conn, "nobody@example.com", "mountain123") is None

        token, profile = login(conn, "PAT@example.com", "mountain123")
        assert profile["email"] == "pat@example.com"
        assert member_for_token(conn, token)["email"] == "pat@example.com"

        logout(conn, token)
        assert member_for_token(conn, token) is None

    def test_password_hashing(self):
        stored = hash_password("mountain123")
        assert stored.startswith("$pbkdf2-sha256$")
        assert verify_password("mountain123", stored)
        assert not verify_password("mountain124", stored)
        assert not verify_password("mountain123", "not-a-hash")

    def test_auth_profile_defaults(self):
        profile = build_auth_profile(member_row(name="", role="", phone=""))
        assert profile["name"] == "pat@example.com"
        assert profile["role"] == "member"
        assert profile["phone"] == ""

    def test_role_of(self):
        assert role_of(None) == "anonymous"
        assert role_of(member_row()) == "member"
        assert role_of(member_row(role="admin")) == "admin"

    def test_approve_and_role_change(self, conn):
        member = register_member(conn, "Pat", "pat@example.com", "58221.0137", "mountain123", "mountain123")
        assert approve_member(conn, member["id"])["status"] == "approved"
        assert set_member_role(conn, member["id"], "admin")["role"] == "admin"
        assert approve_member(conn, 999) is None
        with pytest.raises(ValueError):
            set_member_role(conn, member["id"], "owner")


class TestDirectory:
    def test_sorted_case_insensitively(self):
        members = [member_row(id=1, name="zed"), member_row(id=2, name="Amy"), member_row(id=3, name="bob")]
        assert [r["name"] for r in search_directory(members)] == ["Amy", "bob", "zed"]

    def test_search_matches_any_column(self):
        members = [
            member_row(id=1, name="Amy", lot="58221.0001"),
            member_row(id=2, name="Bob", lot="58221.0002", role="admin"),
        ]
        assert [r["name"] for r in search_directory(members, "0002")] == ["Bob"]
        assert [r["name"] for r in search_directory(members, "ADMIN")] == ["Bob"]
        assert len(search_directory(members, "example.com")) == 2
        assert search_directory(members, "nobody") == []

    def test_missing_fields_display(self):
        row = directory_row(member_row(name="", phone=""))
        assert row["name"] == "Unknown"
        assert row["phone"] == "—"
        assert row["badge"] == "Member"

    def test_count_text(self):
        assert directory_count_text(1) == "Showing 1 member."
        assert directory_count_text(0) == "Showing 0 members."
        assert directory_count_text(12) == "Showing 12 members."


class TestLibrary:
    def test_add_and_filter_documents(self, conn):
        add_document(conn, "Bylaws 2024", "bylaws", "", "https://example.com/b.pdf", 1)
        add_document(conn, "Road Map", None, "Plow routes", "https://example.com/m.pdf", 1)

        everything = load_documents(conn, "all", can_delete=True)
        assert [d["title"] for d in everything] == ["Road Map", "Bylaws 2024"]
        assert everything[0]["category"] == "resources"
        assert everything[0]["can_delete"] is True

        bylaws = load_documents(conn, "bylaws", can_delete=False)
        assert [d["title"] for d in bylaws] == ["Bylaws 2024"]
        assert bylaws[0]["category_label"] == "Bylaws"

    def test_invalid_document(self, conn):
        with pytest.raises(ValueError):
            add_document(conn, "  ", "bylaws", "", "https://example.com/b.pdf", 1)
        assert list_documents(conn) == []

    def test_video_requires_youtube(self, conn):
        with pytest.raises(ValueError) as exc_info:
            add_video(conn, "Plowing", "tutorial", "", "https://vimeo.com/1", 1)
        assert "valid YouTube URL" in str(exc_info.value)

    def test_video_embed(self, conn):
        add_video(conn, "Plowing", None, "", "https://youtu.be/dQw4w9WgXcQ", 1)
        video = load_videos(conn, "all", can_delete=False)[0]
        assert video["category"] == "community"
        assert video["youtube_id"] == "dQw4w9WgXcQ"
        assert video["embed_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_filter_by_category(self):
        items = [{"category": "maps"}, {"category": "bylaws"}]
        assert filter_by_category(items, "all") == items
        assert filter_by_category(items, None) == items
        assert filter_by_category(items, "maps") == [{"category": "maps"}]


class TestEventsService:
    def test_add_then_delete_updates_calendar(self, conn):
        event_id = add_event(conn, "Board Meeting", "2024-02-05", "18:30", "Fire Station 9", "", created_by=1)

        view = month_calendar(conn, 2024, 1, date(2024, 2, 1))
        assert view["leading_blanks"] == 4
        assert view["cells"][4]["tooltip"] == "Board Meeting"

        assert remove_event(conn, event_id) is True
        view = month_calendar(conn, 2024, 1, date(2024, 2, 1))
        assert not any(cell["has_events"] for cell in view["cells"])

    def test_add_event_validation(self, conn):
        with pytest.raises(ValueError):
            add_event(conn, "Board Meeting", "02/05/2024", None, None, None, created_by=1)

    def test_upcoming_events(self, conn):
        add_event(conn, "Past", "2024-01-05", None, None, None, created_by=1)
        add_event(conn, "Soon", "2024-02-05", "18:30", None, None, created_by=1)

        events = upcoming_events(conn, date(2024, 2, 1), can_delete=False)
        assert [e["title"] for e in events] == ["Soon"]
        assert events[0]["location"] == "TBD"
        assert events[0]["time_display"] == "6:30 PM"


class TestForum:
    def test_is_new_thread(self):
        now = datetime(2025, 11, 10, 12, 0, tzinfo=timezone.utc)
        assert is_new_thread((now - timedelta(days=2)).isoformat(), now)
        assert not is_new_thread((now - timedelta(days=4)).isoformat(), now)
        assert not is_new_thread(None, now)

    def test_can_delete_thread(self):
        thread = {"author_id": 1}
        assert can_delete_thread(thread, member_row(id=1))
        assert not can_delete_thread(thread, member_row(id=2))
        assert can_delete_thread(thread, member_row(id=2, role="admin"))
        assert not can_delete_thread(thread, None)

    def test_add_and_load(self, conn):
        author = member_row(id=7, name="Pat")
        add_thread(conn, "Snow report", "Two feet at the gate", author)
        threads = load_threads(conn, author)
        assert threads[0]["author_name"] == "Pat"
        assert threads[0]["reply_count"] == 0
        assert threads[0]["is_new"] is True
        assert threads[0]["can_delete"] is True

    def test_anonymous_author_name(self, conn):
        add_thread(conn, "Lost dog", "", None)
        assert load_threads(conn, None)[0]["author_name"] == "Anonymous"

    def test_empty_title_rejected(self, conn):
        with pytest.raises(ValueError):
            add_thread(conn, "  ", "body", member_row())

    def test_newest_first(self, conn):
        insert_thread(conn, "Older", "", 1, "Pat")
        insert_thread(conn, "Newer", "", 1, "Pat")
        assert [t["title"] for t in load_threads(conn, None)] == ["Newer", "Older"]


class TestGate:
    def test_placeholder_then_update(self, conn):
        assert gate_code_display(conn)["code"] == "----"
        result = update_gate_code(conn, " 2468 ", updated_by=1)
        assert result["code"] == "2468"
        assert result["updated"] == "Updated just now"
        display = gate_code_display(conn)
        assert display["code"] == "2468"
        assert display["updated"].startswith("Updated ")

    def test_rejects_bad_code(self, conn):
        with pytest.raises(ValueError):
            update_gate_code(conn, "24680", updated_by=1)
        assert gate_code_display(conn)["code"] == "----"


class TestReports:
    def test_format_posted_uses_site_timezone(self):
        # 03:00 UTC on Nov 8 is still Nov 7 in Spokane
        assert format_posted("2025-11-08T03:00:00+00:00") == "Nov 7, 2025"
        assert format_posted("2025-11-08T03:00:00+00:00", with_year=False) == "Nov 7"
        assert format_posted(None) is None

    def test_format_updated(self):
        assert format_updated("2025-11-08T02:30:00+00:00") == "Updated 11/7/2025 6:30 PM"

    def test_directory_workbook(self):
        members = [member_row(id=1, name="Zed"), member_row(id=2, name="Amy", phone="")]
        wb = load_workbook(BytesIO(directory_workbook_bytes(members)))
        ws = wb.active
        assert ws.title == "Member Directory"
        assert [c.value for c in ws[1]] == ["Name", "Lot", "Email", "Phone", "Role"]
        assert ws["A2"].value == "Amy"
        assert ws["D2"].value == "—"
        assert ws["A3"].value == "Zed"


class TestEmail:
    def test_format_registration_email(self):
        subject, body = format_registration_email(member_row(phone=""))
        assert "Pat Example" in subject
        assert "Lot:   58221.0137" in body
        assert "Phone: —" in body

    def test_send_skipped_when_not_configured(self, monkeypatch):
        import asyncio

        import services.email as email

        monkeypatch.setattr(email, "ADMIN_EMAIL", "")
        assert asyncio.run(send_registration_email(member_row())) is False

"""Tests for form validation rules."""

import pytest

from core.config import (
    GATE_CODE_MESSAGE,
    LOT_NUMBER_MESSAGE,
    PASSWORD_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    YOUTUBE_URL_MESSAGE,
)
from core.validation import (
    extract_youtube_id,
    is_strong_password,
    is_valid_date_key,
    is_valid_gate_code,
    is_valid_lot_number,
    validate_document,
    validate_event,
    validate_gate_code,
    validate_registration,
    validate_thread,
    validate_video,
)


@pytest.mark.parametrize(
    "lot,valid",
    [
        ("58221.0137", True),
        ("00000.0000", True),
        ("5822.0137", False),
        ("58221.137", False),
        ("58221-0137", False),
        ("58221.01377", False),
        ("", False),
    ],
)
def test_lot_number_format(lot, valid):
    assert is_valid_lot_number(lot) is valid


@pytest.mark.parametrize(
    "password,valid",
    [
        ("mountain123", True),
        ("a1b2c3d4", True),
        ("short1a", False),
        ("allletters", False),
        ("12345678", False),
    ],
)
def test_password_strength(password, valid):
    assert is_strong_password(password) is valid


@pytest.mark.parametrize(
    "code,valid",
    [("1234", True), ("0000", True), ("123", False), ("12345", False), ("12a4", False), ("", False)],
)
def test_gate_code_format(code, valid):
    assert is_valid_gate_code(code) is valid


@pytest.mark.parametrize(
    "value,valid",
    [
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-2-5", False),
        ("20240205", False),
        (None, False),
    ],
)
def test_date_key_format(value, valid):
    assert is_valid_date_key(value) is valid


@pytest.mark.parametrize(
    "url,video_id",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtube.com/embed/dQw4w9WgXcQ?start=10", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://vimeo.com/123456", None),
        ("https://youtu.be/short", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_youtube_id(url, video_id):
    assert extract_youtube_id(url) == video_id


class TestValidateRegistration:
    def test_valid(self):
        assert validate_registration("Pat", "pat@example.com", "58221.0137", "mountain123", "mountain123") == []

    def test_reports_each_problem(self):
        errors = validate_registration("Pat", "pat@example.com", "123", "short", "other")
        assert errors == [LOT_NUMBER_MESSAGE, PASSWORD_MESSAGE, PASSWORD_MISMATCH_MESSAGE]

    def test_missing_name_and_bad_email(self):
        errors = validate_registration(" ", "not-an-email", "58221.0137", "mountain123", "mountain123")
        assert errors == ["Name is required.", "A valid email address is required."]


class TestValidateEvent:
    def test_valid_with_and_without_time(self):
        assert validate_event("Board Meeting", "2024-02-05", "18:30") == []
        assert validate_event("Board Meeting", "2024-02-05", None) == []

    def test_invalid(self):
        errors = validate_event("", "2024-13-01", "25:00")
        assert len(errors) == 3
        assert errors[0] == "Event title is required."


def test_validate_document():
    assert validate_document("Bylaws", "bylaws", "https://example.com/bylaws.pdf") == []
    assert validate_document("Bylaws", "memes", "") == [
        "Invalid document category 'memes'",
        "Document URL is required.",
    ]


def test_validate_video():
    assert validate_video("Plowing 101", "tutorial", "https://youtu.be/dQw4w9WgXcQ") == []
    assert validate_video("Plowing 101", "tutorial", "https://vimeo.com/1") == [YOUTUBE_URL_MESSAGE]


def test_validate_thread():
    assert validate_thread("Snow report") == []
    assert validate_thread("   ") == ["Thread title is required."]


def test_validate_gate_code():
    assert validate_gate_code("4321") == []
    assert validate_gate_code("43210") == [GATE_CODE_MESSAGE]

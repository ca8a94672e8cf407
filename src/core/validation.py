"""
Form validation for registrations, posts, events and the gate code.

Validators return a list of error messages; an empty list means the input
is valid. Callers raise ValueError with the messages joined by newlines.
"""

import re
from datetime import date

from core.config import (
    DATE_PATTERN,
    DOCUMENT_CATEGORIES,
    EMAIL_PATTERN,
    GATE_CODE_MESSAGE,
    GATE_CODE_PATTERN,
    LOT_NUMBER_MESSAGE,
    LOT_NUMBER_PATTERN,
    PASSWORD_MESSAGE,
    PASSWORD_MIN_LENGTH,
    PASSWORD_MISMATCH_MESSAGE,
    TIME_PATTERN,
    VIDEO_CATEGORIES,
    YOUTUBE_ID_PATTERN,
    YOUTUBE_URL_MESSAGE,
)


def is_valid_lot_number(lot: str) -> bool:
    """Check lot number format (5 digits . 4 digits)."""
    return re.match(LOT_NUMBER_PATTERN, lot or "") is not None


def is_strong_password(password: str) -> bool:
    """Check password has 8+ characters with both letters and digits."""
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and re.search(r"[a-zA-Z]", password) is not None
        and re.search(r"[0-9]", password) is not None
    )


def is_valid_date_key(value: str | None) -> bool:
    """Check for a real calendar day written as YYYY-MM-DD."""
    if not value or re.match(DATE_PATTERN, value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_gate_code(code: str) -> bool:
    """Check gate code is exactly four digits."""
    return re.match(GATE_CODE_PATTERN, code or "") is not None


def extract_youtube_id(url: str | None) -> str | None:
    """Pull the 11-character video id out of a YouTube URL."""
    if not url:
        return None
    match = re.search(YOUTUBE_ID_PATTERN, url)
    return match.group(1) if match else None


def validate_registration(
    name: str, email: str, lot: str, password: str, password_confirm: str
) -> list[str]:
    """
    Validate a registration form.

    Messages come back in form order, one per failing field.
    """
    errors = []
    if not name.strip():
        errors.append("Name is required.")
    if not re.match(EMAIL_PATTERN, email.strip()):
        errors.append("A valid email address is required.")
    if not is_valid_lot_number(lot):
        errors.append(LOT_NUMBER_MESSAGE)
    if not is_strong_password(password):
        errors.append(PASSWORD_MESSAGE)
    if password != password_confirm:
        errors.append(PASSWORD_MISMATCH_MESSAGE)
    return errors


def validate_event(title: str, event_date: str, time: str | None) -> list[str]:
    """Validate an event form (title, YYYY-MM-DD date, optional HH:MM time)."""
    errors = []
    if not title.strip():
        errors.append("Event title is required.")
    if not is_valid_date_key(event_date):
        errors.append(f"Invalid event date '{event_date}', expected YYYY-MM-DD.")
    if time and not re.match(TIME_PATTERN, time):
        errors.append(f"Invalid event time '{time}', expected HH:MM (24-hour).")
    return errors


def validate_document(title: str, category: str, url: str) -> list[str]:
    """Validate a document form."""
    errors = []
    if not title.strip():
        errors.append("Document title is required.")
    if category not in DOCUMENT_CATEGORIES:
        errors.append(f"Invalid document category '{category}'")
    if not url.strip():
        errors.append("Document URL is required.")
    return errors


def validate_video(title: str, category: str, url: str) -> list[str]:
    """Validate a video form. The URL must point at a YouTube video."""
    errors = []
    if not title.strip():
        errors.append("Video title is required.")
    if category not in VIDEO_CATEGORIES:
        errors.append(f"Invalid video category '{category}'")
    if not extract_youtube_id(url):
        errors.append(YOUTUBE_URL_MESSAGE)
    return errors


def validate_thread(title: str) -> list[str]:
    """Validate a new forum thread."""
    if not title.strip():
        return ["Thread title is required."]
    return []


def validate_gate_code(code: str) -> list[str]:
    """Validate a new gate code."""
    if not is_valid_gate_code(code):
        return [GATE_CODE_MESSAGE]
    return []

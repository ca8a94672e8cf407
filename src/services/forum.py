"""
Forum threads.
"""

import sqlite3
from datetime import datetime, timedelta, timezone

from core.config import ANONYMOUS_AUTHOR, NEW_THREAD_DAYS, ROLE_ADMIN
from core.database import insert_thread, list_threads
from core.validation import validate_thread
from models.records import Member, Thread
from services.reports import format_posted


def is_new_thread(created_at: str | None, now: datetime | None = None) -> bool:
    """Check if a thread was posted within the last few days."""
    if not created_at:
        return False
    now = now or datetime.now(timezone.utc)
    return datetime.fromisoformat(created_at) > now - timedelta(days=NEW_THREAD_DAYS)


def can_delete_thread(thread: Thread, member: Member | None) -> bool:
    """Admins may delete any thread; members may delete their own."""
    if member is None:
        return False
    return member["role"] == ROLE_ADMIN or thread["author_id"] == member["id"]


def thread_item(thread: Thread, member: Member | None, now: datetime | None = None) -> dict:
    """Shape a thread for the forum list."""
    return {
        "id": thread["id"],
        "title": thread["title"],
        "body": thread["body"] or None,
        "author_name": thread["author_name"] or "Unknown",
        "reply_count": thread["reply_count"] or 0,
        "posted": format_posted(thread["created_at"], with_year=False) or "Unknown",
        "is_new": is_new_thread(thread["created_at"], now),
        "can_delete": can_delete_thread(thread, member),
    }


def add_thread(conn: sqlite3.Connection, title: str, body: str, author: Member | None) -> int:
    """
    Post a new thread.

    Raises:
        ValueError: if the title is empty
    """
    title, body = title.strip(), (body or "").strip()
    errors = validate_thread(title)
    if errors:
        raise ValueError("\n".join(errors))

    author_id = author["id"] if author else None
    author_name = (author["name"] or author["email"]) if author else ANONYMOUS_AUTHOR
    return insert_thread(conn, title, body, author_id, author_name)


def load_threads(conn: sqlite3.Connection, member: Member | None) -> list[dict]:
    now = datetime.now(timezone.utc)
    return [thread_item(t, member, now) for t in list_threads(conn)]

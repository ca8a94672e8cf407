"""
Event posting and the two event reads: upcoming list and month calendar.

The upcoming list and the month calendar are independent queries; nothing
ties the result of one to the other.
"""

import sqlite3
from dataclasses import asdict
from datetime import date

from core.config import UPCOMING_EVENTS_LIMIT
from core.database import (
    delete_event,
    fetch_events_for_month,
    fetch_upcoming_events,
    insert_event,
)
from core.validation import validate_event
from services.calendar import event_summary, refresh_calendar


def add_event(
    conn: sqlite3.Connection,
    title: str,
    event_date: str,
    time: str | None,
    location: str | None,
    description: str | None,
    created_by: int | None,
) -> int:
    """
    Validate and store an event.

    Raises:
        ValueError: if the form is invalid
    """
    title = title.strip()
    time = (time or "").strip() or None
    errors = validate_event(title, event_date, time)
    if errors:
        raise ValueError("\n".join(errors))
    return insert_event(
        conn,
        title=title,
        event_date=event_date,
        time=time,
        location=(location or "").strip() or None,
        description=(description or "").strip() or None,
        created_by=created_by,
    )


def remove_event(conn: sqlite3.Connection, event_id: int) -> bool:
    """Delete an event. The next month_calendar call drops its annotation."""
    return delete_event(conn, event_id)


def upcoming_events(
    conn: sqlite3.Connection,
    today: date,
    can_delete: bool,
    limit: int = UPCOMING_EVENTS_LIMIT,
) -> list[dict]:
    """Next events from today onwards, soonest first."""
    events = fetch_upcoming_events(conn, today.isoformat(), limit)
    return [event_summary(event, today, can_delete) for event in events]


def month_calendar(conn: sqlite3.Connection, year: int, month: int, today: date) -> dict:
    """Recompute the calendar for a month (zero-based) from the event store."""
    view = refresh_calendar(
        year, month, today, lambda y, m: fetch_events_for_month(conn, y, m)
    )
    return asdict(view)

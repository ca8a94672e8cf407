"""Event list, calendar and event management endpoints."""

import sqlite3
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import (
    current_user_role,
    get_db,
    not_found,
    require_admin,
    validation_error,
)
from api.models.requests import EventRequest
from core.config import ROLE_ADMIN
from core.database import get_event
from models.records import Member
from services.calendar import today_local
from services.events import add_event, month_calendar, remove_event, upcoming_events

router = APIRouter(prefix="/v1")


def _event_month(event_date: str) -> tuple[int, int]:
    """(year, zero-based month) of a YYYY-MM-DD date."""
    d = date.fromisoformat(event_date)
    return d.year, d.month - 1


@router.get("/events/upcoming")
def upcoming_events_endpoint(
    role: str = Depends(current_user_role),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Next events from today, soonest first. Delete controls for admins only."""
    events = upcoming_events(conn, today_local(), can_delete=role == ROLE_ADMIN)
    return {"events": events}


@router.get("/calendar")
def calendar_endpoint(
    year: int | None = Query(None, description="Year; defaults to the current year"),
    month: int | None = Query(None, ge=1, le=12, description="Month 1-12; defaults to the current month"),
    conn: sqlite3.Connection = Depends(get_db),
):
    """
    Month calendar with per-day event annotations.

    The returned view's 'month' is zero-based (January = 0).
    """
    today = today_local()
    view_year = year if year is not None else today.year
    view_month = (month - 1) if month is not None else today.month - 1
    return month_calendar(conn, view_year, view_month, today)


@router.post("/events", status_code=status.HTTP_201_CREATED)
def add_event_endpoint(
    body: EventRequest,
    admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Add an event and return the recomputed calendar for its month."""
    try:
        event_id = add_event(
            conn,
            title=body.title,
            event_date=body.date,
            time=body.time,
            location=body.location,
            description=body.description,
            created_by=admin["id"],
        )
    except ValueError as e:
        raise validation_error(e, "Failed to add event")

    year, month = _event_month(body.date)
    return {"id": event_id, "calendar": month_calendar(conn, year, month, today_local())}


@router.delete("/events/{event_id}")
def delete_event_endpoint(
    event_id: int,
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Delete an event and return the recomputed calendar for its month."""
    event = get_event(conn, event_id)
    if event is None or not remove_event(conn, event_id):
        raise not_found("Event")

    year, month = _event_month(event["date"])
    return {"deleted": True, "calendar": month_calendar(conn, year, month, today_local())}

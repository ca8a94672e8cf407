"""
Data models for community records and the calendar view.

Stored records use TypedDict for type hints on row dictionaries.
Derived calendar structures are dataclasses since they are never persisted.
"""

from dataclasses import dataclass, field
from typing import TypedDict


class Member(TypedDict):
    """Registered site member (password hash excluded)."""
    id: int
    email: str
    name: str
    lot: str
    phone: str
    role: str
    status: str
    created_at: str


class AuthProfile(TypedDict):
    """Signed-in member as seen by the API."""
    uid: int
    email: str
    name: str
    role: str
    lot: str
    phone: str


class Document(TypedDict):
    """Posted document (bylaws, minutes, ...)."""
    id: int
    title: str
    category: str
    description: str
    url: str
    created_at: str
    created_by: int | None


class Video(TypedDict):
    """Posted YouTube video."""
    id: int
    title: str
    category: str
    description: str
    url: str
    created_at: str
    created_by: int | None


class Event(TypedDict):
    """Dated community happening."""
    id: int
    title: str
    date: str  # YYYY-MM-DD
    time: str | None  # HH:MM, 24-hour
    location: str | None
    description: str | None
    created_at: str
    created_by: int | None


class Thread(TypedDict):
    """Forum discussion thread."""
    id: int
    title: str
    body: str
    author_id: int | None
    author_name: str
    reply_count: int
    created_at: str


class GateCode(TypedDict):
    """Current gate code setting."""
    code: str
    updated_at: str | None
    updated_by: int | None


# Date key (YYYY-MM-DD) -> event titles on that day, in input order
EventsByDate = dict[str, list[str]]


@dataclass(frozen=True)
class MonthGrid:
    """Calendar layout of a month. Month is zero-based."""

    year: int
    month: int
    first_weekday: int  # 0 = Sunday
    days_in_month: int


@dataclass(frozen=True)
class DayCell:
    """One numbered day in a rendered month."""

    day: int
    date_key: str
    is_today: bool
    has_events: bool
    tooltip: str | None = None


@dataclass(frozen=True)
class MonthView:
    """Rendered month: leading blanks followed by day cells."""

    year: int
    month: int
    month_name: str
    weekday_header: list[str]
    leading_blanks: int
    cells: list[DayCell] = field(default_factory=list)

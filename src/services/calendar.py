"""
Month grid construction and date-keyed event aggregation for the calendar.

Everything here is a pure function of its inputs. The calendar is rebuilt
from the latest fetched events on every change (event added, event deleted,
month navigation) via refresh_calendar; nothing is cached between calls.
"""

import calendar
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from zoneinfo import ZoneInfo

from core.config import (
    EVENT_LOCATION_DEFAULT,
    MONTH_NAMES,
    SITE_TIMEZONE,
    TOOLTIP_SEPARATOR,
    WEEKDAY_ABBREVIATIONS,
)
from models.records import DayCell, Event, EventsByDate, MonthGrid, MonthView

EventFetcher = Callable[[int, int], Sequence[Event]]


# =============================================================================
# DATE UTILITIES
# =============================================================================


def today_local() -> date:
    """Today's date on the site's local calendar."""
    return datetime.now(ZoneInfo(SITE_TIMEZONE)).date()


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Roll a zero-based month outside 0..11 into the adjacent year(s)."""
    return year + month // 12, month % 12


def date_key(year: int, month: int, day: int) -> str:
    """Format a date key as YYYY-MM-DD (month is zero-based)."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def month_date_range(year: int, month: int) -> tuple[str, str]:
    """First and last date keys of a month (month is zero-based)."""
    year, month = normalize_month(year, month)
    days_in_month = calendar.monthrange(year, month + 1)[1]
    return date_key(year, month, 1), date_key(year, month, days_in_month)


def format_time_12(time24: str | None) -> str:
    """
    Format a 24-hour 'HH:MM' string for display.

    Example: '18:30' -> '6:30 PM', '00:05' -> '12:05 AM'
    """
    if not time24:
        return ""
    hours, minutes = time24.split(":")[:2]
    h = int(hours)
    suffix = "PM" if h >= 12 else "AM"
    return f"{h % 12 or 12}:{minutes} {suffix}"


def is_upcoming(event_date: str, today: date) -> bool:
    """Check if an event falls on or after today."""
    return date.fromisoformat(event_date) >= today


# =============================================================================
# CALENDAR AGGREGATION
# =============================================================================


def build_month_grid(year: int, month: int) -> MonthGrid:
    """
    Compute the layout of a month with Sunday-start weeks.

    Any (year, month) pair is accepted; months outside 0..11 roll over.
    """
    year, month = normalize_month(year, month)
    weekday, days_in_month = calendar.monthrange(year, month + 1)
    # calendar.monthrange counts Monday as 0
    first_weekday = (weekday + 1) % 7
    return MonthGrid(
        year=year,
        month=month,
        first_weekday=first_weekday,
        days_in_month=days_in_month,
    )


def index_events_by_date(events: Iterable[Event]) -> EventsByDate:
    """
    Group event titles by date key.

    Order within a day follows the input order; callers pass events already
    sorted by date/time. Events without a date are left out, so every key
    maps to at least one title.
    """
    events_by_date: EventsByDate = {}
    for event in events:
        event_date = event.get("date")
        if not event_date:
            continue
        events_by_date.setdefault(event_date, []).append(event["title"])
    return events_by_date


def render_month(grid: MonthGrid, events_by_date: EventsByDate, today: date) -> MonthView:
    """Lay out blank leading cells and one annotated cell per day."""
    cells = []
    for day in range(1, grid.days_in_month + 1):
        key = date_key(grid.year, grid.month, day)
        titles = events_by_date.get(key, [])
        cells.append(
            DayCell(
                day=day,
                date_key=key,
                is_today=(
                    today.year == grid.year
                    and today.month == grid.month + 1
                    and today.day == day
                ),
                has_events=bool(titles),
                tooltip=TOOLTIP_SEPARATOR.join(titles) if titles else None,
            )
        )

    return MonthView(
        year=grid.year,
        month=grid.month,
        month_name=MONTH_NAMES[grid.month],
        weekday_header=list(WEEKDAY_ABBREVIATIONS),
        leading_blanks=grid.first_weekday,
        cells=cells,
    )


def refresh_calendar(
    year: int, month: int, today: date, fetch_events: EventFetcher
) -> MonthView:
    """
    Rebuild the month view from the event store.

    Call this whenever the displayed month's events change. A failed fetch
    renders the month with no annotations.
    """
    grid = build_month_grid(year, month)
    try:
        events = fetch_events(grid.year, grid.month)
    except Exception as e:
        print(f"  Error fetching events for {date_key(grid.year, grid.month, 1)[:7]}: {e}")
        events = []
    return render_month(grid, index_events_by_date(events), today)


# =============================================================================
# EVENT LIST PAYLOADS
# =============================================================================


def event_summary(event: Event, today: date, can_delete: bool) -> dict:
    """Shape an event for the upcoming-events list."""
    event_date = date.fromisoformat(event["date"])
    return {
        "id": event["id"],
        "title": event["title"],
        "date": event["date"],
        "day": event_date.day,
        "time": event["time"],
        "time_display": format_time_12(event["time"]),
        "location": event["location"] or EVENT_LOCATION_DEFAULT,
        "description": event["description"] or None,
        "is_upcoming": is_upcoming(event["date"], today),
        "can_delete": can_delete,
    }

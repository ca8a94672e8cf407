"""
Date display formatting and the Excel member directory export.
"""

from datetime import date, datetime
from io import BytesIO
from pathlib import Path
from zoneinfo import ZoneInfo

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import DIRECTORY_HEADERS, SITE_NAME, SITE_TIMEZONE
from models.records import Member
from services.directory import search_directory


def to_local(timestamp: str) -> datetime:
    """Convert a stored ISO 8601 UTC timestamp to the site's time zone."""
    return datetime.fromisoformat(timestamp).astimezone(ZoneInfo(SITE_TIMEZONE))


def format_date_display(d: date) -> str:
    """Format date as 'Mon D, YYYY' (platform-safe, e.g., 'Nov 7, 2025')."""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_date_short(d: date) -> str:
    """Format date as 'Mon D' (platform-safe, e.g., 'Nov 7')."""
    return f"{d.strftime('%b')} {d.day}"


def format_posted(created_at: str | None, with_year: bool = True) -> str | None:
    """Local posting date of a record, or None if unknown."""
    if not created_at:
        return None
    local = to_local(created_at).date()
    return format_date_display(local) if with_year else format_date_short(local)


def format_updated(updated_at: str | None) -> str | None:
    """e.g. 'Updated 11/7/2025 6:30 PM'."""
    if not updated_at:
        return None
    local = to_local(updated_at)
    hour = local.hour % 12 or 12
    suffix = "PM" if local.hour >= 12 else "AM"
    return f"Updated {local.month}/{local.day}/{local.year} {hour}:{local.minute:02d} {suffix}"


# =============================================================================
# EXCEL DIRECTORY EXPORT
# =============================================================================


def write_directory_sheet(ws, members: list[Member]):
    """
    Write the approved member directory to a worksheet.

    Row 1 is a bold header (Name, Lot, Email, Phone, Role); members follow
    sorted by name.
    """
    for col_idx, header in enumerate(DIRECTORY_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    rows = search_directory(members)
    for row_idx, row in enumerate(rows, start=2):
        row_data = [row["name"], row["lot"], row["email"], row["phone"], row["badge"]]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    # Widen columns to fit the longest value
    for col_idx, header in enumerate(DIRECTORY_HEADERS, start=1):
        longest = max(
            [len(header)] + [len(str(ws.cell(row=r, column=col_idx).value or "")) for r in range(2, len(rows) + 2)]
        )
        ws.column_dimensions[get_column_letter(col_idx)].width = longest + 2

    ws.freeze_panes = "A2"


def create_directory_workbook(members: list[Member]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Member Directory"
    write_directory_sheet(ws, members)
    wb.properties.title = f"{SITE_NAME} Member Directory"
    return wb


def directory_workbook_bytes(members: list[Member]) -> bytes:
    """Render the directory workbook to .xlsx bytes for download."""
    buffer = BytesIO()
    create_directory_workbook(members).save(buffer)
    return buffer.getvalue()


def save_directory_workbook(members: list[Member], output_path: Path):
    output_path.parent.mkdir(parents=True, exist_ok=True)
    create_directory_workbook(members).save(str(output_path))
    print(f"Saved member directory to: {output_path}")

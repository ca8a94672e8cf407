"""
Member directory listing and search.
"""

from core.config import MISSING_FIELD_DISPLAY, ROLE_ADMIN, ROLE_MEMBER
from models.records import Member


def directory_row(member: Member) -> dict:
    """Shape a member for the directory table."""
    role = member["role"] or ROLE_MEMBER
    return {
        "id": member["id"],
        "name": member["name"] or "Unknown",
        "lot": member["lot"] or MISSING_FIELD_DISPLAY,
        "email": member["email"] or MISSING_FIELD_DISPLAY,
        "phone": member["phone"] or MISSING_FIELD_DISPLAY,
        "role": role,
        "badge": role.capitalize(),
        "is_admin": role == ROLE_ADMIN,
    }


def sort_by_name(members: list[Member]) -> list[Member]:
    """Sort members case-insensitively by name (missing names first)."""
    return sorted(members, key=lambda m: (m["name"] or "").lower())


def matches_query(row: dict, query: str) -> bool:
    """Case-insensitive substring match against any displayed field."""
    if not query:
        return True
    text = " ".join(str(row[key]) for key in ("name", "lot", "email", "phone", "badge"))
    return query.lower() in text.lower()


def search_directory(members: list[Member], query: str = "") -> list[dict]:
    """Directory rows sorted by name and filtered by the search box text."""
    rows = [directory_row(m) for m in sort_by_name(members)]
    return [row for row in rows if matches_query(row, query.strip())]


def directory_count_text(count: int) -> str:
    """e.g. 'Showing 1 member.' / 'Showing 12 members.'"""
    return f"Showing {count} member{'s' if count != 1 else ''}."

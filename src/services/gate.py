"""
Shared gate code.
"""

import sqlite3

from core.config import GATE_CODE_PLACEHOLDER
from core.database import get_gate_code, set_gate_code
from core.validation import validate_gate_code
from services.reports import format_updated


def gate_code_display(conn: sqlite3.Connection) -> dict:
    """Current gate code, or the placeholder when none has been set."""
    record = get_gate_code(conn)
    if record is None:
        return {"code": GATE_CODE_PLACEHOLDER, "updated": None, "updated_at": None}
    return {
        "code": record["code"] or GATE_CODE_PLACEHOLDER,
        "updated": format_updated(record["updated_at"]),
        "updated_at": record["updated_at"],
    }


def update_gate_code(conn: sqlite3.Connection, code: str, updated_by: int | None) -> dict:
    """
    Replace the gate code.

    Raises:
        ValueError: if the code is not exactly four digits
    """
    code = (code or "").strip()
    errors = validate_gate_code(code)
    if errors:
        raise ValueError("\n".join(errors))
    record = set_gate_code(conn, code, updated_by)
    return {
        "code": record["code"],
        "updated": "Updated just now",
        "updated_at": record["updated_at"],
    }

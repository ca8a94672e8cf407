"""
SQLite database operations for the community site.
"""

import sqlite3
from datetime import datetime, timezone

from core import config
from models.records import Document, Event, GateCode, Member, Thread, Video
from services.calendar import month_date_range

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS members (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT UNIQUE NOT NULL COLLATE NOCASE,
        name TEXT NOT NULL,
        lot TEXT NOT NULL,
        phone TEXT NOT NULL DEFAULT '',
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL DEFAULT 'member' CHECK(role IN ('admin', 'member')),
        status TEXT NOT NULL DEFAULT 'pending' CHECK(status IN ('pending', 'approved')),
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sessions (
        token TEXT PRIMARY KEY,
        member_id INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        expires_at TEXT NOT NULL,
        FOREIGN KEY (member_id) REFERENCES members(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS documents (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        category TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        url TEXT NOT NULL,
        created_at TEXT NOT NULL,
        created_by INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS videos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        category TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        url TEXT NOT NULL,
        created_at TEXT NOT NULL,
        created_by INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        date TEXT NOT NULL,
        time TEXT,
        location TEXT,
        description TEXT,
        created_at TEXT NOT NULL,
        created_by INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS threads (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        body TEXT NOT NULL DEFAULT '',
        author_id INTEGER,
        author_name TEXT NOT NULL,
        reply_count INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        updated_by INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS api_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT UNIQUE NOT NULL,
        timestamp TEXT NOT NULL,
        endpoint TEXT NOT NULL,
        method TEXT NOT NULL,
        client_ip TEXT,
        member_id INTEGER,
        status_code INTEGER NOT NULL,
        error_code TEXT,
        error_message TEXT,
        processing_time_ms INTEGER NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_events_date ON events(date)",
    "CREATE INDEX IF NOT EXISTS idx_sessions_member ON sessions(member_id)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)",
]

MEMBER_COLUMNS = "id, email, name, lot, phone, role, status, created_at"


def utc_now() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def get_connection() -> sqlite3.Connection:
    """Get a database connection with dict-style rows."""
    conn = sqlite3.connect(config.DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(conn: sqlite3.Connection):
    """Create all tables and indexes if they don't exist."""
    cursor = conn.cursor()
    for statement in SCHEMA:
        cursor.execute(statement)
    conn.commit()


def _delete_by_id(conn: sqlite3.Connection, table: str, row_id: int) -> bool:
    """Delete one row by id. Returns False if it didn't exist."""
    cursor = conn.cursor()
    cursor.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
    conn.commit()
    return cursor.rowcount > 0


# =============================================================================
# MEMBERS & SESSIONS
# =============================================================================


def insert_member(
    conn: sqlite3.Connection,
    email: str,
    name: str,
    lot: str,
    phone: str,
    password_hash: str,
    role: str = config.ROLE_MEMBER,
    status: str = config.STATUS_PENDING,
) -> int:
    """
    Create member record and return member id.

    Raises:
        sqlite3.IntegrityError: if the email is already registered
    """
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO members (email, name, lot, phone, password_hash, role, status, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (email, name, lot, phone, password_hash, role, status, utc_now()),
    )
    conn.commit()
    return cursor.lastrowid


def get_member(conn: sqlite3.Connection, member_id: int) -> Member | None:
    row = conn.execute(
        f"SELECT {MEMBER_COLUMNS} FROM members WHERE id = ?", (member_id,)
    ).fetchone()
    return dict(row) if row else None


def get_member_credentials(conn: sqlite3.Connection, email: str) -> tuple[Member, str] | None:
    """Look up a member by email (case-insensitive) with their password hash."""
    row = conn.execute(
        f"SELECT {MEMBER_COLUMNS}, password_hash FROM members WHERE email = ?",
        (email.strip(),),
    ).fetchone()
    if not row:
        return None
    member = dict(row)
    password_hash = member.pop("password_hash")
    return member, password_hash


def list_members(conn: sqlite3.Connection, status: str | None = None) -> list[Member]:
    """List members, optionally filtered by status, in registration order."""
    if status:
        rows = conn.execute(
            f"SELECT {MEMBER_COLUMNS} FROM members WHERE status = ? ORDER BY id", (status,)
        ).fetchall()
    else:
        rows = conn.execute(f"SELECT {MEMBER_COLUMNS} FROM members ORDER BY id").fetchall()
    return [dict(row) for row in rows]


def update_member(conn: sqlite3.Connection, member_id: int, **fields) -> bool:
    """Update status/role/password_hash of a member. Returns False if not found."""
    allowed = {"status", "role", "password_hash"}
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Cannot update member fields: {', '.join(sorted(unknown))}")
    if not fields:
        return get_member(conn, member_id) is not None

    assignments = ", ".join(f"{name} = ?" for name in fields)
    cursor = conn.cursor()
    cursor.execute(
        f"UPDATE members SET {assignments} WHERE id = ?",
        (*fields.values(), member_id),
    )
    conn.commit()
    return cursor.rowcount > 0


def create_session(
    conn: sqlite3.Connection, token: str, member_id: int, expires_at: str
):
    conn.execute(
        "INSERT INTO sessions (token, member_id, created_at, expires_at) VALUES (?, ?, ?, ?)",
        (token, member_id, utc_now(), expires_at),
    )
    conn.commit()


def get_session_member(conn: sqlite3.Connection, token: str, now: str) -> Member | None:
    """Resolve an unexpired session token to its member."""
    row = conn.execute(
        """
        SELECT m.id, m.email, m.name, m.lot, m.phone, m.role, m.status, m.created_at
        FROM sessions s JOIN members m ON m.id = s.member_id
        WHERE s.token = ? AND s.expires_at > ?
        """,
        (token, now),
    ).fetchone()
    return dict(row) if row else None


def delete_session(conn: sqlite3.Connection, token: str):
    conn.execute("DELETE FROM sessions WHERE token = ?", (token,))
    conn.commit()


# =============================================================================
# DOCUMENTS & VIDEOS
# =============================================================================


def insert_document(
    conn: sqlite3.Connection,
    title: str,
    category: str,
    description: str,
    url: str,
    created_by: int | None,
) -> int:
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO documents (title, category, description, url, created_at, created_by)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (title, category, description, url, utc_now(), created_by),
    )
    conn.commit()
    return cursor.lastrowid


def list_documents(conn: sqlite3.Connection) -> list[Document]:
    """All documents, newest first."""
    rows = conn.execute(
        "SELECT * FROM documents ORDER BY created_at DESC, id DESC"
    ).fetchall()
    return [dict(row) for row in rows]


def delete_document(conn: sqlite3.Connection, document_id: int) -> bool:
    return _delete_by_id(conn, "documents", document_id)


def insert_video(
    conn: sqlite3.Connection,
    title: str,
    category: str,
    description: str,
    url: str,
    created_by: int | None,
) -> int:
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO videos (title, category, description, url, created_at, created_by)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (title, category, description, url, utc_now(), created_by),
    )
    conn.commit()
    return cursor.lastrowid


def list_videos(conn: sqlite3.Connection) -> list[Video]:
    """All videos, newest first."""
    rows = conn.execute("SELECT * FROM videos ORDER BY created_at DESC, id DESC").fetchall()
    return [dict(row) for row in rows]


def delete_video(conn: sqlite3.Connection, video_id: int) -> bool:
    return _delete_by_id(conn, "videos", video_id)


# =============================================================================
# EVENTS
# =============================================================================

EVENT_ORDER = "ORDER BY date ASC, COALESCE(time, '') ASC, created_at ASC, id ASC"


def insert_event(
    conn: sqlite3.Connection,
    title: str,
    event_date: str,
    time: str | None,
    location: str | None,
    description: str | None,
    created_by: int | None,
) -> int:
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO events (title, date, time, location, description, created_at, created_by)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (title, event_date, time, location, description, utc_now(), created_by),
    )
    conn.commit()
    return cursor.lastrowid


def get_event(conn: sqlite3.Connection, event_id: int) -> Event | None:
    row = conn.execute("SELECT * FROM events WHERE id = ?", (event_id,)).fetchone()
    return dict(row) if row else None


def delete_event(conn: sqlite3.Connection, event_id: int) -> bool:
    return _delete_by_id(conn, "events", event_id)


def fetch_upcoming_events(
    conn: sqlite3.Connection, from_date: str, limit: int = config.UPCOMING_EVENTS_LIMIT
) -> list[Event]:
    """Next events on or after from_date (YYYY-MM-DD), soonest first."""
    rows = conn.execute(
        f"SELECT * FROM events WHERE date >= ? {EVENT_ORDER} LIMIT ?",
        (from_date, limit),
    ).fetchall()
    return [dict(row) for row in rows]


def fetch_events_between(conn: sqlite3.Connection, first_day: str, last_day: str) -> list[Event]:
    """Events with first_day <= date <= last_day, in calendar order."""
    rows = conn.execute(
        f"SELECT * FROM events WHERE date >= ? AND date <= ? {EVENT_ORDER}",
        (first_day, last_day),
    ).fetchall()
    return [dict(row) for row in rows]


def fetch_events_for_month(conn: sqlite3.Connection, year: int, month: int) -> list[Event]:
    """
    All events in a month (month is zero-based).

    A failed read is reported and returns an empty list so the calendar
    still renders.
    """
    first_day, last_day = month_date_range(year, month)
    try:
        return fetch_events_between(conn, first_day, last_day)
    except sqlite3.Error as e:
        print(f"  Error fetching events for {first_day[:7]}: {e}")
        return []


# =============================================================================
# FORUM
# =============================================================================


def insert_thread(
    conn: sqlite3.Connection,
    title: str,
    body: str,
    author_id: int | None,
    author_name: str,
) -> int:
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO threads (title, body, author_id, author_name, reply_count, created_at)
        VALUES (?, ?, ?, ?, 0, ?)
        """,
        (title, body, author_id, author_name, utc_now()),
    )
    conn.commit()
    return cursor.lastrowid


def get_thread(conn: sqlite3.Connection, thread_id: int) -> Thread | None:
    row = conn.execute("SELECT * FROM threads WHERE id = ?", (thread_id,)).fetchone()
    return dict(row) if row else None


def list_threads(conn: sqlite3.Connection, limit: int = config.THREAD_LIST_LIMIT) -> list[Thread]:
    """Latest threads, newest first."""
    rows = conn.execute(
        "SELECT * FROM threads ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
    ).fetchall()
    return [dict(row) for row in rows]


def delete_thread(conn: sqlite3.Connection, thread_id: int) -> bool:
    return _delete_by_id(conn, "threads", thread_id)


# =============================================================================
# SETTINGS
# =============================================================================


def get_gate_code(conn: sqlite3.Connection) -> GateCode | None:
    row = conn.execute(
        "SELECT value, updated_at, updated_by FROM settings WHERE key = ?",
        (config.GATE_CODE_SETTING,),
    ).fetchone()
    if not row:
        return None
    return {"code": row["value"], "updated_at": row["updated_at"], "updated_by": row["updated_by"]}


def set_gate_code(conn: sqlite3.Connection, code: str, updated_by: int | None) -> GateCode:
    """Replace the gate code and return the stored record."""
    updated_at = utc_now()
    conn.execute(
        """
        INSERT INTO settings (key, value, updated_at, updated_by) VALUES (?, ?, ?, ?)
        ON CONFLICT(key) DO UPDATE SET
            value = excluded.value,
            updated_at = excluded.updated_at,
            updated_by = excluded.updated_by
        """,
        (config.GATE_CODE_SETTING, code, updated_at, updated_by),
    )
    conn.commit()
    return {"code": code, "updated_at": updated_at, "updated_by": updated_by}

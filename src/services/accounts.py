"""
Member registration, sign-in and role management.
"""

import sqlite3
from datetime import datetime, timezone

from core.auth import hash_password, new_session_token, session_expiry, verify_password
from core.config import (
    MEMBER_ROLES,
    ROLE_ADMIN,
    ROLE_ANONYMOUS,
    ROLE_MEMBER,
    STATUS_APPROVED,
)
from core.database import (
    create_session,
    delete_session,
    get_member,
    get_member_credentials,
    get_session_member,
    insert_member,
    update_member,
)
from core.validation import validate_registration
from models.records import AuthProfile, Member


class EmailAlreadyRegisteredError(ValueError):
    """Registration attempted with an email that already has an account."""


def build_auth_profile(member: Member) -> AuthProfile:
    """Profile of a signed-in member, with the site's display defaults."""
    return {
        "uid": member["id"],
        "email": member["email"],
        "name": member["name"] or member["email"],
        "role": member["role"] or ROLE_MEMBER,
        "lot": member["lot"] or "",
        "phone": member["phone"] or "",
    }


def role_of(member: Member | None) -> str:
    """Role used for permission checks: admin, member or anonymous."""
    if member is None:
        return ROLE_ANONYMOUS
    return ROLE_ADMIN if member["role"] == ROLE_ADMIN else ROLE_MEMBER


def register_member(
    conn: sqlite3.Connection,
    name: str,
    email: str,
    lot: str,
    password: str,
    password_confirm: str,
    phone: str = "",
) -> Member:
    """
    Create a pending member account.

    Raises:
        ValueError: form validation failed (one message per line)
        EmailAlreadyRegisteredError: the email already has an account
    """
    errors = validate_registration(name, email, lot, password, password_confirm)
    if errors:
        raise ValueError("\n".join(errors))

    email = email.strip().lower()
    try:
        member_id = insert_member(
            conn,
            email=email,
            name=name.strip(),
            lot=lot,
            phone=(phone or "").strip(),
            password_hash=hash_password(password),
        )
    except sqlite3.IntegrityError:
        raise EmailAlreadyRegisteredError(f"An account already exists for {email}.")

    return get_member(conn, member_id)


def login(conn: sqlite3.Connection, email: str, password: str) -> tuple[str, AuthProfile] | None:
    """Check credentials and open a session. Returns None on bad credentials."""
    found = get_member_credentials(conn, email.strip().lower())
    if found is None:
        return None
    member, password_hash = found
    if not verify_password(password, password_hash):
        return None

    token = new_session_token()
    create_session(conn, token, member["id"], session_expiry())
    return token, build_auth_profile(member)


def logout(conn: sqlite3.Connection, token: str):
    delete_session(conn, token)


def member_for_token(conn: sqlite3.Connection, token: str | None) -> Member | None:
    """Resolve a session token to its member, or None if missing/expired."""
    if not token:
        return None
    return get_session_member(conn, token, datetime.now(timezone.utc).isoformat())


def approve_member(conn: sqlite3.Connection, member_id: int) -> Member | None:
    """Mark a pending member approved. Returns None if no such member."""
    if not update_member(conn, member_id, status=STATUS_APPROVED):
        return None
    return get_member(conn, member_id)


def set_member_role(conn: sqlite3.Connection, member_id: int, role: str) -> Member | None:
    """Change a member's role. Returns None if no such member."""
    if role not in MEMBER_ROLES:
        raise ValueError(f"Invalid role '{role}', expected one of: {', '.join(sorted(MEMBER_ROLES))}")
    if not update_member(conn, member_id, role=role):
        return None
    return get_member(conn, member_id)

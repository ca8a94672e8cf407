"""FastAPI dependencies for sessions, roles and shared resources."""

import sqlite3
from collections.abc import Iterator

from fastapi import Depends, Header, HTTPException, Request, status

from api.models.responses import ErrorCodes
from core.config import ROLE_ADMIN
from core.database import get_connection
from models.records import Member
from services.accounts import member_for_token, role_of


def api_error(status_code: int, error: str, code: str, details: list[str] | None = None) -> HTTPException:
    """Build an HTTPException carrying the standard error body."""
    return HTTPException(
        status_code=status_code,
        detail={"error": error, "code": code, "details": details or []},
    )


def validation_error(e: ValueError, error: str = "Validation failed") -> HTTPException:
    """Turn a service ValueError (one message per line) into a 422."""
    details = [line.strip() for line in str(e).split("\n") if line.strip()]
    return api_error(422, error, ErrorCodes.VALIDATION_ERROR, details)


def not_found(what: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, f"{what} not found", ErrorCodes.NOT_FOUND)


def get_db() -> Iterator[sqlite3.Connection]:
    """Open a database connection for the duration of a request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def get_session_token(authorization: str | None = Header(None)) -> str | None:
    """Extract the session token from an 'Authorization: Bearer <token>' header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_member(
    request: Request,
    token: str | None = Depends(get_session_token),
    conn: sqlite3.Connection = Depends(get_db),
) -> Member | None:
    """Signed-in member, or None for anonymous visitors."""
    member = member_for_token(conn, token)
    # Picked up by the request log middleware
    request.state.member_id = member["id"] if member else None
    return member


def current_user_role(member: Member | None = Depends(get_current_member)) -> str:
    """'admin', 'member' or 'anonymous'."""
    return role_of(member)


def require_member(member: Member | None = Depends(get_current_member)) -> Member:
    """
    Require a signed-in member.

    Raises:
        HTTPException: 401 if there is no valid session
    """
    if member is None:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            "Sign in required",
            ErrorCodes.UNAUTHORIZED,
        )
    return member


def require_admin(member: Member = Depends(require_member)) -> Member:
    """
    Require a signed-in admin.

    Raises:
        HTTPException: 401 if not signed in, 403 if not an admin
    """
    if member["role"] != ROLE_ADMIN:
        raise api_error(
            status.HTTP_403_FORBIDDEN,
            "Admin access required",
            ErrorCodes.FORBIDDEN,
        )
    return member

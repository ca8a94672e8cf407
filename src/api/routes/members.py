"""Member directory and admin member management endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from api.dependencies import get_db, not_found, require_admin, require_member, validation_error
from api.models.requests import RoleRequest
from core.config import STATUS_APPROVED, STATUS_PENDING
from core.database import list_members
from models.records import Member
from services.accounts import approve_member, set_member_role
from services.calendar import today_local
from services.directory import directory_count_text, search_directory
from services.reports import directory_workbook_bytes

router = APIRouter(prefix="/v1/members")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("")
def directory_endpoint(
    q: str = Query("", description="Search text matched against any column"),
    _member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Approved members sorted by name, filtered by the search text."""
    rows = search_directory(list_members(conn, STATUS_APPROVED), q)
    return {"members": rows, "count": len(rows), "count_text": directory_count_text(len(rows))}


@router.get("/pending")
def pending_members_endpoint(
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    return {"members": list_members(conn, STATUS_PENDING)}


@router.get("/export")
def export_directory_endpoint(
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Download the approved member directory as an Excel workbook."""
    content = directory_workbook_bytes(list_members(conn, STATUS_APPROVED))
    filename = f"member_directory_{today_local().strftime('%Y_%m_%d')}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{member_id}/approve")
def approve_member_endpoint(
    member_id: int,
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    member = approve_member(conn, member_id)
    if member is None:
        raise not_found("Member")
    return {"member": member}


@router.put("/{member_id}/role")
def member_role_endpoint(
    member_id: int,
    body: RoleRequest,
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    try:
        member = set_member_role(conn, member_id, body.role)
    except ValueError as e:
        raise validation_error(e, "Invalid role")
    if member is None:
        raise not_found("Member")
    return {"member": member}

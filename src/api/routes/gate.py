"""Gate code endpoints."""

import sqlite3

from fastapi import APIRouter, Depends

from api.dependencies import get_db, require_admin, require_member, validation_error
from api.models.requests import GateCodeRequest
from models.records import Member
from services.gate import gate_code_display, update_gate_code

router = APIRouter(prefix="/v1/gate-code")


@router.get("")
def gate_code_endpoint(
    _member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    return gate_code_display(conn)


@router.put("")
def update_gate_code_endpoint(
    body: GateCodeRequest,
    admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    try:
        return update_gate_code(conn, body.code, admin["id"])
    except ValueError as e:
        raise validation_error(e, "Invalid gate code")

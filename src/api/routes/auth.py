"""Registration, sign-in and session endpoints."""

import sqlite3

from fastapi import APIRouter, BackgroundTasks, Depends, status

from api.dependencies import (
    api_error,
    current_user_role,
    get_current_member,
    get_db,
    get_session_token,
    require_member,
    validation_error,
)
from api.models.requests import LoginRequest, RegisterRequest
from api.models.responses import ErrorCodes, LoginResponse, ProfileResponse, RoleResponse
from models.records import Member
from services.accounts import (
    EmailAlreadyRegisteredError,
    build_auth_profile,
    login,
    logout,
    register_member,
)
from services.email import send_registration_email

router = APIRouter(prefix="/v1/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_endpoint(
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    conn: sqlite3.Connection = Depends(get_db),
):
    """
    Register a new member.

    The account starts out pending until an admin approves it.
    """
    try:
        member = register_member(
            conn,
            name=body.name,
            email=body.email,
            lot=body.lot,
            password=body.password,
            password_confirm=body.password_confirm,
            phone=body.phone,
        )
    except EmailAlreadyRegisteredError as e:
        raise api_error(status.HTTP_409_CONFLICT, str(e), ErrorCodes.CONFLICT)
    except ValueError as e:
        raise validation_error(e, "Registration failed")

    background_tasks.add_task(send_registration_email, member)
    return {"member": build_auth_profile(member), "status": member["status"]}


@router.post("/login", response_model=LoginResponse)
def login_endpoint(body: LoginRequest, conn: sqlite3.Connection = Depends(get_db)):
    result = login(conn, body.email, body.password)
    if result is None:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            "Invalid email or password.",
            ErrorCodes.UNAUTHORIZED,
        )
    token, profile = result
    return LoginResponse(token=token, profile=ProfileResponse(**profile))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_endpoint(
    token: str | None = Depends(get_session_token),
    _member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    logout(conn, token)


@router.get("/me", response_model=RoleResponse)
def me_endpoint(
    member: Member | None = Depends(get_current_member),
    role: str = Depends(current_user_role),
):
    """Caller's role, with their profile when signed in."""
    profile = ProfileResponse(**build_auth_profile(member)) if member else None
    return RoleResponse(role=role, profile=profile)

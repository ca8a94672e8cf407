"""Forum thread endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, status

from api.dependencies import api_error, get_db, not_found, require_member, validation_error
from api.models.requests import ThreadRequest
from api.models.responses import ErrorCodes
from core.database import delete_thread, get_thread
from models.records import Member
from services.forum import add_thread, can_delete_thread, load_threads

router = APIRouter(prefix="/v1/threads")


@router.get("")
def list_threads_endpoint(
    member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    return {"threads": load_threads(conn, member)}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_thread_endpoint(
    body: ThreadRequest,
    member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    try:
        thread_id = add_thread(conn, body.title, body.body, member)
    except ValueError as e:
        raise validation_error(e, "Failed to post thread")
    return {"id": thread_id}


@router.delete("/{thread_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_thread_endpoint(
    thread_id: int,
    member: Member = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Admins may delete any thread; authors may delete their own."""
    thread = get_thread(conn, thread_id)
    if thread is None:
        raise not_found("Thread")
    if not can_delete_thread(thread, member):
        raise api_error(
            status.HTTP_403_FORBIDDEN,
            "Only the author or an admin can delete this thread",
            ErrorCodes.FORBIDDEN,
        )
    delete_thread(conn, thread_id)

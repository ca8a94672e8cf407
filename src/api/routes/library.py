"""Document and video endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import (
    current_user_role,
    get_db,
    not_found,
    require_admin,
    require_member,
    validation_error,
)
from api.models.requests import DocumentRequest, VideoRequest
from core.config import ROLE_ADMIN
from core.database import delete_document, delete_video
from models.records import Member
from services.library import add_document, add_video, load_documents, load_videos

router = APIRouter(prefix="/v1")


@router.get("/documents")
def list_documents_endpoint(
    category: str = Query("all", description="Category to show, or 'all'"),
    _member: Member = Depends(require_member),
    role: str = Depends(current_user_role),
    conn: sqlite3.Connection = Depends(get_db),
):
    documents = load_documents(conn, category, can_delete=role == ROLE_ADMIN)
    return {"documents": documents}


@router.post("/documents", status_code=status.HTTP_201_CREATED)
def add_document_endpoint(
    body: DocumentRequest,
    admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    try:
        document_id = add_document(
            conn, body.title, body.category, body.description, body.url, admin["id"]
        )
    except ValueError as e:
        raise validation_error(e, "Failed to add document")
    return {"id": document_id}


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document_endpoint(
    document_id: int,
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    if not delete_document(conn, document_id):
        raise not_found("Document")


@router.get("/videos")
def list_videos_endpoint(
    category: str = Query("all", description="Category to show, or 'all'"),
    _member: Member = Depends(require_member),
    role: str = Depends(current_user_role),
    conn: sqlite3.Connection = Depends(get_db),
):
    videos = load_videos(conn, category, can_delete=role == ROLE_ADMIN)
    return {"videos": videos}


@router.post("/videos", status_code=status.HTTP_201_CREATED)
def add_video_endpoint(
    body: VideoRequest,
    admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    try:
        video_id = add_video(
            conn, body.title, body.category, body.description, body.url, admin["id"]
        )
    except ValueError as e:
        raise validation_error(e, "Failed to add video")
    return {"id": video_id}


@router.delete("/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_video_endpoint(
    video_id: int,
    _admin: Member = Depends(require_admin),
    conn: sqlite3.Connection = Depends(get_db),
):
    if not delete_video(conn, video_id):
        raise not_found("Video")

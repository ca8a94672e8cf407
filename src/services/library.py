"""
Documents and videos: posting, listing and category filtering.
"""

import sqlite3

from core.config import (
    CATEGORY_ALL,
    DOCUMENT_CATEGORY_DEFAULT,
    VIDEO_CATEGORY_DEFAULT,
)
from core.database import insert_document, insert_video, list_documents, list_videos
from core.validation import extract_youtube_id, validate_document, validate_video
from models.records import Document, Video
from services.reports import format_posted

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"
UNKNOWN_DATE = "Unknown date"


def filter_by_category(items: list[dict], category: str | None) -> list[dict]:
    """Keep items in the given category; 'all' or empty keeps everything."""
    if not category or category == CATEGORY_ALL:
        return items
    return [item for item in items if item["category"] == category]


def document_item(document: Document, can_delete: bool) -> dict:
    """Shape a document for the document list."""
    category = document["category"] or DOCUMENT_CATEGORY_DEFAULT
    return {
        "id": document["id"],
        "title": document["title"],
        "category": category,
        "category_label": category.capitalize(),
        "description": document["description"] or "",
        "url": document["url"] or "#",
        "posted": format_posted(document["created_at"]) or UNKNOWN_DATE,
        "can_delete": can_delete,
    }


def video_item(video: Video, can_delete: bool) -> dict:
    """Shape a video for the video list, with its embed URL if recognizable."""
    category = video["category"] or VIDEO_CATEGORY_DEFAULT
    video_id = extract_youtube_id(video["url"])
    return {
        "id": video["id"],
        "title": video["title"],
        "category": category,
        "category_label": category.capitalize(),
        "description": video["description"] or "",
        "url": video["url"],
        "youtube_id": video_id,
        "embed_url": YOUTUBE_EMBED_URL.format(video_id=video_id) if video_id else None,
        "posted": format_posted(video["created_at"]) or UNKNOWN_DATE,
        "can_delete": can_delete,
    }


def add_document(
    conn: sqlite3.Connection,
    title: str,
    category: str | None,
    description: str,
    url: str,
    created_by: int | None,
) -> int:
    """
    Validate and store a document.

    Raises:
        ValueError: if the form is invalid
    """
    title, description, url = title.strip(), (description or "").strip(), url.strip()
    category = category or DOCUMENT_CATEGORY_DEFAULT
    errors = validate_document(title, category, url)
    if errors:
        raise ValueError("\n".join(errors))
    return insert_document(conn, title, category, description, url, created_by)


def add_video(
    conn: sqlite3.Connection,
    title: str,
    category: str | None,
    description: str,
    url: str,
    created_by: int | None,
) -> int:
    """
    Validate and store a video.

    Raises:
        ValueError: if the form is invalid, including non-YouTube URLs
    """
    title, description, url = title.strip(), (description or "").strip(), url.strip()
    category = category or VIDEO_CATEGORY_DEFAULT
    errors = validate_video(title, category, url)
    if errors:
        raise ValueError("\n".join(errors))
    return insert_video(conn, title, category, description, url, created_by)


def load_documents(conn: sqlite3.Connection, category: str | None, can_delete: bool) -> list[dict]:
    items = [document_item(d, can_delete) for d in list_documents(conn)]
    return filter_by_category(items, category)


def load_videos(conn: sqlite3.Connection, category: str | None, can_delete: bool) -> list[dict]:
    items = [video_item(v, can_delete) for v in list_videos(conn)]
    return filter_by_category(items, category)

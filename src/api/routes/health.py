"""Health check endpoint."""

import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.database import get_connection

router = APIRouter()


def database_available() -> bool:
    """Check the database opens and has its schema."""
    try:
        conn = get_connection()
        try:
            conn.execute("SELECT 1 FROM members LIMIT 1").fetchall()
        finally:
            conn.close()
    except sqlite3.Error:
        return False
    return True


@router.get("/health", response_model=HealthResponse)
def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    available = database_available()
    timestamp = datetime.now(timezone.utc).isoformat()

    if available:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            database_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                database_available=False,
                timestamp=timestamp,
                error="Database not initialized",
            ).model_dump(),
        )

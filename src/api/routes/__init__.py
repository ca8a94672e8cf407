"""API route modules."""

from .auth import router as auth_router
from .events import router as events_router
from .forum import router as forum_router
from .gate import router as gate_router
from .health import router as health_router
from .library import router as library_router
from .members import router as members_router

__all__ = [
    "health_router",
    "auth_router",
    "members_router",
    "library_router",
    "events_router",
    "forum_router",
    "gate_router",
]

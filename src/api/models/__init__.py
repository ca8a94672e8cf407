"""API Pydantic models."""

from .requests import (
    DocumentRequest,
    EventRequest,
    GateCodeRequest,
    LoginRequest,
    RegisterRequest,
    RoleRequest,
    ThreadRequest,
    VideoRequest,
)
from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    LoginResponse,
    ProfileResponse,
    RoleResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "LoginResponse",
    "ProfileResponse",
    "RoleResponse",
    "RegisterRequest",
    "LoginRequest",
    "RoleRequest",
    "DocumentRequest",
    "VideoRequest",
    "EventRequest",
    "ThreadRequest",
    "GateCodeRequest",
]

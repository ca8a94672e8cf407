"""Pydantic request bodies for API endpoints.

Field-level rules (lot format, password strength, ...) are checked by the
service layer so that every form reports the site's own messages.
"""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    name: str
    email: str
    lot: str
    password: str
    password_confirm: str
    phone: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


class RoleRequest(BaseModel):
    role: str


class DocumentRequest(BaseModel):
    title: str
    category: str | None = None
    description: str = ""
    url: str


class VideoRequest(BaseModel):
    title: str
    category: str | None = None
    description: str = ""
    url: str


class EventRequest(BaseModel):
    title: str
    date: str  # YYYY-MM-DD
    time: str | None = None  # HH:MM
    location: str | None = None
    description: str | None = None


class ThreadRequest(BaseModel):
    title: str
    body: str = ""


class GateCodeRequest(BaseModel):
    code: str

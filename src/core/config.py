"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("MSLOG_DB_PATH", PROJECT_ROOT / "data" / "db" / "mslog.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# SITE CONFIGURATION
# =============================================================================

SITE_NAME = "Mount Spokane Land Owners Group"
SITE_TIMEZONE = os.environ.get("SITE_TIMEZONE", "America/Los_Angeles")

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_ABBREVIATIONS = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]  # Sunday-start weeks
TOOLTIP_SEPARATOR = "; "
UPCOMING_EVENTS_LIMIT = 10
EVENT_LOCATION_DEFAULT = "TBD"

# =============================================================================
# VALIDATION RULES
# =============================================================================

LOT_NUMBER_PATTERN = r"^\d{5}\.\d{4}$"  # e.g., "58221.0137"
GATE_CODE_PATTERN = r"^\d{4}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
YOUTUBE_ID_PATTERN = r"(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([a-zA-Z0-9_-]{11})"
PASSWORD_MIN_LENGTH = 8

LOT_NUMBER_MESSAGE = "Lot number must be in format: 58221.0137 (5 digits . 4 digits)"
PASSWORD_MESSAGE = "Password must be 8+ characters with both letters and numbers."
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
GATE_CODE_MESSAGE = "Gate code must be exactly 4 digits."
YOUTUBE_URL_MESSAGE = "Please enter a valid YouTube URL."

DOCUMENT_CATEGORIES = {"bylaws", "minutes", "resources", "maps"}
DOCUMENT_CATEGORY_DEFAULT = "resources"
VIDEO_CATEGORIES = {"tutorial", "event", "community", "safety"}
VIDEO_CATEGORY_DEFAULT = "community"
CATEGORY_ALL = "all"

# =============================================================================
# MEMBERS & AUTH
# =============================================================================

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
ROLE_ANONYMOUS = "anonymous"
MEMBER_ROLES = {ROLE_ADMIN, ROLE_MEMBER}

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"

SESSION_TTL_HOURS = int(os.environ.get("SESSION_TTL_HOURS", "336"))
PASSWORD_HASH_ITERATIONS = int(os.environ.get("PASSWORD_HASH_ITERATIONS", "260000"))

DIRECTORY_HEADERS = ["Name", "Lot", "Email", "Phone", "Role"]
MISSING_FIELD_DISPLAY = "—"

# =============================================================================
# FORUM & GATE
# =============================================================================

THREAD_LIST_LIMIT = 50
NEW_THREAD_DAYS = 3
ANONYMOUS_AUTHOR = "Anonymous"

GATE_CODE_SETTING = "gatecode"
GATE_CODE_PLACEHOLDER = "----"

# =============================================================================
# MS GRAPH EMAIL (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

FROM_EMAIL = os.environ.get("MSLOG_FROM_EMAIL", "")
ADMIN_EMAIL = os.environ.get("MSLOG_ADMIN_EMAIL", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"

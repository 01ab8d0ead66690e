"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for values like levels, event types and
backend configuration.
"""

import os

# --- Runtime configuration (environment driven) ---

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5001").rstrip("/")
PUBLIC_APP_URL = os.getenv("PUBLIC_APP_URL", "http://localhost:8501").rstrip("/")
DEFAULT_CLUB_ID = os.getenv("DEFAULT_CLUB_ID", "msu-dance-club")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "20"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_CLUB_NAME = "MSU Dance Club"

# Verification codes expire after ten minutes unless the server says otherwise
DEFAULT_CODE_EXPIRY_SECONDS = 600
VERIFICATION_CODE_LENGTH = 6
MIN_PASSWORD_LENGTH = 6

# --- Roles & positions ---

ADMIN_ROLES = {"admin", "secretary"}
JUDGE_ROLES = {"judge", "eboard", "admin", "secretary"}
# E-board positions that double as level coordinators
COORDINATOR_POSITIONS = ["Abi", "Sophia", "Devin", "Taylor"]
HIDE_DANCER_POSITIONS = {"President", "Vice President"}
JUDGE_ROLE_OPTIONS = ["judge", "admin", "secretary"]

# --- Dancers & levels ---

LEVELS = ["Level 1", "Level 2", "Level 3", "Level 4"]
LEVEL_COLORS = {
    "Level 1": "#ffc0cb",
    "Level 2": "#dda0dd",
    "Level 3": "#ffffe0",
    "Level 4": "#90ee90",
}
DEFAULT_LEVEL_COLOR = "#f8f9fa"
SHIRT_SIZES = ["XS", "Small", "Medium", "Large", "XL", "XXL"]
UNASSIGNED_GROUP = "Unassigned"
DANCERS_PER_GROUP_VIEW = 5

# --- Attendance ---

EVENT_TYPES = {
    "combo": {"label": "Combo", "color": "#dc3545"},
    "practice": {"label": "Practice", "color": "#fd7e14"},
    "bonding": {"label": "Bonding", "color": "#6f42c1"},
    "fundraiser": {"label": "Fundraiser", "color": "#ffc107"},
    "homecoming": {"label": "Homecoming", "color": "#198754"},
}
DEFAULT_EVENT_COLOR = "#6c757d"

GREEN = "#28a745"
TEAL = "#17a2b8"
YELLOW = "#ffc107"
ORANGE = "#fd7e14"
RED = "#dc3545"
GRAY = "#6c757d"

REQUEST_TYPES = {
    "missing": "Missing Practice",
    "excused": "Excused Absence",
}
REQUEST_STATUSES = ["pending", "approved", "partial", "denied"]
MAKEUP_POINTS_RANGE = (0, 10)

# --- Auditions & scoring ---

AUDITION_STATUSES = ["draft", "active", "completed", "archived"]
SCORE_CATEGORIES = ["kick", "jump", "turn", "performance", "execution", "technique"]
SCORING_FORMATS = ["slider", "input", "checkbox"]
MAX_VIDEO_BYTES = 500 * 1024 * 1024

# --- Admin ---

RESET_CONFIRMATION_PHRASE = "RESET"

import re
from typing import Optional

from domain.constants import MIN_PASSWORD_LENGTH, VERIFICATION_CODE_LENGTH

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SLUG_RE = re.compile(r"^[a-z0-9-_]+$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_RE.match(email.strip()))


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(SLUG_RE.match(slug))


def slugify(name: str) -> str:
    """'MSU Dance Club!' -> 'msu-dance-club'"""
    return _NON_SLUG_CHARS.sub("-", (name or "").lower()).strip("-")


def is_valid_code(code: str) -> bool:
    """Verification and reset codes are exactly six characters."""
    return len((code or "").strip()) == VERIFICATION_CODE_LENGTH


def new_password_error(new_password: str, confirm_password: str,
                       current_password: Optional[str] = None) -> Optional[str]:
    """Return the first password-rule violation, or None when the password is acceptable."""
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if new_password != confirm_password:
        return "Passwords do not match"
    if current_password is not None and new_password == current_password:
        return "New password must be different from current password"
    return None

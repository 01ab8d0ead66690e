"""
Role rules: which pages a signed-in user may open and where login sends them.
"""
import re
from typing import List, Optional

from domain.constants import (
    ADMIN_ROLES, JUDGE_ROLES, COORDINATOR_POSITIONS, HIDE_DANCER_POSITIONS, LEVELS,
)
from domain.models import SessionUser

_LEVEL_RE = re.compile(r"Level \d+")


def can_access(route_role: Optional[str], user: Optional[SessionUser]) -> bool:
    """Guard for a page that requires `route_role` (None means public)."""
    if route_role is None:
        return True
    if user is None:
        return False
    if route_role == "admin":
        return user.role in ADMIN_ROLES
    if route_role == "judge":
        return user.role in JUDGE_ROLES
    if route_role == "coordinator":
        return is_coordinator(user) or "Coordinator" in (user.position or "")
    return user.role == route_role


def login_page_for(route_role: Optional[str]) -> str:
    return "dancer_login" if route_role == "dancer" else "login"


def is_coordinator(user: SessionUser) -> bool:
    """Coordinator detection used when an e-board member logs in."""
    return (
        user.role == "coordinator"
        or (user.position or "") in COORDINATOR_POSITIONS
        or "coordinator" in (user.name or "").lower()
    )


def has_judge_access(user: SessionUser) -> bool:
    return user.role == "judge" or user.can_access_admin or not is_coordinator(user)


def has_admin_access(user: SessionUser) -> bool:
    return user.can_access_admin or user.role == "admin"


def available_views(user: SessionUser) -> List[str]:
    views = []
    if has_judge_access(user):
        views.append("judge")
    if is_coordinator(user):
        views.append("coordinator")
    return views


def coordinator_level(user: SessionUser) -> str:
    """Coordinators are named after their level, e.g. 'Level 3 Coordinator'."""
    for text in (user.name or "", user.position or "", user.level or ""):
        match = _LEVEL_RE.search(text)
        if match:
            return match.group(0)
    return LEVELS[0]


def can_hide_dancers(user: Optional[SessionUser]) -> bool:
    if user is None:
        return False
    return (
        user.can_access_admin
        or user.role in ADMIN_ROLES
        or (user.position or "") in HIDE_DANCER_POSITIONS
    )

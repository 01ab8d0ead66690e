"""
Login session stored in `st.session_state`.

Holds the bearer token and the signed-in user, builds API clients, and
carries navigation requests and flash messages across `st.rerun()`.
"""
from typing import Any, Dict, Optional

import streamlit as st

from domain.models import SessionUser, session_user_from_dict
from services.api import ApiClient
from utils.log import get_logger

logger = get_logger("session")

TOKEN_KEY = "auth_token"
USER_KEY = "auth_user"
FLASH_KEY = "flash_messages"


def token() -> Optional[str]:
    return st.session_state.get(TOKEN_KEY)


def current_user() -> Optional[SessionUser]:
    return st.session_state.get(USER_KEY)


def is_authenticated() -> bool:
    return bool(token()) and current_user() is not None


def sign_in(auth_token: str, user: Dict[str, Any]) -> SessionUser:
    session_user = session_user_from_dict(user)
    st.session_state[TOKEN_KEY] = auth_token
    st.session_state[USER_KEY] = session_user
    logger.info("signed in %s (%s)", session_user.email, session_user.role)
    return session_user


def update_user(**changes) -> None:
    user = current_user()
    if user is None:
        return
    for k, v in changes.items():
        setattr(user, k, v)


def sign_out() -> None:
    user = current_user()
    if user is not None:
        logger.info("signed out %s", user.email)
    st.session_state.pop(TOKEN_KEY, None)
    st.session_state.pop(USER_KEY, None)


def client() -> ApiClient:
    return ApiClient(token=token())


def flash(message: str, kind: str = "success") -> None:
    """Queue a message to show after the next rerun."""
    st.session_state.setdefault(FLASH_KEY, []).append((kind, message))


def show_flashes() -> None:
    for kind, message in st.session_state.pop(FLASH_KEY, []):
        icon = {"success": "✅", "error": "⚠️", "info": "ℹ️"}.get(kind)
        st.toast(message, icon=icon)


def navigate(page: str, **params) -> None:
    """Route to another page on the next run of the script."""
    st.session_state.nav_target = page
    st.session_state.nav_params = {k: str(v) for k, v in params.items() if v is not None}
    st.rerun()


def expire(login_page: str = "login") -> None:
    """Drop the stored credentials after a 401 and send the user back to log in."""
    sign_out()
    flash("Your session has expired. Please log in again.", "error")
    navigate(login_page)

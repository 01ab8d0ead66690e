from typing import Any, Callable, Optional, Tuple

import streamlit as st

from domain.constants import GREEN, YELLOW, RED, TEAL, GRAY
from services import session
from services.api import ApiError, AuthExpiredError
from utils.log import get_logger

logger = get_logger("ui")

PRIMARY_ACCENT = "#8B6FA8"  # club purple
HEADER_GRADIENT = "linear-gradient(135deg,#B380FF,#FFB3D1)"

_STATUS_COLORS = {
    "pending": YELLOW,
    "approved": GREEN,
    "active": GREEN,
    "present": GREEN,
    "partial": TEAL,
    "completed": TEAL,
    "denied": RED,
    "absent": RED,
    "draft": GRAY,
    "archived": GRAY,
}


def inject_base_css():
    """Page-wide styles; app.main emits them at the top of every script run."""
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            color:#fff; margin-right:4px; margin-bottom:4px;
        }}
        .club-header {{
            padding:0.9rem 1.1rem; border-radius:12px; background:{HEADER_GRADIENT};
            color:white; margin-bottom:1rem;
        }}
        .club-header h2 {{margin:0; font-size:1.4rem;}}
        .club-header p {{margin:0.2rem 0 0; font-size:0.85rem; opacity:0.9;}}
        .sheet {{border-collapse:collapse; width:100%; font-size:13px;}}
        .sheet th, .sheet td {{border-bottom:1px solid #dee2e6; padding:6px 8px; text-align:center;}}
        .sheet th {{background:#f8f9fa; position:sticky; top:0;}}
        .sheet td.name {{text-align:left; font-weight:600;}}
        .sheet small {{display:block; color:#6c757d; font-size:10px;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def color_badge(text: str, color: str) -> str:
    return f'<span class="badge" style="background:{color}">{text}</span>'


def status_badge(status: str) -> str:
    color = _STATUS_COLORS.get((status or "").lower(), GRAY)
    return color_badge((status or "unknown").capitalize(), color)


def club_header(title: str, subtitle: str = ""):
    sub = f"<p>{subtitle}</p>" if subtitle else ""
    st.markdown(f"<div class='club-header'><h2>{title}</h2>{sub}</div>", unsafe_allow_html=True)


def call_api(func: Callable, *args, success: Optional[str] = None,
             login_page: str = "login", **kwargs) -> Tuple[bool, Any]:
    """Run a service call and surface failures in the page.

    Validation problems and server errors are shown with `st.error`; an
    expired session signs the user out and returns to `login_page`.
    Returns (ok, result).
    """
    try:
        result = func(*args, **kwargs)
    except AuthExpiredError:
        session.expire(login_page)
        return False, None
    except (ValueError, PermissionError) as e:
        st.error(str(e))
        return False, None
    except ApiError as e:
        st.error(e.message)
        return False, None
    if success:
        session.flash(success)
    return True, result

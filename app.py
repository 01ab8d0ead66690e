import streamlit as st

from services import access, session
from ui.components import inject_base_css
from utils.log import get_logger

# Import the page rendering functions from the view modules
from views import (
    landing, login, org_signup, dancer_login, dancer_registration, public_attendance, absence_request,
    dancer_attendance, judge_dashboard, coordinator_dashboard, admin_dashboard, audition_detail,
    deliberations, recording,
)

logger = get_logger("app")

# --- Page Registry ---
# Maps a page key to its label, rendering function, admin status, the role needed to open it
# (None is public) and whether it is listed in the sidebar.
PAGE_REGISTRY = {
    "landing": {"label": "🏠 Home", "render_func": landing.view, "admin": False, "role": None, "nav": True},
    "login": {"label": "🔑 Staff login", "render_func": login.view, "admin": False, "role": None, "nav": True},
    "dancer_login": {
        "label": "🩰 Dancer login", "render_func": dancer_login.view, "admin": False, "role": None, "nav": True,
    },
    "org_signup": {
        "label": "🏛️ New organization", "render_func": org_signup.view, "admin": False, "role": None, "nav": True,
    },
    "register": {
        "label": "📝 Audition registration", "render_func": dancer_registration.view,
        "admin": False, "role": None, "nav": False,
    },
    "attendance": {
        "label": "✅ Check in", "render_func": public_attendance.view, "admin": False, "role": None, "nav": False,
    },
    "absence": {
        "label": "📝 Absence request", "render_func": absence_request.view,
        "admin": False, "role": None, "nav": False,
    },
    "dancer_attendance": {
        "label": "📊 My points", "render_func": dancer_attendance.view,
        "admin": False, "role": "dancer", "nav": True,
    },
    "judge": {
        "label": "⚖️ Judge", "render_func": judge_dashboard.view, "admin": False, "role": "judge", "nav": True,
    },
    "coordinator": {
        "label": "🧭 Coordinator", "render_func": coordinator_dashboard.view,
        "admin": False, "role": "coordinator", "nav": True,
    },
    "admin": {
        "label": "🛠️ Admin dashboard", "render_func": admin_dashboard.view,
        "admin": True, "role": "admin", "nav": True,
    },
    "audition": {
        "label": "🎭 Audition", "render_func": audition_detail.view, "admin": True, "role": "admin", "nav": False,
    },
    "deliberations": {
        "label": "🗳️ Deliberations", "render_func": deliberations.view,
        "admin": True, "role": "admin", "nav": False,
    },
    "recording": {
        "label": "🎥 Recording", "render_func": recording.view, "admin": True, "role": "admin", "nav": False,
    },
}

_PUBLIC_ONLY = {"login", "dancer_login", "org_signup"}


def _home_page(user):
    if user is None:
        return "landing"
    if user.role == "dancer":
        return "dancer_attendance"
    if access.can_access("admin", user):
        return "admin"
    if access.can_access("coordinator", user) and not access.has_judge_access(user):
        return "coordinator"
    return "judge"


def _apply_nav_target():
    """Move a pending `session.navigate` call into the URL."""
    if "nav_target" not in st.session_state:
        return
    target = st.session_state.pop("nav_target")
    params = st.session_state.pop("nav_params", {})
    if target not in PAGE_REGISTRY:
        logger.warning("ignoring navigation to unknown page %r", target)
        return
    st.query_params.clear()
    st.query_params.update({"page": target, **params})


def _current_page(user):
    page = st.query_params.get("page")
    return page if page in PAGE_REGISTRY else _home_page(user)


def _on_sidebar_change():
    label = st.session_state.get("navigation_radio")
    for key, entry in PAGE_REGISTRY.items():
        if entry["label"] == label:
            st.query_params.clear()
            st.query_params["page"] = key
            return


def _render_sidebar(user, page):
    st.sidebar.title("DanceScore Pro")
    visible = {k: v for k, v in PAGE_REGISTRY.items()
               if v["nav"] and access.can_access(v["role"], user)
               and not (user and k in _PUBLIC_ONLY)}
    labels = [v["label"] for v in visible.values()]
    # Pages reached by link (check-in, audition detail) have no sidebar entry
    st.session_state.navigation_radio = PAGE_REGISTRY[page]["label"] if page in visible else None
    st.sidebar.radio("Go to", labels, key="navigation_radio", on_change=_on_sidebar_change)

    st.sidebar.markdown("---")
    if user:
        st.sidebar.caption(f"Signed in as **{user.name}** ({user.position or user.role})")
        if st.sidebar.button("Log out"):
            session.sign_out()
            session.flash("You have been logged out.", "info")
            session.navigate("landing")


def main():
    """
    Main application router.

    Resolves the page from the `page` query parameter, applies the role guard and
    renders the page. Views move between pages with `session.navigate`.
    """
    st.set_page_config(page_title="DanceScore Pro", page_icon="🩰", layout="wide")
    inject_base_css()

    _apply_nav_target()
    user = session.current_user()
    page = _current_page(user)
    entry = PAGE_REGISTRY[page]

    if not access.can_access(entry["role"], user):
        if user is None:
            session.flash("Please log in to continue.", "info")
            session.navigate(access.login_page_for(entry["role"]))
        logger.info("user %s denied access to %s", user.id, page)
        _render_sidebar(user, _home_page(user))
        st.error("You do not have access to this page.")
        if st.button("Go to my dashboard"):
            session.navigate(_home_page(user))
        return

    _render_sidebar(user, page)
    session.show_flashes()
    entry["render_func"]()


if __name__ == "__main__":
    main()

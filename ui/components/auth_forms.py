import streamlit as st

from domain.constants import DEFAULT_CLUB_ID
from services import access, auth, session
from utils import validation
from .base import call_api


def render_password_change(user_type: str, key_prefix: str, required: bool = False) -> bool:
    """Change-password form; returns True once the server accepted the new password."""
    if required:
        st.warning("For security, please set a new password before continuing.")
    with st.form(f"{key_prefix}_password_change"):
        current = st.text_input("Current password", type="password", key=f"{key_prefix}_pw_current")
        new = st.text_input("New password", type="password", key=f"{key_prefix}_pw_new",
                            help="At least 6 characters")
        confirm = st.text_input("Confirm new password", type="password", key=f"{key_prefix}_pw_confirm")
        submitted = st.form_submit_button("Change password", type="primary")
    if not submitted:
        return False
    login_page = access.login_page_for("dancer" if user_type == "dancer" else None)
    ok, _ = call_api(auth.change_password, session.client(), user_type, current, new, confirm,
                     success="Password changed successfully!", login_page=login_page)
    return ok


def _new_reset_state():
    return {"step": "email", "email": "", "code": ""}


def render_forgot_password(user_type: str, key_prefix: str, club_id: str = DEFAULT_CLUB_ID) -> bool:
    """Three-step reset (email -> code -> new password). Returns True when finished."""
    state_key = f"{key_prefix}_reset"
    state = st.session_state.setdefault(state_key, _new_reset_state())
    client = session.client()

    if state["step"] == "email":
        with st.form(f"{key_prefix}_reset_email"):
            email = st.text_input("Account email", value=state["email"])
            submitted = st.form_submit_button("Send reset code")
        if submitted:
            ok, _ = call_api(auth.request_password_reset, client, email.strip(), user_type, club_id,
                             success="If that account exists, a reset code has been sent.")
            if ok:
                state.update(step="code", email=email.strip())
                st.rerun()
        return False

    if state["step"] == "code":
        st.caption(f"Code sent to **{state['email']}**")
        with st.form(f"{key_prefix}_reset_code"):
            code = st.text_input("6-digit code", max_chars=6)
            c1, c2 = st.columns(2)
            submitted = c1.form_submit_button("Continue", type="primary")
            restart = c2.form_submit_button("Use a different email")
        if restart:
            st.session_state[state_key] = _new_reset_state()
            st.rerun()
        if submitted:
            if validation.is_valid_code(code):
                state.update(step="password", code=code.strip())
                st.rerun()
            else:
                st.error("Please enter the 6-digit code from your email")
        return False

    with st.form(f"{key_prefix}_reset_password"):
        new = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Reset password", type="primary")
        back = c2.form_submit_button("Back")
    if back:
        state.update(step="code", code="")
        st.rerun()
    if submitted:
        ok, _ = call_api(auth.reset_password, client, state["email"], state["code"], new, confirm,
                         user_type, club_id)
        if ok:
            st.session_state.pop(state_key, None)
            session.flash("Password reset! You can now log in with your new password.")
            return True
    return False

import streamlit as st

from services import session
from services.auth import LoginWizard
from ui.components import club_header, call_api, render_password_change, render_forgot_password
from utils.dates import format_countdown

WIZARD_KEY = "login_wizard"
VIEW_LABELS = {"judge": "⚖️ Judge dashboard", "coordinator": "📋 Coordinator dashboard"}


def _wizard() -> LoginWizard:
    if WIZARD_KEY not in st.session_state:
        st.session_state[WIZARD_KEY] = LoginWizard()
    return st.session_state[WIZARD_KEY]


def _finish(wizard: LoginWizard):
    """Persist the login once the server accepted it, then route when no step is left."""
    if wizard.auth and not session.is_authenticated():
        session.sign_in(wizard.auth["token"], wizard.auth["user"])
    if wizard.step == "done":
        destination = wizard.destination
        name = wizard.user.name if wizard.user else ""
        del st.session_state[WIZARD_KEY]
        session.flash(f"Welcome {name}!")
        session.navigate(destination)
    st.rerun()


def _render_role(wizard: LoginWizard):
    st.subheader("Who's logging in?")
    c1, c2, c3 = st.columns(3)
    choice = None
    if c1.button("💃 Dancer", use_container_width=True):
        choice = "dancer"
    if c2.button("⭐ E-board", use_container_width=True):
        choice = "eboard"
    if c3.button("👑 Admin", use_container_width=True):
        choice = "admin"
    if choice:
        redirect = wizard.choose_role(choice)
        if redirect:
            session.navigate(redirect)
        st.rerun()
    st.divider()
    st.caption("New club?")
    if st.button("Create an organization"):
        session.navigate("org_signup")


def _render_credentials(wizard: LoginWizard):
    label = "Admin" if wizard.role_type == "admin" else "E-board"
    st.subheader(f"{label} login")
    with st.form("login_credentials"):
        email = st.text_input("Email", value=wizard.email)
        password = st.text_input("Password", type="password")
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Log in", type="primary")
        back = c2.form_submit_button("← Back")
    if back:
        wizard.back()
        st.rerun()
    if submitted:
        with st.spinner("Signing in..."):
            ok, _ = call_api(wizard.submit_credentials, session.client(), email, password)
        if ok:
            if wizard.step == "verify":
                session.flash("Verification code sent to your email!")
                st.rerun()
            _finish(wizard)
    with st.expander("Forgot password?"):
        if render_forgot_password(wizard.user_type, "staff", wizard.club_id):
            st.rerun()


def _render_verify(wizard: LoginWizard):
    st.subheader("Enter verification code")
    st.write(f"We sent a 6-digit code to **{wizard.email}**")
    remaining = wizard.seconds_remaining()
    if remaining > 0:
        st.caption(f"Code expires in {format_countdown(remaining)}")
    else:
        st.warning("Your code has expired. Request a new one.")
    with st.form("login_verify"):
        code = st.text_input("Verification code", max_chars=6)
        submitted = st.form_submit_button("Verify", type="primary")
    if submitted:
        ok, _ = call_api(wizard.submit_code, session.client(), code)
        if ok:
            _finish(wizard)
        elif wizard.step == "credentials":
            st.rerun()
    c1, c2 = st.columns(2)
    if c1.button("Resend code", disabled=remaining > 0):
        ok, _ = call_api(wizard.resend_code, session.client(),
                         success="New verification code sent to your email!")
        if ok:
            st.rerun()
    if c2.button("← Back"):
        wizard.back()
        st.rerun()


def _render_password(wizard: LoginWizard):
    st.subheader("Set a new password")
    if render_password_change(wizard.user_type, "login", required=True):
        wizard.password_changed()
        session.update_user(requires_password_change=False)
        _finish(wizard)


def _render_view_choice(wizard: LoginWizard):
    st.subheader("Choose your view")
    choice = st.radio("You have access to more than one dashboard", wizard.views,
                      format_func=lambda v: VIEW_LABELS.get(v, v))
    if st.button("Continue", type="primary"):
        wizard.choose_view(choice)
        _finish(wizard)


def view():
    club_header("Club Portal", "Sign in to score auditions, manage attendance and more")
    wizard = _wizard()
    if wizard.step == "role":
        _render_role(wizard)
    elif wizard.step == "credentials":
        _render_credentials(wizard)
    elif wizard.step == "verify":
        _render_verify(wizard)
    elif wizard.step == "password":
        _render_password(wizard)
    elif wizard.step == "view":
        _render_view_choice(wizard)

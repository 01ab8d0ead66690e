import streamlit as st

from services import organizations, session
from ui.components import club_header, call_api
from utils.validation import slugify


def _sync_slug():
    # Auto-fill the slug until the admin edits it by hand
    if not st.session_state.get("org_slug_touched"):
        st.session_state.org_slug = slugify(st.session_state.get("org_name", ""))


def _slug_edited():
    st.session_state.org_slug_touched = True


def view():
    club_header("Create your organization", "Set up a new club and its first admin account")

    st.text_input("Organization name", key="org_name", on_change=_sync_slug)
    st.text_input("Organization URL slug", key="org_slug", on_change=_slug_edited,
                  help="Lowercase letters, numbers, hyphens and underscores")

    with st.form("org_signup"):
        admin_name = st.text_input("Your name")
        admin_email = st.text_input("Your email")
        admin_position = st.text_input("Your position", value="President")
        password = st.text_input("Password", type="password", help="At least 6 characters")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Create organization", type="primary")

    if submitted:
        form = {
            "organization_name": st.session_state.get("org_name", ""),
            "organization_slug": st.session_state.get("org_slug", ""),
            "admin_name": admin_name,
            "admin_email": admin_email,
            "admin_position": admin_position or "President",
            "admin_password": password,
            "confirm_password": confirm,
        }
        with st.spinner("Creating organization..."):
            ok, data = call_api(organizations.signup, session.client(), form)
        if ok:
            session.sign_in(data["token"], data["user"])
            org_name = (data.get("organization") or {}).get("name", form["organization_name"])
            session.flash(f"Welcome to {org_name}! Your organization has been created.")
            for k in ("org_name", "org_slug", "org_slug_touched"):
                st.session_state.pop(k, None)
            session.navigate("admin")

    st.divider()
    if st.button("Already have an account? Log in"):
        session.navigate("login")

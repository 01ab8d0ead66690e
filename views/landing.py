import streamlit as st

from services import session
from ui.components import club_header


def view():
    club_header("DanceScore Pro", "Auditions, attendance and points for your dance club")
    user = session.current_user()
    if user:
        st.success(f"Signed in as {user.name}.")

    c1, c2, c3 = st.columns(3)
    with c1.container(border=True):
        st.markdown("### 🩰 Dancers")
        st.caption("Check your point sheet, request an absence or send in make-up work.")
        if st.button("Dancer login", use_container_width=True):
            session.navigate("dancer_login")
    with c2.container(border=True):
        st.markdown("### ⚖️ Staff")
        st.caption("Judges, e-board and admins score auditions and manage the club.")
        if st.button("Staff login", use_container_width=True, type="primary"):
            session.navigate("login")
    with c3.container(border=True):
        st.markdown("### 🏛️ New club")
        st.caption("Set up your organization and its first admin account.")
        if st.button("Create an organization", use_container_width=True):
            session.navigate("org_signup")

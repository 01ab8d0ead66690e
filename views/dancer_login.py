import streamlit as st

from services import auth, registration, session
from ui.components import club_header, call_api, render_forgot_password


@st.cache_data(ttl=300)
def _club_name() -> str:
    return registration.club_name(session.client())


def view():
    club_header(_club_name(), "Dancer login")
    redirect = st.query_params.get("redirect")
    if redirect:
        st.info("Log in to continue to your check-in.")

    with st.form("dancer_login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

    if submitted:
        with st.spinner("Signing in..."):
            ok, data = call_api(auth.dancer_login, session.client(), email.strip(), password,
                                login_page="dancer_login")
        if ok:
            user = session.sign_in(data["token"], data["user"])
            session.flash(f"Welcome {user.name}!")
            if redirect == "attendance":
                session.navigate("attendance", event=st.query_params.get("event"))
            session.navigate("dancer_attendance")

    with st.expander("Forgot password?"):
        if render_forgot_password("dancer", "dancer"):
            st.rerun()

    st.divider()
    if st.button("Staff login"):
        session.navigate("login")

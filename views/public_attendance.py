import streamlit as st

from services import attendance as attendance_svc, session
from services.api import ApiError
from ui.components import club_header, event_card
from utils.log import get_logger

logger = get_logger("views.public_attendance")


def view():
    club_header("Attendance Check-in")
    event_id = st.query_params.get("event")
    if not event_id:
        st.error("Missing event. Scan the QR code shown at practice.")
        return

    user = session.current_user()
    if user is None or user.role != "dancer":
        st.info("Please log in as a dancer to check in.")
        if st.button("Log in", type="primary"):
            session.navigate("dancer_login", redirect="attendance", event=event_id)
        return

    try:
        event = attendance_svc.get_event(session.client(), event_id)
    except ApiError as e:
        logger.warning("event %s unavailable: %s", event_id, e)
        st.error("Event not found")
        return

    event_card(event)
    st.write(f"Checking in as **{user.name}**" + (f" ({user.level})" if user.level else ""))

    if st.session_state.get("checked_in_event") == event_id:
        st.success("You're checked in! ✅")
        if st.button("View my point sheet"):
            session.navigate("dancer_attendance")
        return

    if st.button("Confirm attendance", type="primary"):
        try:
            with st.spinner("Submitting..."):
                attendance_svc.check_in(session.client(), event_id)
        except ApiError as e:
            st.error(e.message)
            if e.status in (401, 403):
                session.sign_out()
                session.navigate("dancer_login", redirect="attendance", event=event_id)
            return
        st.session_state.checked_in_event = event_id
        st.rerun()

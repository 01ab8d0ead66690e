import streamlit as st

from domain.constants import LEVELS, REQUEST_TYPES
from services import absences, attendance as attendance_svc, session
from services.api import ApiError
from ui.components import club_header, call_api, event_card

STATE_KEY = "absence_submitted"


def _render_makeup(submitted: dict):
    with st.container(border=True):
        st.subheader("📝 Make-up work")
        st.write("Already finished your make-up? Upload it now to earn points back. "
                 "You can also submit it later from your point sheet.")
        with st.form("public_makeup"):
            upload = st.file_uploader("Make-up file", type=["pdf", "png", "jpg", "jpeg", "doc", "docx", "mp4", "mov"])
            sent = st.checkbox("I have sent this make-up to my level coordinator")
            c1, c2 = st.columns(2)
            send = c1.form_submit_button("Submit make-up", type="primary")
            skip = c2.form_submit_button("Skip for now")
        if skip:
            submitted["makeup_done"] = True
            st.rerun()
        if send:
            ok, _ = call_api(
                absences.submit_makeup_file, session.client(),
                submitted["event_id"], submitted["name"], submitted["level"],
                upload.name if upload else "", upload.getvalue() if upload else b"",
                upload.type if upload else "", sent, submitted.get("request_id"),
                success="Make-up work submitted successfully!",
            )
            if ok:
                submitted["makeup_done"] = True
                st.rerun()


def view():
    club_header("Absence Request", "Let your coordinator know you'll miss an event")
    params = st.query_params
    event_id = params.get("event")
    if not event_id:
        st.error("Missing event. Open this page from the link your coordinator shared.")
        return

    try:
        event = attendance_svc.get_event(session.client(), event_id)
        event_card(event)
    except ApiError:
        st.warning("Could not load event details. You can still submit your request.")

    submitted = st.session_state.get(STATE_KEY)
    if submitted and submitted.get("event_id") == event_id:
        st.success("Your absence request was submitted.")
        if not submitted.get("makeup_done"):
            _render_makeup(submitted)
        elif st.button("Submit another request"):
            st.session_state.pop(STATE_KEY, None)
            st.rerun()
        return

    level_default = params.get("level")
    with st.form("absence_request"):
        name = st.text_input("Your name *", value=params.get("name", ""))
        level = st.selectbox("Your level *", LEVELS,
                             index=LEVELS.index(level_default) if level_default in LEVELS else 0)
        request_type = st.radio("Request type", list(REQUEST_TYPES), horizontal=True,
                                format_func=REQUEST_TYPES.get)
        reason = st.text_area("Reason")
        proof = st.file_uploader("Proof (required for excused absences)",
                                 type=["png", "jpg", "jpeg", "pdf"])
        send = st.form_submit_button("Submit Request", type="primary")

    if send:
        with st.spinner("Submitting..."):
            ok, request_id = call_api(
                absences.submit_request, session.client(), event_id, name, level, request_type, reason,
                proof.getvalue() if proof else None, proof.type if proof else "",
            )
        if ok:
            st.session_state[STATE_KEY] = {
                "event_id": event_id, "request_id": request_id,
                "name": name.strip(), "level": level,
            }
            st.rerun()

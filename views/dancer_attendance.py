import streamlit as st

from services import absences, attendance as attendance_svc, session
from ui.components import (
    club_header, call_api, color_badge, event_badge, status_badge, render_password_change,
)
from utils.dates import format_datetime
from utils.formatting import points_text


def _makeup_form(sheet, event):
    request = sheet.request_for(event.id)
    with st.form(f"makeup_{event.id}"):
        st.caption("Upload proof of your make-up work to earn points back for this event.")
        upload = st.file_uploader("Make-up work", key=f"makeup_file_{event.id}",
                                  type=["pdf", "png", "jpg", "jpeg", "doc", "docx"])
        sent = st.checkbox("I have sent this make-up to my coordinator", key=f"makeup_sent_{event.id}")
        send = st.form_submit_button("Submit Make-Up Work")
    if send:
        ok, _ = call_api(absences.submit_makeup_inline, session.client(), event.id, request,
                         sheet.dancer, upload.getvalue() if upload else None,
                         upload.type if upload else "", sent,
                         success="Make-up work submitted successfully!", login_page="dancer_login")
        if ok:
            st.rerun()


def view():
    user = session.current_user()
    ok, sheet = call_api(attendance_svc.dancer_sheet, session.client(), login_page="dancer_login")
    if not ok:
        return

    dancer = sheet.dancer
    club_header(f"Hi, {dancer.get('name') or user.name}!", dancer.get("level") or "Point Sheet")

    c1, c2, c3 = st.columns(3)
    c1.metric("Total points", points_text(sheet.total_points))
    c2.metric("Events", len(sheet.events))
    c3.metric("Absence requests", len(sheet.requests))

    st.subheader("Point Sheet")
    if not sheet.events:
        st.info("No events yet this season.")
    for event in sheet.events:
        record = sheet.record_for(event.id)
        request = sheet.request_for(event.id)
        color, label = attendance_svc.dancer_status(record)
        points = sheet.points_for(event.id)
        with st.container(border=True):
            left, mid, right = st.columns([4, 2, 2])
            left.markdown(f"**{event.name}** {event_badge(event)}<br><small>{format_datetime(event.date)}</small>",
                          unsafe_allow_html=True)
            mid.markdown(color_badge(points_text(points), color) +
                         (f"<br><small>{label}</small>" if label else ""), unsafe_allow_html=True)
            if request:
                right.markdown(f"Request {status_badge(request.status)}", unsafe_allow_html=True)
            elif record is None or record.status != "present":
                if right.button("Request", key=f"req_{event.id}"):
                    session.navigate("absence", event=event.id, name=dancer.get("name") or user.name,
                                     level=dancer.get("level"))
            if request:
                with st.expander("Submit make-up work"):
                    _makeup_form(sheet, event)

    with st.expander("🔒 Change password"):
        if render_password_change("dancer", "dancer_settings"):
            st.rerun()

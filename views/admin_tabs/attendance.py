import datetime as dt

import streamlit as st

from domain.constants import EVENT_TYPES
from services import attendance as attendance_svc, session
from ui.components import call_api, event_card, render_point_sheet
from utils.qr import attendance_url, qr_png

_STATUS_OPTIONS = ["present", "absent", "excused"]


def _render_create_event(client):
    with st.expander("➕ New event"):
        with st.form("new_event", clear_on_submit=True):
            name = st.text_input("Event name")
            c1, c2 = st.columns(2)
            date = c1.date_input("Date", value=dt.date.today())
            time = c2.time_input("Time", value=dt.time(18, 0))
            event_type = st.selectbox("Type", list(EVENT_TYPES), format_func=attendance_svc.event_type_label)
            points = st.number_input("Points", min_value=0, max_value=10, value=1, step=1)
            description = st.text_area("Description")
            submitted = st.form_submit_button("Create event", type="primary")
        if submitted:
            ok, _ = call_api(attendance_svc.create_event, client, name, date, time, event_type, points,
                             description, success="Event created!")
            if ok:
                st.rerun()


def _render_take_attendance(client, event, members):
    """Roll call for one event; everyone starts present."""
    key = f"roll_{event.id}"
    if key not in st.session_state:
        st.session_state[key] = attendance_svc.initial_attendance(members)
    roll = st.session_state[key]
    for m in members:
        current = roll.get(m.id, "present")
        roll[m.id] = st.radio(m.name, _STATUS_OPTIONS, index=_STATUS_OPTIONS.index(current),
                              horizontal=True, key=f"{key}_{m.id}")
    if st.button("Save attendance", key=f"save_{key}", type="primary"):
        ok, _ = call_api(attendance_svc.bulk_update, client, event.id, roll, success="Attendance saved!")
        if ok:
            st.session_state.pop(key, None)
            st.rerun()


def _render_event(client, event, members):
    with st.container(border=True):
        event_card(event)
        c1, c2, c3 = st.columns(3)
        if c1.toggle("Show QR code", key=f"qr_{event.id}"):
            url = attendance_url(event.id)
            st.image(qr_png(url), caption=url, width=220)
            st.download_button("Download QR", qr_png(url), file_name=f"{event.name}-qr.png",
                               mime="image/png", key=f"qr_dl_{event.id}")
        take = c2.toggle("Take attendance", key=f"take_{event.id}")
        if c3.checkbox("Confirm delete", key=f"confirm_event_{event.id}") and \
                c3.button("Delete event", key=f"del_event_{event.id}"):
            ok, _ = call_api(attendance_svc.delete_event, client, event.id, success=f"Deleted {event.name}")
            if ok:
                st.rerun()
        if take:
            _render_take_attendance(client, event, members)


def render_attendance_tab():
    """Events, roll call, QR check-in codes and the club point sheet."""
    st.subheader("📅 Attendance")
    client = session.client()
    _render_create_event(client)

    def _load():
        return (attendance_svc.sort_members(attendance_svc.list_club_members(client)),
                attendance_svc.sort_events(attendance_svc.list_events(client)),
                attendance_svc.list_records(client))

    ok, data = call_api(_load)
    if not ok:
        return
    members, events, records = data

    sheet_tab, events_tab = st.tabs(["Point Sheet", "Events"])
    with sheet_tab:
        render_point_sheet(members, events, records)
        if members and events:
            csv = attendance_svc.point_sheet_frame(members, events, records).to_csv(index=False)
            st.download_button("Download point sheet (CSV)", csv, file_name="point-sheet.csv", mime="text/csv")
    with events_tab:
        if not events:
            st.info("No events yet.")
        for event in events:
            _render_event(client, event, members)

import streamlit as st

from services import absences, access, attendance as attendance_svc, session
from ui.components import club_header, call_api, render_point_sheet, request_card, makeup_card


def _load(level):
    client = session.client()
    members = attendance_svc.sort_members(
        attendance_svc.members_for_level(attendance_svc.list_club_members(client), level))
    events = attendance_svc.sort_events(attendance_svc.list_events(client), newest_first=True)
    records = attendance_svc.list_records(client)
    requests = absences.list_requests(client, level=level)
    makeups = absences.list_makeups(client, level=level)
    return members, events, records, requests, makeups


def view():
    user = session.current_user()
    level = access.coordinator_level(user)
    club_header(f"{level} Coordinator", f"Signed in as {user.name}")

    with st.spinner("Loading your level..."):
        ok, data = call_api(_load, level)
    if not ok:
        return
    members, events, records, requests, makeups = data

    pending_requests = sum(1 for r in requests if r.status == "pending")
    pending_makeups = sum(1 for m in makeups if m.status == "pending")
    c1, c2, c3 = st.columns(3)
    c1.metric("Dancers", len(members))
    c2.metric("Pending requests", pending_requests)
    c3.metric("Pending make-ups", pending_makeups)

    tabs = st.tabs(["📊 Attendance & Points", "📝 Absence Requests", "🎯 Make-Up Submissions"])
    with tabs[0]:
        render_point_sheet(members, events, records, coordinator=True)
    with tabs[1]:
        if not requests:
            st.info(f"No absence requests for {level}.")
        for req in requests:
            with st.container(border=True):
                request_card(req)
    with tabs[2]:
        if not makeups:
            st.info(f"No make-up submissions for {level}.")
        for sub in makeups:
            with st.container(border=True):
                makeup_card(sub)

    if access.has_judge_access(user) and st.button("Switch to judge view"):
        session.navigate("judge")

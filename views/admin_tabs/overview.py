import streamlit as st

from services import absences, admin as admin_svc, attendance as attendance_svc, auditions as audition_svc, session
from ui.components import call_api
from views.admin_tabs.auditions import cached_auditions


def _load():
    client = session.client()
    return admin_svc.overview_counts(
        cached_auditions(session.token()),
        audition_svc.list_judges(client),
        attendance_svc.list_club_members(client),
        absences.list_requests(client),
        absences.list_makeups(client),
    )


def render_overview_tab():
    st.subheader("📈 Overview")
    ok, counts = call_api(_load)
    if not ok:
        return
    r1 = st.columns(3)
    r1[0].metric("Auditions", counts["auditions"])
    r1[1].metric("Active auditions", counts["active_auditions"])
    r1[2].metric("Active judges", counts["judges"])
    r2 = st.columns(3)
    r2[0].metric("Club members", counts["club_members"])
    r2[1].metric("Pending absence requests", counts["pending_requests"])
    r2[2].metric("Pending make-ups", counts["pending_makeups"])

import streamlit as st

from domain.constants import MAKEUP_POINTS_RANGE, REQUEST_STATUSES
from services import absences, session
from ui.components import call_api, makeup_card, request_card


def _status_filter(key):
    return st.selectbox("Status", ["all"] + list(REQUEST_STATUSES), key=key,
                        format_func=lambda s: s.capitalize())


def render_absence_requests_tab():
    """Review absence requests; the options offered depend on the request type."""
    st.subheader("📝 Absence Requests")
    client = session.client()
    ok, requests = call_api(absences.list_requests, client)
    if not ok:
        return
    wanted = _status_filter("request_status_filter")
    shown = [r for r in requests if wanted == "all" or r.status == wanted]
    if not shown:
        st.info("No absence requests.")
        return

    for req in shown:
        with st.container(border=True):
            request_card(req)
            if req.status != "pending":
                continue
            options = absences.review_options(req.request_type)
            cols = st.columns(len(options))
            for col, option in zip(cols, options):
                if col.button(option.label, key=f"review_{req.id}_{option.status}"):
                    ok, _ = call_api(absences.review_request, client, req.id, option,
                                     success=f"Request {option.status}")
                    if ok:
                        st.rerun()


def render_makeups_tab():
    """Approve make-up work for a number of points, or deny it."""
    st.subheader("🎯 Make-Up Submissions")
    client = session.client()
    ok, makeups = call_api(absences.list_makeups, client)
    if not ok:
        return
    wanted = _status_filter("makeup_status_filter")
    shown = [m for m in makeups if wanted == "all" or m.status == wanted]
    if not shown:
        st.info("No make-up submissions.")
        return

    low, high = MAKEUP_POINTS_RANGE
    for sub in shown:
        with st.container(border=True):
            makeup_card(sub)
            if sub.status != "pending":
                continue
            c1, c2, c3 = st.columns([2, 1, 1])
            points = c1.number_input("Points to award", min_value=low, max_value=high, value=1,
                                     step=1, key=f"makeup_points_{sub.id}")
            if c2.button("Approve", key=f"makeup_ok_{sub.id}", type="primary"):
                ok, _ = call_api(absences.review_makeup, client, sub.id, True, points,
                                 success=f"Approved make-up for {sub.dancer_name}")
                if ok:
                    st.rerun()
            if c3.button("Deny", key=f"makeup_deny_{sub.id}"):
                ok, _ = call_api(absences.review_makeup, client, sub.id, False,
                                 success=f"Denied make-up for {sub.dancer_name}")
                if ok:
                    st.rerun()

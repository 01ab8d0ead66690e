import streamlit as st
from typing import Any, Dict, Optional

from domain.constants import REQUEST_TYPES
from domain.models import AbsenceRequest, AttendanceEvent, MakeUpSubmission, ClubMember
from services import attendance as attendance_svc
from utils.dates import format_date, format_datetime
from .base import status_badge, color_badge


def event_badge(event: AttendanceEvent) -> str:
    return color_badge(attendance_svc.event_type_label(event.type),
                       attendance_svc.event_type_color(event.type))


def level_badge(level: str) -> str:
    color = attendance_svc.level_color(level)
    return f'<span class="badge" style="background:{color};color:#333">{level or "—"}</span>'


def event_card(event: AttendanceEvent):
    """
    Compact summary of an attendance event.
    """
    with st.container(border=True):
        st.markdown(
            f"**{event.name}** {event_badge(event)}<br>"
            f"<small>{format_datetime(event.date)} · {event.points_value} pt</small>",
            unsafe_allow_html=True,
        )
        if event.description:
            st.caption(event.description)


def request_card(req: AbsenceRequest):
    """Absence request with its proof image, if one was attached."""
    st.markdown(
        f"**{req.dancer_name}** {level_badge(req.dancer_level)} "
        f"{status_badge(req.status)}<br>"
        f"<small>{REQUEST_TYPES.get(req.request_type, req.request_type)} · "
        f"{req.event_name or req.event_id} · submitted {format_date(req.submitted_at)}</small>",
        unsafe_allow_html=True,
    )
    if req.reason:
        st.write(req.reason)
    if req.proof_url:
        if req.proof_url.startswith("data:image"):
            st.image(req.proof_url, width=240)
        else:
            st.link_button("View proof", req.proof_url)


def makeup_card(sub: MakeUpSubmission):
    points = f" · {sub.points_awarded:g} pt" if sub.points_awarded else ""
    st.markdown(
        f"**{sub.dancer_name}** {level_badge(sub.dancer_level)} "
        f"{status_badge(sub.status)}<br>"
        f"<small>{sub.event_name or sub.event_id} · submitted {format_date(sub.submitted_at)}{points}</small>",
        unsafe_allow_html=True,
    )
    if sub.sent_to_coordinator:
        st.caption("Sent to coordinator ✔")
    if sub.make_up_url:
        if sub.make_up_url.startswith("data:image"):
            st.image(sub.make_up_url, width=240)
        else:
            st.link_button("Open make-up work", sub.make_up_url)


def member_stats_card(member: ClubMember, stats: Optional[Dict[str, Any]], improvements: list):
    """Judge-score breakdown shown when a club member row is expanded."""
    if not stats:
        st.caption("No statistical data available")
        return
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Ranking", f"#{stats['rank']}")
    c2.metric("Percentile", f"{stats['percentile']}th", stats["percentile_label"], delta_color="off")
    c3.metric("Agreement", stats["agreement"])
    c4.metric("Average", f"{member.average_score:.2f}")
    st.caption(
        f"Range {stats['min']:.2f}–{stats['max']:.2f} · Median {stats['median']:.2f} · "
        f"25th {stats['p25']:.2f} · 75th {stats['p75']:.2f} · σ {stats['std_dev']:.2f}"
    )
    if not improvements:
        st.caption("All categories are performing well!")
        return
    st.markdown("**Areas to improve**")
    for area in improvements:
        icon = "🔴" if area["priority"] == "high" else "🟡"
        st.markdown(f"{icon} {area['category']}: {area['score']:.2f} / {area['max']}")

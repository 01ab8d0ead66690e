import html
from typing import List

import streamlit as st

from domain.models import AttendanceEvent, AttendanceRecord, ClubMember
from services import attendance as attendance_svc
from utils.dates import format_date
from utils.formatting import points_text
from .base import color_badge
from .cards import level_badge


def render_point_sheet(members: List[ClubMember], events: List[AttendanceEvent],
                       records: List[AttendanceRecord], coordinator: bool = False):
    """Member x event grid with coloured point cells and a total column."""
    if not members:
        st.caption("No club members to show.")
        return
    if not events:
        st.caption("No events yet.")
        return

    head = "".join(
        f"<th>{html.escape(e.name)}<small>{format_date(e.date)}</small>"
        f"{color_badge(attendance_svc.event_type_label(e.type), attendance_svc.event_type_color(e.type))}</th>"
        for e in events
    )
    rows = []
    for m in members:
        cells = []
        for e in events:
            record = attendance_svc.find_record(records, m, e.id)
            points = record.points if record else 0
            text, color, label = attendance_svc.point_cell(points, record, coordinator=coordinator)
            badge = color_badge(text, color) if text else ""
            note = f"<small>{label}</small>" if label else ""
            cells.append(f"<td>{badge}{note}</td>")
        total = attendance_svc.total_points(records, m)
        rows.append(
            f"<tr><td class='name'>{html.escape(m.name)} {level_badge(m.level)}</td>"
            f"{''.join(cells)}<td><b>{points_text(total)}</b></td></tr>"
        )
    st.markdown(
        f"<div style='overflow-x:auto'><table class='sheet'><thead><tr><th>Dancer</th>{head}"
        f"<th>Total</th></tr></thead><tbody>{''.join(rows)}</tbody></table></div>",
        unsafe_allow_html=True,
    )

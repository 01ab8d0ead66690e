import streamlit as st

from services import admin as admin_svc, attendance as attendance_svc, session
from ui.components import call_api, level_badge, member_stats_card


def render_club_members_tab():
    """Club roster with judge-score statistics per member."""
    st.subheader("👯 Club Members")
    client = session.client()
    ok, members = call_api(attendance_svc.list_club_members, client)
    if not ok:
        return
    if not members:
        st.info("No club members yet. Members are added when deliberations are submitted.")
        return

    members = attendance_svc.sort_members(members)
    st.dataframe(
        [{"Name": m.name, "Level": m.level, "Audition #": m.audition_number,
          "Average": round(m.average_score, 2), "Email": m.email} for m in members],
        hide_index=True, use_container_width=True,
    )

    for m in members:
        with st.expander(f"{m.name} · {m.level or 'Unassigned'}"):
            st.markdown(level_badge(m.level), unsafe_allow_html=True)
            if m.audition_name:
                st.caption(f"Audition: {m.audition_name}")
            member_stats_card(m, admin_svc.member_stats(m, members), admin_svc.improvement_areas(m))
            if st.checkbox("Confirm removal", key=f"confirm_member_{m.id}"):
                if st.button("Remove from club", key=f"remove_member_{m.id}"):
                    ok, _ = call_api(attendance_svc.delete_club_member, client, m.id,
                                     success=f"Removed {m.name}")
                    if ok:
                        st.rerun()

import streamlit as st

from services import access, session
from ui.components import club_header


def view():
    user = session.current_user()
    club_header("Admin Dashboard", f"Signed in as {user.name}")
    st.markdown("Run auditions, track attendance and manage the club from one place.")

    # Tab renderers are imported lazily so a broken tab does not take down the router
    from views.admin_tabs.overview import render_overview_tab
    from views.admin_tabs.auditions import render_auditions_tab
    from views.admin_tabs.judges import render_judges_tab
    from views.admin_tabs.club_members import render_club_members_tab
    from views.admin_tabs.attendance import render_attendance_tab
    from views.admin_tabs.requests import render_absence_requests_tab, render_makeups_tab
    from views.admin_tabs.files import render_files_tab
    from views.admin_tabs.clubs import render_clubs_tab
    from views.admin_tabs.settings import render_settings_tab

    tabs = st.tabs([
        "📈 Overview", "🎭 Auditions", "⚖️ Judges", "👯 Club Members", "📅 Attendance",
        "📝 Absence Requests", "🎯 Make-Ups", "🗂️ Files", "🏛️ Clubs", "⚙️ Settings",
    ])
    renderers = [
        render_overview_tab, render_auditions_tab, render_judges_tab, render_club_members_tab,
        render_attendance_tab, render_absence_requests_tab, render_makeups_tab, render_files_tab,
        render_clubs_tab, render_settings_tab,
    ]
    for tab, render in zip(tabs, renderers):
        with tab:
            render()

    views = access.available_views(user)
    if views:
        st.divider()
        cols = st.columns(len(views))
        for col, name in zip(cols, views):
            if col.button(f"Open {name} view", key=f"admin_to_{name}"):
                session.navigate(name)

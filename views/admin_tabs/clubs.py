import streamlit as st

from services import organizations, session
from ui.components import call_api, status_badge
from utils.validation import slugify


def render_clubs_tab():
    """Lists every club on the platform and lets admins create or deactivate them."""
    st.subheader("🏛️ Clubs")
    client = session.client()

    with st.expander("➕ New club"):
        with st.form("new_club", clear_on_submit=True):
            name = st.text_input("Club name")
            slug = st.text_input("Slug", help="Leave blank to generate one from the name")
            submitted = st.form_submit_button("Create club", type="primary")
        if submitted:
            ok, _ = call_api(organizations.create_club, client, name, slug.strip() or slugify(name),
                             success=f"Created {name.strip()}")
            if ok:
                st.rerun()

    ok, clubs = call_api(organizations.list_clubs, client)
    if not ok:
        return
    if not clubs:
        st.info("No clubs yet.")
        return

    for club in clubs:
        cols = st.columns([4, 3, 2, 2])
        default = " (default)" if club.is_default else ""
        cols[0].markdown(f"**{club.name}**{default}")
        cols[1].code(club.slug)
        cols[2].markdown(status_badge("active" if club.active else "inactive"), unsafe_allow_html=True)
        if not club.is_default and cols[3].button("Deactivate" if club.active else "Activate",
                                                  key=f"club_toggle_{club.id}"):
            ok, _ = call_api(organizations.set_club_active, client, club, not club.active)
            if ok:
                st.rerun()

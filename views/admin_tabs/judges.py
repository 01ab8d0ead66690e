import streamlit as st

from domain.constants import JUDGE_ROLE_OPTIONS
from services import auditions as audition_svc, session
from ui.components import call_api, status_badge


def render_judges_tab():
    """Judge and e-board accounts: add, activate and remove."""
    st.subheader("⚖️ Judges")
    client = session.client()

    with st.expander("➕ Add judge"):
        with st.form("new_judge", clear_on_submit=True):
            name = st.text_input("Name")
            email = st.text_input("Email")
            role = st.selectbox("Role", JUDGE_ROLE_OPTIONS)
            position = st.text_input("Position", help="e.g. Level 2 Coordinator")
            submitted = st.form_submit_button("Add judge", type="primary")
        if submitted:
            ok, _ = call_api(audition_svc.create_judge, client, name, email, role, position,
                             success=f"Added {name.strip()}")
            if ok:
                st.rerun()

    ok, judges = call_api(audition_svc.list_judges, client)
    if not ok:
        return
    if not judges:
        st.info("No judges yet.")
        return

    for j in judges:
        cols = st.columns([3, 3, 2, 1, 1])
        cols[0].markdown(f"**{j.name}**<br><small>{j.position or j.role}</small>", unsafe_allow_html=True)
        cols[1].write(j.email)
        cols[2].markdown(status_badge("active" if j.active else "inactive"), unsafe_allow_html=True)
        if cols[3].button("Deactivate" if j.active else "Activate", key=f"judge_toggle_{j.id}"):
            ok, _ = call_api(audition_svc.set_judge_active, client, j.id, not j.active)
            if ok:
                st.rerun()
        if cols[4].button("🗑️", key=f"judge_del_{j.id}", help=f"Delete {j.name}"):
            ok, _ = call_api(audition_svc.delete_judge, client, j.id, success=f"Deleted {j.name}")
            if ok:
                st.rerun()

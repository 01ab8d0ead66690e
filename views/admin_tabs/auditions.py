import streamlit as st

from domain.constants import AUDITION_STATUSES
from services import auditions as audition_svc, session
from services.api import ApiClient
from ui.components import call_api, status_badge
from utils.dates import format_date
from utils.qr import registration_url


@st.cache_data(ttl=120)
def cached_auditions(token):
    """Audition list, cached for two minutes per login."""
    return audition_svc.list_auditions(ApiClient(token=token))


def refresh_auditions():
    cached_auditions.clear()


def _render_create():
    with st.expander("➕ New audition"):
        with st.form("new_audition", clear_on_submit=True):
            name = st.text_input("Audition name")
            date = st.date_input("Date")
            submitted = st.form_submit_button("Create audition", type="primary")
        if submitted:
            ok, _ = call_api(audition_svc.create_audition, session.client(), name, date,
                             success="Audition created!")
            if ok:
                refresh_auditions()
                st.rerun()


def render_auditions_tab():
    """List auditions with status controls, archive and delete."""
    st.subheader("🎭 Auditions")
    _render_create()

    ok, auditions = call_api(cached_auditions, session.token())
    if not ok:
        return
    if not auditions:
        st.info("No auditions yet. Create one to get started.")
        return

    client = session.client()
    for a in auditions:
        with st.container(border=True):
            top = st.columns([4, 2, 2])
            top[0].markdown(f"**{a.name}**<br><small>{format_date(a.date)} · {a.dancer_count} dancers</small>",
                            unsafe_allow_html=True)
            top[1].markdown(status_badge(a.status), unsafe_allow_html=True)
            if top[2].button("Open", key=f"open_aud_{a.id}"):
                session.navigate("audition", audition=a.id)

            st.caption(f"Registration link: {registration_url(a.id)}")
            c1, c2, c3 = st.columns([3, 1, 1])
            choices = list(AUDITION_STATUSES)
            new_status = c1.selectbox("Status", choices, index=choices.index(a.status)
                                      if a.status in choices else 0, key=f"status_{a.id}")
            if new_status != a.status and c2.button("Apply", key=f"apply_{a.id}"):
                ok, _ = call_api(audition_svc.set_audition_status, client, a.id, new_status,
                                 success=f"Audition {'archived' if new_status == 'archived' else 'updated'}")
                if ok:
                    refresh_auditions()
                    st.rerun()
            confirm = c3.checkbox("Confirm delete", key=f"confirm_del_{a.id}")
            if confirm and c3.button("Delete", key=f"del_aud_{a.id}"):
                ok, _ = call_api(audition_svc.delete_audition, client, a.id,
                                 success=f"Deleted {a.name}")
                if ok:
                    refresh_auditions()
                    st.rerun()

    st.divider()
    st.markdown("**Export results**")
    e1, e2 = st.columns(2)
    for col, fmt, mime, fname in (
        (e1, "csv", "text/csv", "dancescore-results.csv"),
        (e2, "excel", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
         "dancescore-results.xlsx"),
    ):
        if col.button(f"Prepare {fmt.upper()}", key=f"export_{fmt}"):
            ok, content = call_api(audition_svc.export_results, client, fmt)
            if ok:
                col.download_button(f"Download {fmt.upper()}", content, file_name=fname, mime=mime)

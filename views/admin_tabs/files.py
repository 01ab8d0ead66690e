import streamlit as st

from services import admin as admin_svc, session
from ui.components import call_api
from utils.dates import format_datetime
from utils.formatting import format_file_size

_CATEGORIES = {"all": "All files", "videos": "Videos", "makeup": "Make-up work"}


def render_files_tab():
    st.subheader("🗂️ Files")
    client = session.client()
    ok, files = call_api(admin_svc.list_files, client)
    if not ok:
        return

    category = st.radio("Show", list(_CATEGORIES), horizontal=True, format_func=_CATEGORIES.get,
                        key="files_category")
    items = files[category]
    total = sum(i.size for i in items)
    st.caption(f"{len(items)} files · {format_file_size(total)}")
    if not items:
        st.info("No files stored.")
        return

    for item in items:
        cols = st.columns([5, 2, 2, 1])
        cols[0].markdown(f"{admin_svc.file_icon(item)} **{item.name}**<br>"
                         f"<small>{format_datetime(item.created_at)}</small>", unsafe_allow_html=True)
        cols[1].write(format_file_size(item.size))
        url = admin_svc.download_url(item, session.token())
        if url:
            cols[2].link_button("Download", url)
        if cols[3].button("🗑️", key=f"file_del_{item.type}_{item.id}", help=f"Delete {item.name}"):
            ok, _ = call_api(admin_svc.delete_file, client, item, success=f"Deleted {item.name}")
            if ok:
                st.rerun()

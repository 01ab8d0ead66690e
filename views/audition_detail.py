import pandas as pd
import streamlit as st

from services import auditions as audition_svc, session
from ui.components import call_api, club_header, status_badge
from ui.components import dancer_form
from utils.dates import format_date, format_datetime


def _audition_id(client):
    audition_id = st.query_params.get("audition")
    if audition_id:
        return audition_id
    current = audition_svc.current_audition(audition_svc.list_auditions(client))
    return current.id if current else None


def _render_dancer_table(dancers):
    if not dancers:
        st.info("No dancers registered for this audition yet.")
        return
    frame = pd.DataFrame([{
        "#": d.audition_number, "Name": d.name, "Group": d.group,
        "Average": round(d.average_score, 2), "Rank": d.rank, "Judges": len(d.scores),
        "Hidden": d.hidden,
    } for d in dancers]).sort_values("Average", ascending=False)
    st.dataframe(frame, hide_index=True, use_container_width=True)


def _render_manage_dancers(client, audition_id, dancers):
    with st.expander("➕ Add dancer"):
        result = dancer_form.render({}, f"add_dancer_{audition_id}", submit_label="Add dancer")
        if result:
            form, _ = result
            ok, _ = call_api(audition_svc.add_dancer, client, audition_id, form,
                             success=f"Added {form['name']}")
            if ok:
                st.rerun()

    with st.expander("📤 Upload roster (CSV / Excel)"):
        upload = st.file_uploader("Roster file", type=["csv", "xlsx", "xls"], key="roster_upload")
        if st.button("Upload roster", disabled=upload is None):
            ok, result = call_api(audition_svc.upload_dancers, client, upload.name, upload.getvalue())
            if ok:
                st.success(f"Imported {result['count']} dancers")
                for warning in result["warnings"]:
                    st.warning(warning)

    if not dancers:
        return
    with st.expander("👥 Groups and visibility"):
        for d in dancers:
            cols = st.columns([4, 2, 1, 1, 1])
            cols[0].markdown(f"**#{d.audition_number}** {d.name}")
            group = cols[1].text_input("Group", value=d.group, key=f"group_{d.id}", label_visibility="collapsed")
            if cols[2].button("Save", key=f"group_save_{d.id}"):
                ok, formatted = call_api(audition_svc.assign_group, client, d.id, group)
                if ok:
                    session.flash(f"{d.name} moved to {formatted}")
                    st.rerun()
            if cols[3].button("Show" if d.hidden else "Hide", key=f"detail_hide_{d.id}"):
                ok, _ = call_api(audition_svc.set_dancer_hidden, client, d.id, not d.hidden)
                if ok:
                    st.rerun()
            if cols[4].button("🗑️", key=f"detail_del_{d.id}", help=f"Delete {d.name}"):
                ok, _ = call_api(audition_svc.delete_dancer, client, d.id, success=f"Deleted {d.name}")
                if ok:
                    st.rerun()


def _render_videos(client, audition_id):
    ok, videos = call_api(audition_svc.list_videos, client, audition_id)
    if not ok:
        return
    if not videos:
        st.caption("No videos uploaded yet.")
        return
    for v in videos:
        cols = st.columns([5, 2, 1])
        cols[0].markdown(f"🎥 **{v.get('group', '')}**<br><small>{v.get('description', '')}</small>",
                         unsafe_allow_html=True)
        cols[1].caption(format_datetime(v.get("recordedAt") or v.get("createdAt")))
        if cols[2].button("🗑️", key=f"video_del_{v.get('id')}"):
            ok, _ = call_api(audition_svc.delete_video, client, v.get("id"), success="Video deleted")
            if ok:
                st.rerun()


def view():
    client = session.client()
    ok, audition_id = call_api(_audition_id, client)
    if not ok:
        return
    if not audition_id:
        st.info("No audition selected.")
        return
    ok, details = call_api(audition_svc.get_audition, client, audition_id)
    if not ok:
        return

    name = details.get("name") or "Audition"
    status = details.get("status") or "draft"
    club_header(name, format_date(details.get("date")))
    st.markdown(status_badge(status), unsafe_allow_html=True)

    c1, c2, c3, c4 = st.columns(4)
    if status != "active" and c1.button("Activate"):
        ok, _ = call_api(audition_svc.set_audition_status, client, audition_id, "active",
                         success="Audition is now active")
        if ok:
            st.rerun()
    if c2.button("Start deliberations"):
        session.navigate("deliberations", audition=audition_id)
    if status == "active" and c3.button("Complete deliberations"):
        ok, _ = call_api(audition_svc.complete_deliberations, client, audition_id,
                         success="Deliberations completed! Dancers were added to the club.")
        if ok:
            st.rerun()
    if c4.button("QR code PDF"):
        ok, pdf = call_api(audition_svc.qr_code_pdf, client, audition_id, name)
        if ok:
            c4.download_button("Download PDF", pdf, file_name=f"{name}-qr-codes.pdf", mime="application/pdf")

    ok, dancers = call_api(audition_svc.dancers_with_scores, client, audition_id)
    if not ok:
        return
    st.subheader(f"Dancers ({len(dancers)})")
    _render_dancer_table(dancers)
    _render_manage_dancers(client, audition_id, dancers)

    st.subheader("Videos")
    if st.button("🎥 Record group videos"):
        session.navigate("recording", audition=audition_id)
    _render_videos(client, audition_id)

    if st.button("← Back to admin dashboard"):
        session.navigate("admin")

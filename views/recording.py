import streamlit as st

from services import auditions as audition_svc, session
from ui.components import call_api, club_header
from utils.dates import format_datetime

VIDEO_TYPES = ["mp4", "mov", "webm"]


def _render_group_videos(client, audition_id, group):
    ok, videos = call_api(audition_svc.list_videos, client, audition_id)
    if not ok:
        return
    videos = audition_svc.videos_for_group(videos, group)
    st.subheader(f"Videos for {group}")
    if not videos:
        st.caption("No videos recorded for this group yet.")
        return
    for v in videos:
        with st.container(border=True):
            st.markdown(f"🎥 **{v.get('description') or group}**")
            st.caption(format_datetime(v.get("recordedAt") or v.get("createdAt")))
            if v.get("url"):
                st.video(v["url"])


def view():
    """Record or upload one video per audition group."""
    client = session.client()
    audition_id = st.query_params.get("audition")
    if not audition_id:
        st.info("No audition selected.")
        return

    def _load():
        return (audition_svc.get_audition(client, audition_id),
                audition_svc.dancers_with_scores(client, audition_id))

    ok, data = call_api(_load)
    if not ok:
        return
    details, dancers = data
    club_header("Record Audition Video", details.get("name") or "")

    groups = audition_svc.recording_groups(dancers)
    if not groups:
        st.info("No groups yet. Assign dancers to groups on the audition page first.")
    else:
        default = audition_svc.recording_group(groups, st.query_params.get("group"))
        group = st.radio("Select group to record", groups, index=groups.index(default),
                         horizontal=True, key="recording_group")
        group_dancers = audition_svc.dancers_in_group(dancers, group, limit=None)
        st.markdown(f"**Dancers in {group}:** " +
                    ", ".join(f"#{d.audition_number} - {d.name}" for d in group_dancers))

        # Recorded on the device camera, then picked from the camera roll
        upload = st.file_uploader("Record or choose a video", type=VIDEO_TYPES, key=f"recording_{group}")
        if upload is not None:
            st.video(upload)
        if st.button("Upload video", type="primary", disabled=upload is None):
            with st.spinner("Uploading..."):
                ok, _ = call_api(audition_svc.upload_video, client, audition_id, group, group_dancers,
                                 upload.name, upload.getvalue(), upload.type,
                                 success="Video uploaded successfully!")
            if ok:
                st.rerun()

        _render_group_videos(client, audition_id, group)

    if st.button("← Back to audition"):
        session.navigate("audition", audition=audition_id)

import streamlit as st

from domain.constants import SCORE_CATEGORIES
from services import access, auditions as audition_svc, rubric, session
from ui.components import club_header, call_api, status_badge


def _load():
    client = session.client()
    dancers = audition_svc.list_dancers(client)
    return {
        "dancers": dancers,
        "format": audition_svc.scoring_format(client),
        "audition": next((a for a in audition_svc.list_auditions(client) if a.status == "active"), None),
        "permissions": audition_svc.user_permissions(client),
    }


def _score_inputs(dancer, fmt, status, disabled):
    """One widget per category in the club's scoring format; returns {category: score}."""
    scores = {}
    cols = st.columns(3)
    for i, cat in enumerate(SCORE_CATEGORIES):
        maximum = float(rubric.max_score(cat))
        current = float(status.scores.get(cat, 0.0))
        key = f"score_{dancer.id}_{cat}"
        with cols[i % 3]:
            if fmt == "checkbox":
                _, criteria = rubric.RUBRIC_CRITERIA[cat]
                saved = set(rubric.criteria_for_score(cat, current))
                for cid, _, _ in criteria:
                    st.session_state.setdefault(f"{key}_{cid}", cid in saved)
                st.markdown(f"**{cat.capitalize()}** (max {maximum:g})")
                checked = [cid for cid, label, weight in criteria
                           if st.checkbox(f"{label} (+{weight:g})", key=f"{key}_{cid}", disabled=disabled)]
                value = rubric.score_from_checkboxes(cat, checked)
                if disabled and not checked:
                    value = current
                st.caption(f"Score: {value:g}")
            elif fmt == "input":
                value = st.number_input(cat.capitalize(), 0.0, maximum, current, step=0.5,
                                        key=key, disabled=disabled)
            else:
                value = st.slider(cat.capitalize(), 0.0, maximum, current, step=0.5,
                                  key=key, disabled=disabled)
        scores[cat] = value
    return scores


def _render_dancer(dancer, fmt, can_hide):
    client = session.client()
    status = audition_svc.submission_status(client, dancer.id)
    with st.container(border=True):
        top = st.columns([4, 2, 2])
        hidden = " 🙈" if dancer.hidden else ""
        top[0].markdown(f"### #{dancer.audition_number} {dancer.name}{hidden}")
        top[1].markdown(status_badge("completed" if status.submitted else "pending"),
                        unsafe_allow_html=True)
        if can_hide and top[2].button("Show" if dancer.hidden else "Hide", key=f"hide_{dancer.id}"):
            ok, _ = call_api(audition_svc.set_dancer_hidden, client, dancer.id, not dancer.hidden,
                             success=f"Dancer {'shown' if dancer.hidden else 'hidden'} successfully")
            if ok:
                st.rerun()

        scores = _score_inputs(dancer, fmt, status, disabled=status.submitted)
        total = sum(scores.values())
        st.caption(f"Total: {total:.1f} / {rubric.TOTAL_POSSIBLE:g}")
        comments = st.text_area("Comments", value=status.comments, key=f"comments_{dancer.id}",
                                disabled=status.submitted)

        if status.submitted:
            if st.button("Unsubmit", key=f"unsubmit_{dancer.id}"):
                ok, _ = call_api(audition_svc.unsubmit_scores, client, dancer.id,
                                 success="Scores unlocked! You can now edit and resubmit.")
                if ok:
                    st.rerun()
        elif st.button("Submit scores", key=f"submit_{dancer.id}", type="primary"):
            ok, _ = call_api(audition_svc.submit_scores, client, dancer.id, scores, comments,
                             success=f"Scores submitted for {dancer.name}!")
            if ok:
                st.rerun()


def _render_video_upload(audition, group, group_dancers):
    with st.expander("🎥 Upload group video"):
        upload = st.file_uploader("Video", type=["mp4", "mov", "webm"], key=f"video_{group}")
        if st.button("Upload video", disabled=upload is None):
            with st.spinner("Uploading..."):
                ok, _ = call_api(audition_svc.upload_video, session.client(), audition.id, group,
                                 group_dancers, upload.name, upload.getvalue(), upload.type,
                                 success="Video uploaded successfully!")
            if ok:
                st.rerun()


def view():
    user = session.current_user()
    club_header("Judge Dashboard", f"Signed in as {user.name}")
    with st.spinner("Loading dancers..."):
        ok, data = call_api(_load)
    if not ok:
        return

    can_hide = access.can_hide_dancers(user) or bool(data["permissions"].get("canHideDancers"))
    dancers = data["dancers"] if can_hide else [d for d in data["dancers"] if not d.hidden]
    audition = data["audition"]
    if audition:
        st.caption(f"Current audition: **{audition.name}**")

    groups = audition_svc.groups_of(dancers)
    if not groups:
        st.info("No dancers have been registered yet.")
        return
    group = st.selectbox("Group", groups, key="judge_group")
    group_dancers = audition_svc.dancers_in_group(dancers, group)

    for dancer in group_dancers:
        _render_dancer(dancer, data["format"], can_hide)

    if audition and group_dancers:
        _render_video_upload(audition, group, group_dancers)

    if access.is_coordinator(user) and st.button("Switch to coordinator view"):
        session.navigate("coordinator")

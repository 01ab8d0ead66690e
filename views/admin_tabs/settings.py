import streamlit as st

from domain.constants import RESET_CONFIRMATION_PHRASE, SCORING_FORMATS
from services import admin as admin_svc, session
from ui.components import call_api
from views.admin_tabs.auditions import refresh_auditions

_FORMAT_LABELS = {"slider": "Sliders", "input": "Number inputs", "checkbox": "Rubric checkboxes"}


def _field(section, name, value):
    """Widget matching the type of the stored value."""
    key = f"setting_{section}_{name}"
    if isinstance(value, bool):
        return st.checkbox(name, value=value, key=key)
    if isinstance(value, int):
        return int(st.number_input(name, value=value, step=1, key=key))
    if isinstance(value, float):
        return float(st.number_input(name, value=value, step=0.1, key=key))
    if isinstance(value, list):
        raw = st.text_input(name, value=", ".join(str(v) for v in value), key=key)
        return [v.strip() for v in raw.split(",") if v.strip()]
    return st.text_input(name, value=str(value or ""), key=key)


def _render_sections(client, settings):
    for section, title in admin_svc.SECTION_TITLES.items():
        with st.expander(title):
            with st.form(f"settings_{section}"):
                values = {name: _field(section, name, value) for name, value in settings[section].items()}
                saved = st.form_submit_button("Save")
            if saved:
                ok, _ = call_api(admin_svc.update_settings, client, {section: values},
                                 success=f"{title} settings saved")
                if ok:
                    st.rerun()


def _render_custom_texts(client, settings):
    with st.expander("Custom texts"):
        with st.form("custom_texts"):
            texts = {k: st.text_input(k, value=v, key=f"text_{k}") for k, v in settings["customTexts"].items()}
            saved = st.form_submit_button("Save texts")
        if saved:
            ok, _ = call_api(admin_svc.update_settings, client, {"customTexts": texts}, success="Texts saved")
            if ok:
                st.rerun()


def _render_danger_zone(client):
    st.markdown("### ⚠️ Danger zone")
    st.caption("These actions cannot be undone.")
    c1, c2 = st.columns(2)
    with c1:
        if st.checkbox("I understand all club members will be deleted", key="confirm_clear_members") and \
                st.button("Clear club members"):
            call_api(admin_svc.clear_club_members, client, success="All club members cleared")
    with c2:
        if st.checkbox("I understand all auditions will be deleted", key="confirm_clear_auditions") and \
                st.button("Clear auditions"):
            ok, _ = call_api(admin_svc.clear_auditions, client, success="All auditions cleared")
            if ok:
                refresh_auditions()

    phrase = st.text_input(f'Type "{RESET_CONFIRMATION_PHRASE}" to wipe all club data', key="reset_phrase")
    if st.button("Full database reset", type="primary"):
        ok, _ = call_api(admin_svc.reset_database, client, phrase, success="Database reset complete")
        if ok:
            refresh_auditions()


def render_settings_tab():
    """Scoring format, editable texts, per-section settings, email check and cleanup tools."""
    st.subheader("⚙️ Settings")
    client = session.client()
    ok, settings = call_api(admin_svc.get_settings, client)
    if not ok:
        return

    c1, c2 = st.columns(2)
    current = settings["scoringFormat"]
    fmt = c1.selectbox("Scoring format", SCORING_FORMATS, format_func=_FORMAT_LABELS.get,
                       index=SCORING_FORMATS.index(current) if current in SCORING_FORMATS else 0)
    if fmt != current:
        ok, _ = call_api(admin_svc.set_scoring_format, client, fmt, success="Scoring format updated")
        if ok:
            st.rerun()
    edit_mode = c2.toggle("Edit mode", value=settings["editMode"],
                          help="Lets admins edit labels in place on dancer pages")
    if edit_mode != settings["editMode"]:
        ok, _ = call_api(admin_svc.update_settings, client, {"editMode": edit_mode})
        if ok:
            st.rerun()

    _render_custom_texts(client, settings)
    _render_sections(client, settings)

    st.markdown("### ✉️ Email")
    if st.button("Test email configuration"):
        with st.spinner("Checking..."):
            result = admin_svc.test_email_config(client)
        (st.success if result["success"] else st.error)(result["message"])

    st.divider()
    _render_danger_zone(client)

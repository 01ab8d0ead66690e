import streamlit as st

from services import registration, session
from ui.components import club_header, call_api, dancer_form


def _load(audition_id):
    """Audition name and questions, fetched once per audition."""
    cache_key = f"registration_{audition_id or 'open'}"
    if cache_key not in st.session_state:
        client = session.client()
        questions = registration.form_questions(client, audition_id) if audition_id else []
        st.session_state[cache_key] = {
            "club": registration.club_name(client),
            "audition": registration.audition_name(client, audition_id) if audition_id else "",
            "questions": questions,
            "responses": registration.initial_responses(questions),
        }
    return st.session_state[cache_key]


def view():
    audition_id = st.query_params.get("audition")
    with st.spinner("Loading registration form..."):
        data = _load(audition_id)
    club_header(data["club"], "Dancer Registration")
    if data["audition"]:
        st.markdown(f"#### {data['audition']}")

    done = st.session_state.get("registration_done")
    if done:
        st.success("Registration Complete!")
        with st.container(border=True):
            st.markdown(f"**Name:** {done['name']}")
            st.markdown(f"**Audition Number:** #{done['auditionNumber']}")
            st.markdown(f"**Group:** {done['group']}")
        st.info("Please wait for staff to call your group. Good luck!")
        if st.button("Register another dancer"):
            st.session_state.pop("registration_done", None)
            st.rerun()
        return

    result = dancer_form.render({}, "register", data["questions"], data["responses"])
    if result is None:
        return
    form, responses = result
    data["responses"] = responses
    with st.spinner("Submitting registration..."):
        ok, info = call_api(registration.register, session.client(), form, audition_id,
                            data["questions"], responses)
    if ok:
        st.session_state.registration_done = info
        st.rerun()

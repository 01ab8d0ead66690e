import streamlit as st
from typing import Any, Dict, List, Optional, Tuple

from domain.constants import LEVELS, SHIRT_SIZES
from domain.models import FormQuestion

_NONE = "—"


def _question_input(q: FormQuestion, key_prefix: str, current: Any):
    label = f"{q.text}{' *' if q.required else ''}"
    key = f"{key_prefix}_q_{q.id}"
    if q.type == "consent":
        return st.checkbox(label, value=bool(current), key=key)
    if q.type == "yesno":
        return st.toggle(label, value=bool(current), key=key)
    if q.type == "multiplechoice" and q.options:
        options = [_NONE] + q.options
        idx = options.index(current) if current in options else 0
        choice = st.radio(label, options, index=idx, key=key, horizontal=True)
        return "" if choice == _NONE else choice
    return st.text_input(label, value=current or "", key=key)


def render(dancer_data: Dict[str, Any], key_prefix: str, questions: Optional[List[FormQuestion]] = None,
           responses: Optional[Dict[str, Any]] = None,
           submit_label: str = "Register") -> Optional[Tuple[Dict[str, str], Dict[str, Any]]]:
    """
    Renders the dancer information form used by self-registration and by staff
    adding a dancer to an audition.

    Args:
        dancer_data: Values to pre-fill (camelCase keys as the API expects).
        key_prefix: A unique prefix for Streamlit widget keys.
        questions: Extra audition questions to append, already ordered.
        responses: Current answers to those questions.

    Returns:
        (form values, question responses) when submitted, otherwise None.
    """
    questions = questions or []
    responses = dict(responses or {})
    with st.form(f"form_{key_prefix}"):
        name = st.text_input("Full name *", value=dancer_data.get("name", ""), key=f"{key_prefix}_name")
        audition_number = st.text_input("Audition number *", value=dancer_data.get("auditionNumber", ""),
                                        key=f"{key_prefix}_number")
        c1, c2 = st.columns(2)
        email = c1.text_input("Email *", value=dancer_data.get("email", ""), key=f"{key_prefix}_email")
        phone = c2.text_input("Phone *", value=dancer_data.get("phone", ""), key=f"{key_prefix}_phone")

        sizes = [_NONE] + SHIRT_SIZES
        size_idx = sizes.index(dancer_data["shirtSize"]) if dancer_data.get("shirtSize") in sizes else 0
        shirt_size = st.selectbox("Shirt size *", sizes, index=size_idx, key=f"{key_prefix}_shirt")

        prev_options = [_NONE, "yes", "no"]
        prev_idx = prev_options.index(dancer_data["previousMember"]) \
            if dancer_data.get("previousMember") in prev_options else 0
        previous_member = st.radio("Were you a member last season? *", prev_options, index=prev_idx,
                                   format_func=lambda o: o.capitalize() if o != _NONE else o,
                                   horizontal=True, key=f"{key_prefix}_prev")
        levels = [_NONE] + LEVELS
        level_idx = levels.index(dancer_data["previousLevel"]) if dancer_data.get("previousLevel") in levels else 0
        previous_level = st.selectbox("Previous level (if returning)", levels, index=level_idx,
                                      key=f"{key_prefix}_prev_level")

        if questions:
            st.markdown("**Additional questions**")
            for q in questions:
                responses[q.id] = _question_input(q, key_prefix, responses.get(q.id))

        submitted = st.form_submit_button(submit_label, type="primary")

    if not submitted:
        return None
    form = {
        "name": name.strip(),
        "auditionNumber": audition_number.strip(),
        "email": email.strip(),
        "phone": phone.strip(),
        "shirtSize": "" if shirt_size == _NONE else shirt_size,
        "previousMember": "" if previous_member == _NONE else previous_member,
        "previousLevel": "" if previous_level == _NONE else previous_level,
    }
    return form, responses

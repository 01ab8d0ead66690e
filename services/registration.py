"""Public dancer registration for an audition."""
from typing import Any, Dict, List, Optional

from domain.constants import DEFAULT_CLUB_NAME, UNASSIGNED_GROUP
from domain.models import FormQuestion, form_question_from_dict
from services.api import ApiClient, ApiError
from utils.log import get_logger

logger = get_logger("registration")

REQUIRED_FIELDS = ["name", "auditionNumber", "email", "phone", "shirtSize", "previousMember"]


def club_name(client: ApiClient) -> str:
    try:
        data = client.get("/api/appearance")
    except ApiError as e:
        logger.warning("could not load appearance settings: %s", e)
        return DEFAULT_CLUB_NAME
    return data.get("clubName") or DEFAULT_CLUB_NAME


def audition_name(client: ApiClient, audition_id: str) -> str:
    try:
        return client.get(f"/api/auditions/{audition_id}/public").get("name", "")
    except ApiError as e:
        logger.warning("could not load audition %s: %s", audition_id, e)
        return ""


def form_questions(client: ApiClient, audition_id: str) -> List[FormQuestion]:
    try:
        data = client.get(f"/api/auditions/{audition_id}/form-questions")
    except ApiError as e:
        logger.warning("could not load form questions for %s: %s", audition_id, e)
        return []
    questions = [form_question_from_dict(q) for q in data or []]
    return sorted(questions, key=lambda q: q.order)


def initial_responses(questions: List[FormQuestion]) -> Dict[str, Any]:
    """Checkbox-style questions start unchecked."""
    return {q.id: False for q in questions if q.type in ("consent", "yesno")}


def registration_error(form: Dict[str, str], questions: List[FormQuestion],
                       responses: Dict[str, Any]) -> Optional[str]:
    if any(not (form.get(k) or "").strip() for k in REQUIRED_FIELDS):
        return "All fields are required"
    if form.get("previousMember") == "yes" and not form.get("previousLevel"):
        return "Please select your previous level"
    missing = [q.text for q in questions if q.required and not responses.get(q.id)]
    if missing:
        return f"Please answer all required questions: {', '.join(missing)}"
    return None


def register(client: ApiClient, form: Dict[str, str], audition_id: Optional[str],
             questions: List[FormQuestion], responses: Dict[str, Any]) -> Dict[str, Any]:
    """Submit the registration; returns the confirmation shown to the dancer."""
    error = registration_error(form, questions, responses)
    if error:
        raise ValueError(error)
    data = client.post("/api/register", json={
        **form,
        "auditionId": audition_id or None,
        "formResponses": responses,
    }, fallback="Registration failed. Please try again or see staff.")
    dancer = data.get("dancer") or {}
    return {
        "name": form["name"],
        "auditionNumber": form["auditionNumber"],
        "group": dancer.get("group") or UNASSIGNED_GROUP,
    }

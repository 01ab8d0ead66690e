import pytest

from domain.models import FormQuestion
from services import organizations, registration
from services.api import ApiError
from tests.conftest import FakeClient


def valid_form(**overrides):
    form = {
        "name": "Riley", "auditionNumber": "42", "email": "riley@club.test", "phone": "555-0100",
        "shirtSize": "M", "previousMember": "no", "previousLevel": "",
    }
    form.update(overrides)
    return form


def test_registration_error_order():
    consent = FormQuestion(id="q1", text="Photo consent", type="consent", required=True)
    assert registration.registration_error(valid_form(phone=""), [], {}) == "All fields are required"
    assert registration.registration_error(valid_form(previousMember="yes"), [], {}) == \
        "Please select your previous level"
    assert registration.registration_error(valid_form(), [consent], {"q1": False}) == \
        "Please answer all required questions: Photo consent"
    assert registration.registration_error(valid_form(), [consent], {"q1": True}) is None


def test_register_returns_confirmation_with_group():
    client = FakeClient({("POST", "/api/register"): {"dancer": {"group": "Group 3"}}})
    result = registration.register(client, valid_form(), "a1", [], {})
    assert result == {"name": "Riley", "auditionNumber": "42", "group": "Group 3"}
    assert client.sent("POST", "/api/register")["auditionId"] == "a1"


def test_form_questions_sorted_and_errors_tolerated():
    client = FakeClient({("GET", "/api/auditions/a1/form-questions"): [
        {"id": "b", "question": "Second", "order": 2}, {"id": "a", "text": "First", "order": 1},
    ]})
    assert [q.text for q in registration.form_questions(client, "a1")] == ["First", "Second"]
    failing = FakeClient({("GET", "/api/auditions/a1/form-questions"): ApiError("boom", status=500)})
    assert registration.form_questions(failing, "a1") == []


def test_initial_responses_only_for_checkbox_questions():
    questions = [FormQuestion(id="c", text="Consent", type="consent"),
                 FormQuestion(id="t", text="Why?", type="text")]
    assert registration.initial_responses(questions) == {"c": False}


def test_club_name_falls_back_to_default():
    client = FakeClient({("GET", "/api/appearance"): ApiError("down")})
    assert registration.club_name(client) == "MSU Dance Club"


def signup_form(**overrides):
    form = {
        "organization_name": "River Dance", "organization_slug": "river-dance",
        "admin_name": "Sam", "admin_email": "Sam@Club.test",
        "admin_password": "secret1", "confirm_password": "secret1",
    }
    form.update(overrides)
    return form


@pytest.mark.parametrize("overrides,message", [
    ({"organization_name": " "}, "Organization name is required"),
    ({"organization_slug": "bad slug"}, "Organization slug can only contain"),
    ({"organization_slug": "MyClub"}, "Organization slug can only contain"),
    ({"admin_email": "sam"}, "Please enter a valid email address"),
    ({"admin_password": "abc", "confirm_password": "abc"}, "Password must be at least 6 characters"),
    ({"confirm_password": "other1"}, "Passwords do not match"),
])
def test_signup_error(overrides, message):
    assert organizations.signup_error(signup_form(**overrides)).startswith(message)


def test_signup_trims_slug_and_lowercases_email():
    client = FakeClient({("POST", "/api/organizations/signup"): {"token": "t"}})
    organizations.signup(client, signup_form(organization_slug=" river-dance "))
    body = client.sent("POST", "/api/organizations/signup")
    assert body["organizationSlug"] == "river-dance"
    assert body["adminEmail"] == "sam@club.test"
    assert body["adminPosition"] == "President"


def test_list_clubs_forbidden_message():
    client = FakeClient({("GET", "/api/clubs/all"): ApiError("nope", status=403)})
    with pytest.raises(ApiError, match="Admin only"):
        organizations.list_clubs(client)

import pytest

from services import auth
from services.api import ApiError
from tests.conftest import FakeClient

CLUB = "test-club"
POLICY = ("GET", f"/api/auth/verification-required/{CLUB}")
SEND = ("POST", "/api/auth/send-verification-code")
VERIFY = ("POST", "/api/auth/verify-code")
LOGIN = ("POST", "/api/auth/login")


def login_response(**user):
    base = {"id": "u1", "email": "jamie@club.test", "role": "judge", "name": "Jamie"}
    base.update(user)
    return {"token": "tok", "user": base}


def make_wizard(role_type="eboard"):
    wizard = auth.LoginWizard(club_id=CLUB)
    assert wizard.choose_role(role_type) is None
    return wizard


def test_dancer_role_redirects_to_dancer_login():
    wizard = auth.LoginWizard(club_id=CLUB)
    assert wizard.choose_role("dancer") == "dancer_login"
    assert wizard.step == "role"


def test_login_without_verification_goes_straight_to_single_view():
    client = FakeClient({POLICY: {"requireVerification": False}, LOGIN: login_response()})
    wizard = make_wizard()
    wizard.submit_credentials(client, " jamie@club.test ", "secret1")
    assert wizard.step == "done"
    assert wizard.destination == "judge"
    assert wizard.email == "jamie@club.test"
    assert wizard.user.name == "Jamie"


def test_verification_step_sets_countdown():
    client = FakeClient({
        POLICY: {"requireVerification": True, "emailConfigured": True},
        SEND: {"success": True, "expiresIn": 300},
    })
    wizard = make_wizard()
    wizard.submit_credentials(client, "jamie@club.test", "secret1", now=1000.0)
    assert wizard.step == "verify"
    assert wizard.seconds_remaining(now=1100.0) == 200
    assert wizard.seconds_remaining(now=2000.0) == 0
    assert client.sent(*SEND)["userType"] == "eboard"


def test_policy_lookup_failure_means_no_verification():
    client = FakeClient({POLICY: ApiError("down", status=500), LOGIN: login_response()})
    wizard = make_wizard()
    wizard.submit_credentials(client, "jamie@club.test", "secret1")
    assert wizard.step == "done"


def test_invalid_code_returns_to_credentials():
    client = FakeClient({VERIFY: {"success": True, "verified": False}})
    wizard = make_wizard()
    wizard.email, wizard.step = "jamie@club.test", "verify"
    with pytest.raises(ValueError, match="Invalid verification code"):
        wizard.submit_code(client, "123456")
    assert wizard.step == "credentials"


def test_short_code_is_rejected_before_calling_server():
    client = FakeClient()
    wizard = make_wizard()
    with pytest.raises(ValueError, match="6-digit"):
        wizard.submit_code(client, "123")
    assert client.calls == []


def test_verified_code_requiring_password_change():
    client = FakeClient({
        VERIFY: {"success": True, "verified": True, "requiresPasswordChange": True},
        LOGIN: login_response(),
    })
    wizard = make_wizard()
    wizard.email, wizard.password, wizard.step = "jamie@club.test", "secret1", "verify"
    wizard.submit_code(client, "654321")
    assert wizard.step == "password"
    wizard.password_changed()
    assert wizard.step == "done"
    assert wizard.auth["user"]["requiresPasswordChange"] is False


def test_admin_login_without_admin_access_is_refused():
    client = FakeClient({POLICY: {}, LOGIN: login_response(role="judge")})
    wizard = make_wizard("admin")
    with pytest.raises(PermissionError):
        wizard.submit_credentials(client, "jamie@club.test", "secret1")
    assert wizard.step == "credentials"
    assert wizard.auth is None


def test_admin_login_lands_on_admin():
    client = FakeClient({POLICY: {}, LOGIN: login_response(role="admin")})
    wizard = make_wizard("admin")
    wizard.submit_credentials(client, "jamie@club.test", "secret1")
    assert (wizard.step, wizard.destination) == ("done", "admin")


def test_eboard_with_two_views_chooses():
    client = FakeClient({POLICY: {}, LOGIN: login_response(role="eboard", position="Abi", canAccessAdmin=True)})
    wizard = make_wizard()
    wizard.submit_credentials(client, "jamie@club.test", "secret1")
    assert wizard.step == "view"
    assert wizard.views == ["judge", "coordinator"]
    with pytest.raises(ValueError):
        wizard.choose_view("admin")
    wizard.choose_view("coordinator")
    assert (wizard.step, wizard.destination) == ("done", "coordinator")


def test_back_from_verify_keeps_role():
    wizard = make_wizard()
    wizard.step = "verify"
    wizard.back()
    assert wizard.step == "credentials"
    assert wizard.role_type == "eboard"
    wizard.back()
    assert wizard.step == "role"
    assert wizard.role_type is None


def test_login_user_type_mapping():
    assert auth.login_user_type("eboard") == "eboard"
    assert auth.login_user_type("judge") == "judge"
    assert auth.login_user_type(None) == "judge"


def test_change_password_validates_then_posts_to_dancer_endpoint():
    client = FakeClient({("POST", "/api/auth/change-dancer-password"): {"success": True}})
    with pytest.raises(ValueError, match="at least 6"):
        auth.change_password(client, "dancer", "old", "abc", "abc")
    with pytest.raises(ValueError, match="different"):
        auth.change_password(client, "dancer", "secret1", "secret1", "secret1")
    auth.change_password(client, "dancer", "secret1", "secret2", "secret2")
    assert client.sent("POST", "/api/auth/change-dancer-password")["newPassword"] == "secret2"


def test_password_reset_reports_email_failure():
    client = FakeClient({("POST", "/api/auth/forgot-password"): {"emailFailed": True}})
    with pytest.raises(ValueError):
        auth.request_password_reset(client, "not-an-email", "judge", CLUB)
    with pytest.raises(ApiError, match="Email service is unavailable"):
        auth.request_password_reset(client, "jamie@club.test", "judge", CLUB)

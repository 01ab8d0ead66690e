"""
Authentication flows: staff login with optional email verification, dancer
login, first-login password change and password reset.

`LoginWizard` holds the multi-step staff login state. It is a plain object
kept in session state, so every transition can be tested without Streamlit.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.constants import DEFAULT_CLUB_ID, DEFAULT_CODE_EXPIRY_SECONDS
from domain.models import SessionUser, session_user_from_dict
from services import access
from services.api import ApiClient, ApiError
from utils import validation
from utils.log import get_logger

logger = get_logger("auth")


@dataclass
class VerificationPolicy:
    required: bool = False
    email_configured: bool = False
    code_expiry_seconds: int = DEFAULT_CODE_EXPIRY_SECONDS


@dataclass
class VerificationResult:
    verified: bool
    requires_password_change: bool = False


def login_user_type(role_type: Optional[str]) -> str:
    """Map the login role button to the `userType` the auth endpoints expect."""
    if role_type in ("admin", "eboard", "dancer"):
        return role_type
    return "judge"


def verification_policy(client: ApiClient, club_id: str = DEFAULT_CLUB_ID) -> VerificationPolicy:
    """Ask whether this club requires an emailed code. Errors mean 'not required'."""
    try:
        data = client.get(f"/api/auth/verification-required/{club_id}")
    except ApiError as e:
        logger.warning("verification check failed, assuming not required: %s", e)
        return VerificationPolicy()
    minutes = data.get("codeExpiryMinutes")
    expiry = int(minutes * 60) if minutes else DEFAULT_CODE_EXPIRY_SECONDS
    if data.get("requireVerification") and not data.get("emailConfigured"):
        logger.warning("email verification required but email service is not configured")
    return VerificationPolicy(
        required=bool(data.get("requireVerification")),
        email_configured=bool(data.get("emailConfigured")),
        code_expiry_seconds=expiry,
    )


def send_verification_code(client: ApiClient, email: str, user_type: str,
                           club_id: str = DEFAULT_CLUB_ID) -> int:
    """Returns the number of seconds the new code stays valid."""
    data = client.post("/api/auth/send-verification-code",
                       json={"email": email, "userType": user_type, "clubId": club_id},
                       fallback="Failed to send verification code. Please try again.")
    if not data.get("success", True):
        raise ApiError(data.get("error") or "Failed to send verification code. Please try again.")
    return int(data.get("expiresIn") or DEFAULT_CODE_EXPIRY_SECONDS)


def verify_code(client: ApiClient, email: str, code: str, user_type: str,
                password: Optional[str] = None, club_id: str = DEFAULT_CLUB_ID) -> VerificationResult:
    if not validation.is_valid_code(code):
        raise ValueError("Please enter a 6-digit verification code")
    data = client.post("/api/auth/verify-code", json={
        "email": email,
        "code": code.strip(),
        "userType": user_type,
        "password": password,
        "clubId": club_id,
    }, fallback="Failed to verify code. Please try again.")
    verified = bool(data.get("success") and data.get("verified"))
    return VerificationResult(verified, bool(data.get("requiresPasswordChange")))


def staff_login(client: ApiClient, email: str, password: str) -> Dict[str, Any]:
    return client.post("/api/auth/login", json={"email": email, "password": password},
                       fallback="Login failed. Please check your credentials.")


def dancer_login(client: ApiClient, email: str, password: str) -> Dict[str, Any]:
    if not email or not password:
        raise ValueError("Please enter your email and password")
    return client.post("/api/auth/dancer-login", json={"email": email, "password": password},
                       fallback="Login failed. Please check your credentials.")


def change_password(client: ApiClient, user_type: str, current_password: str,
                    new_password: str, confirm_password: str) -> None:
    error = validation.new_password_error(new_password, confirm_password, current_password)
    if error:
        raise ValueError(error)
    path = "/api/auth/change-dancer-password" if user_type == "dancer" else "/api/auth/change-password"
    data = client.post(path, json={"newPassword": new_password, "currentPassword": current_password},
                       fallback="Failed to change password")
    if data.get("success") is False:
        raise ApiError(data.get("error") or "Failed to change password")


def request_password_reset(client: ApiClient, email: str, user_type: str,
                           club_id: str = DEFAULT_CLUB_ID) -> None:
    if not validation.is_valid_email(email):
        raise ValueError("Please enter a valid email address")
    data = client.post("/api/auth/forgot-password",
                       json={"email": email, "userType": user_type, "clubId": club_id},
                       fallback="Failed to send reset code. Please try again.")
    if data.get("emailFailed"):
        raise ApiError("Email service is unavailable. Please contact an administrator to reset your password.")


def reset_password(client: ApiClient, email: str, code: str, new_password: str,
                   confirm_password: str, user_type: str, club_id: str = DEFAULT_CLUB_ID) -> None:
    if not validation.is_valid_code(code):
        raise ValueError("Please enter the 6-digit code from your email")
    error = validation.new_password_error(new_password, confirm_password)
    if error:
        raise ValueError(error)
    client.post("/api/auth/reset-password", json={
        "email": email,
        "code": code.strip(),
        "newPassword": new_password,
        "userType": user_type,
        "clubId": club_id,
    }, fallback="Failed to reset password. Please try again.")


@dataclass
class LoginWizard:
    """Staff login steps: role -> credentials -> [verify] -> [password] -> [view] -> done."""
    club_id: str = DEFAULT_CLUB_ID
    role_type: Optional[str] = None
    step: str = "role"
    email: str = ""
    password: str = ""
    code_expires_at: float = 0.0
    auth: Optional[Dict[str, Any]] = None
    views: List[str] = field(default_factory=list)
    destination: Optional[str] = None

    @property
    def user_type(self) -> str:
        return login_user_type(self.role_type)

    @property
    def user(self) -> Optional[SessionUser]:
        if not self.auth:
            return None
        return session_user_from_dict(self.auth.get("user") or {})

    def choose_role(self, role_type: str) -> Optional[str]:
        """Returns a page to redirect to (dancers have their own login page)."""
        if role_type == "dancer":
            return "dancer_login"
        self.role_type = role_type
        self.step = "credentials"
        return None

    def back(self) -> None:
        if self.step == "verify":
            self.step = "credentials"
        else:
            self.reset()

    def reset(self) -> None:
        self.role_type = None
        self.step = "role"
        self.email = ""
        self.password = ""
        self.code_expires_at = 0.0
        self.auth = None
        self.views = []
        self.destination = None

    def seconds_remaining(self, now: Optional[float] = None) -> int:
        now = time.time() if now is None else now
        return max(0, int(round(self.code_expires_at - now)))

    def submit_credentials(self, client: ApiClient, email: str, password: str,
                           now: Optional[float] = None) -> None:
        if not email or not password:
            raise ValueError("Please enter your email and password")
        self.email = email.strip()
        self.password = password
        # Settings may have changed since the page loaded
        policy = verification_policy(client, self.club_id)
        if policy.required:
            expires_in = send_verification_code(client, self.email, self.user_type, self.club_id)
            self.code_expires_at = (time.time() if now is None else now) + expires_in
            self.step = "verify"
            return
        self._complete(staff_login(client, self.email, self.password))

    def submit_code(self, client: ApiClient, code: str) -> None:
        result = verify_code(client, self.email, code, self.user_type, self.password, self.club_id)
        if not result.verified:
            self.step = "credentials"
            raise ValueError("Invalid verification code")
        self._complete(staff_login(client, self.email, self.password),
                       result.requires_password_change)

    def resend_code(self, client: ApiClient, now: Optional[float] = None) -> None:
        expires_in = send_verification_code(client, self.email, self.user_type, self.club_id)
        self.code_expires_at = (time.time() if now is None else now) + expires_in

    def _complete(self, auth: Dict[str, Any], requires_password_change: bool = False) -> None:
        user = session_user_from_dict(auth.get("user") or {})
        if self.role_type == "admin":
            if not access.has_admin_access(user):
                self.step = "credentials"
                raise PermissionError("You do not have admin access.")
            self.views = []
            self.destination = "admin"
        else:
            self.views = access.available_views(user)
            self.destination = self.views[0] if len(self.views) == 1 else None
        self.auth = auth
        if requires_password_change or user.requires_password_change:
            self.step = "password"
        else:
            self._after_password()

    def _after_password(self) -> None:
        self.step = "view" if self.destination is None else "done"

    def password_changed(self) -> None:
        if self.auth and self.auth.get("user"):
            self.auth["user"]["requiresPasswordChange"] = False
        self._after_password()

    def choose_view(self, view: str) -> None:
        if view not in self.views:
            raise ValueError(f"Unknown view: {view}")
        self.destination = view
        self.step = "done"

"""
Thin HTTP client for the club backend.

Every view talks to the server through `ApiClient`. It attaches the bearer
token, decodes JSON and turns non-2xx responses into `ApiError` carrying the
server's `error` message. A 401 on an authenticated request raises
`AuthExpiredError` so the session layer can sign the user out; the auth
endpoints answer 401 for a wrong password or code, which stays a plain
`ApiError`.
"""
from typing import Any, Dict, Optional

import requests

from domain.constants import API_BASE_URL, API_TIMEOUT_SECONDS
from utils.log import get_logger

logger = get_logger("api")

# 401 from these means the credentials were rejected, not that the token expired
CREDENTIAL_PATHS = frozenset({
    "/api/auth/login",
    "/api/auth/dancer-login",
    "/api/auth/verify-code",
    "/api/auth/change-password",
    "/api/auth/change-dancer-password",
    "/api/auth/forgot-password",
    "/api/auth/reset-password",
})


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload or {}

    def __str__(self):
        return self.message


class AuthExpiredError(ApiError):
    """Raised on HTTP 401; the stored token is no longer valid."""


def error_message(response: requests.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or fallback
    return fallback


class ApiClient:
    def __init__(self, token: Optional[str] = None, base_url: str = API_BASE_URL,
                 timeout: float = API_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def expires_session(self, path: str) -> bool:
        return bool(self.token) and "/" + path.lstrip("/") not in CREDENTIAL_PATHS

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, fallback: str = "Request failed",
                raw: bool = False, **kwargs) -> Any:
        """Send a request and return decoded JSON (or bytes when `raw`).

        Raises AuthExpiredError when an authenticated request gets a 401 and
        ApiError on any other failure.
        """
        logger.debug("%s %s", method, path)
        try:
            response = self.session.request(
                method, self.url(path), headers=self._headers(),
                timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{fallback}: could not reach the server") from e

        if response.status_code == 401 and self.expires_session(path):
            logger.warning("%s %s -> 401, session expired", method, path)
            raise AuthExpiredError(error_message(response, "Session expired. Please log in again."),
                                   status=401)
        if not response.ok:
            message = error_message(response, fallback)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ApiError(message, status=response.status_code, payload=payload)

        if raw:
            return response.content
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

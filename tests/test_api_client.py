from unittest.mock import MagicMock

import pytest
import requests

from services.api import ApiClient, ApiError, AuthExpiredError


def make_response(status=200, body=None, content=None):
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    if body is None:
        response.json.side_effect = ValueError("no json")
        response.content = content or b""
    else:
        response.json.return_value = body
        response.content = content or b"{...}"
    return response


def make_client(response=None, error=None, token="tok"):
    session = MagicMock()
    if error:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return ApiClient(token=token, base_url="http://api.test/", session=session), session


def test_request_sends_bearer_token_and_joins_url():
    client, session = make_client(make_response(body={"ok": True}))
    assert client.get("/api/auditions") == {"ok": True}
    method, url = session.request.call_args.args
    headers = session.request.call_args.kwargs["headers"]
    assert (method, url) == ("GET", "http://api.test/api/auditions")
    assert headers["Authorization"] == "Bearer tok"


def test_no_authorization_header_without_token():
    client, session = make_client(make_response(body=[]), token=None)
    client.get("/api/appearance")
    assert "Authorization" not in session.request.call_args.kwargs["headers"]


def test_error_message_prefers_server_error_field():
    client, _ = make_client(make_response(400, {"error": "Dancer already exists", "message": "other"}))
    with pytest.raises(ApiError) as exc:
        client.post("/api/dancers", json={}, fallback="Failed to add dancer")
    assert exc.value.message == "Dancer already exists"
    assert exc.value.status == 400


def test_error_message_falls_back_when_body_is_not_json():
    client, _ = make_client(make_response(500))
    with pytest.raises(ApiError) as exc:
        client.get("/api/files", fallback="Failed to load files")
    assert str(exc.value) == "Failed to load files"


def test_401_raises_auth_expired():
    client, _ = make_client(make_response(401, {"error": "Token expired"}))
    with pytest.raises(AuthExpiredError) as exc:
        client.get("/api/dancers")
    assert exc.value.status == 401
    assert isinstance(exc.value, ApiError)


def test_connection_error_becomes_api_error():
    client, _ = make_client(error=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as exc:
        client.get("/api/dancers", fallback="Failed to fetch dancers")
    assert exc.value.message == "Failed to fetch dancers: could not reach the server"
    assert exc.value.status is None


def test_raw_returns_bytes_and_empty_body_returns_dict():
    client, _ = make_client(make_response(body=None, content=b"%PDF"))
    assert client.get("/api/export/qr-code-pdf", raw=True) == b"%PDF"

    client, _ = make_client(make_response(204))
    assert client.delete("/api/videos/v1") == {}


@pytest.mark.parametrize("path,error", [
    ("/api/auth/login", "Invalid credentials"),
    ("/api/auth/dancer-login", "Invalid credentials"),
    ("/api/auth/verify-code", "Invalid credentials"),
    ("/api/auth/change-dancer-password", "Current password is incorrect"),
])
def test_401_from_credential_endpoint_is_plain_error(path, error):
    client, _ = make_client(make_response(401, {"error": error}))
    with pytest.raises(ApiError) as exc:
        client.post(path, json={})
    assert not isinstance(exc.value, AuthExpiredError)
    assert exc.value.message == error
    assert exc.value.status == 401


def test_401_without_token_does_not_expire_session():
    client, _ = make_client(make_response(401, {"error": "Unauthorized"}), token=None)
    with pytest.raises(ApiError) as exc:
        client.get("/api/auditions")
    assert not isinstance(exc.value, AuthExpiredError)

import pytest


class FakeClient:
    """Stands in for ApiClient: canned responses keyed by (method, path), calls recorded."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def request(self, method, path, **kwargs):
        self.calls.append((method, path, kwargs))
        result = self.responses.get((method, path), {})
        if isinstance(result, Exception):
            raise result
        return result

    def get(self, path, **kwargs):
        return self.request("GET", path, **kwargs)

    def post(self, path, json=None, **kwargs):
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path, json=None, **kwargs):
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path, **kwargs):
        return self.request("DELETE", path, **kwargs)

    def sent(self, method, path):
        """JSON body of the last matching call."""
        for m, p, kwargs in reversed(self.calls):
            if m == method and p == path:
                return kwargs.get("json")
        raise AssertionError(f"{method} {path} was not called")


@pytest.fixture
def fake_client():
    return FakeClient()

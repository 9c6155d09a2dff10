"""Shared fixtures: an in-memory HTTP client that records every call."""
import pytest

from jsonapi_repository.adapters.http.base import BaseHttpClient
from jsonapi_repository.schemas import HttpResponse


class FakeHttpClient(BaseHttpClient):
    """Returns a canned response and records (verb, url, params_or_body, headers)."""

    def __init__(self, response=None):
        self.response = response or HttpResponse(status_code=200, body={"data": []})
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None):
        self.calls.append(("get", url, params, headers))
        return self.response

    def post(self, url, body=None, headers=None):
        self.calls.append(("post", url, body, headers))
        return self.response

    def put(self, url, body=None, headers=None):
        self.calls.append(("put", url, body, headers))
        return self.response

    def patch(self, url, body=None, headers=None):
        self.calls.append(("patch", url, body, headers))
        return self.response

    def delete(self, url, headers=None):
        self.calls.append(("delete", url, None, headers))
        return self.response

    def close(self):
        self.closed = True

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def fake_client():
    return FakeHttpClient()


@pytest.hookimpl(hookwrapper=True, trylast=True)
def pytest_runtest_call(item):
    """Keep the root logger bare for tests using `bare_root`.

    pytest's logging plugin attaches its capture handlers to the root logger
    at the start of the call phase, after fixtures have run; strip them here
    (inside that plugin's wrapper) so the fixture's bare root survives.
    """
    if "bare_root" not in item.fixturenames:
        yield
        return
    import logging

    root = logging.getLogger()
    handlers = root.handlers[:]
    root.handlers = []
    try:
        yield
    finally:
        root.handlers = handlers

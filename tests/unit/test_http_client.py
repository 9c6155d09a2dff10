"""Unit tests for the requests-based HTTP client. The session is mocked; nothing hits the network."""
import json
from unittest.mock import MagicMock
from urllib.parse import unquote

import certifi
import pytest
import requests

from jsonapi_repository import get_repository
from jsonapi_repository.adapters.http.client import RequestsHttpClient
from jsonapi_repository.query import build_find_query, encode_query
from jsonapi_repository.settings import HttpClientSettings


def make_response(status_code=200, body=b"", url="https://api.test/users", headers=None):
    """Build a real requests.Response without a network round-trip."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    resp.url = url
    resp.headers.update(headers or {"Content-Type": "application/json"})
    return resp


@pytest.fixture
def settings():
    return HttpClientSettings(_env_file=None, base_url=None, timeout=5.0, verify_ssl=True)


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_response(200, {"data": []})
    return mock_session


@pytest.fixture
def client(session, settings):
    return RequestsHttpClient(session=session, settings=settings)


class TestRequestsHttpClient:
    """Test how requests are handed to the session."""

    def test_get_encodes_nested_params(self, client, session):
        query = build_find_query({"status": "active"}, {"name": "asc"}, 10, 0)
        client.get("https://api.test/users", query, {"Accept": "application/json"})

        session.request.assert_called_once_with(
            "GET",
            "https://api.test/users",
            headers={"Accept": "application/json"},
            timeout=5.0,
            verify=certifi.where(),
            params=[
                ("filter[status]", "active"),
                ("sort", "name"),
                ("page[limit]", "10"),
                ("page[offset]", "0"),
            ],
        )

    def test_post_sends_json_body(self, client, session):
        client.post("https://api.test/users", {"name": "a"})
        _, kwargs = session.request.call_args
        assert session.request.call_args[0][0] == "POST"
        assert kwargs["json"] == {"name": "a"}

    def test_put_without_body(self, client, session):
        client.put("https://api.test/users/7/restore", None)
        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://api.test/users/7/restore")
        assert "json" not in kwargs and "data" not in kwargs

    def test_patch_is_sent_as_patch(self, client, session):
        client.patch("https://api.test/users/1", {"name": "b"})
        assert session.request.call_args[0][0] == "PATCH"

    def test_delete_has_no_body(self, client, session):
        client.delete("https://api.test/users/1")
        args, kwargs = session.request.call_args
        assert args == ("DELETE", "https://api.test/users/1")
        assert "json" not in kwargs and "params" not in kwargs

    def test_base_url_is_joined(self, session, settings):
        client = RequestsHttpClient(base_url="https://api.test/v1/", session=session, settings=settings)
        client.get("/users")
        assert session.request.call_args[0][1] == "https://api.test/v1/users"

    def test_absolute_uri_ignores_base_url(self, session, settings):
        client = RequestsHttpClient(base_url="https://api.test/v1", session=session, settings=settings)
        assert client.build_url("https://other.test/users") == "https://other.test/users"

    def test_base_url_from_settings(self, session):
        settings = HttpClientSettings(_env_file=None, base_url="https://api.test/v2")
        client = RequestsHttpClient(session=session, settings=settings)
        assert client.build_url("users") == "https://api.test/v2/users"

    def test_verify_disabled(self, session, settings):
        client = RequestsHttpClient(verify_ssl=False, session=session, settings=settings)
        client.get("https://api.test/users")
        assert session.request.call_args[1]["verify"] is False

    def test_explicit_timeout_wins(self, session, settings):
        client = RequestsHttpClient(timeout=1.5, session=session, settings=settings)
        client.get("https://api.test/users")
        assert session.request.call_args[1]["timeout"] == 1.5

    def test_transport_error_propagates(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout("read timed out")
        with pytest.raises(requests.exceptions.Timeout):
            client.get("https://api.test/users")

    def test_context_manager_closes_session(self, session, settings):
        with RequestsHttpClient(session=session, settings=settings):
            pass
        session.close.assert_called_once()


class TestResponseHandling:
    """Test wrapping of requests responses into HttpResponse."""

    def test_json_body_is_parsed(self, client, session):
        session.request.return_value = make_response(200, {"data": {"id": 1}}, headers={"X-Total": "1"})
        response = client.get("https://api.test/users/1")

        assert response.status_code == 200
        assert response.body == {"data": {"id": 1}}
        assert response.headers["X-Total"] == "1"

    def test_empty_body_is_none(self, client, session):
        session.request.return_value = make_response(204, b"")
        assert client.delete("https://api.test/users/1").body is None

    def test_non_json_body_is_raw_text(self, client, session):
        session.request.return_value = make_response(502, b"<html>Bad Gateway</html>", headers={"Content-Type": "text/html"})
        response = client.get("https://api.test/users")
        assert response.status_code == 502
        assert response.body == "<html>Bad Gateway</html>"

    def test_error_status_is_not_raised(self, client, session):
        session.request.return_value = make_response(404, {"error": "not found"})
        response = client.get("https://api.test/users/9")
        assert response.status_code == 404
        assert not response.is_success


class TestEndToEnd:
    """Repository + RequestsHttpClient against a mocked session."""

    def test_users_scenario_url(self, session, settings):
        client = RequestsHttpClient(base_url="https://api.test", session=session, settings=settings)
        users = get_repository("/users", client=client)
        session.request.return_value = make_response(200, {"data": [{"id": 1}]})

        assert users.find_by({"status": "active"}, {"name": "asc"}, 10, 0) == [{"id": 1}]

        args, kwargs = session.request.call_args
        prepared = requests.Request(args[0], args[1], params=kwargs["params"]).prepare()
        assert unquote(prepared.url) == (
            "https://api.test/users?filter[status]=active&sort=name&page[limit]=10&page[offset]=0"
        )

    def test_headers_reach_the_session(self, session, settings):
        client = RequestsHttpClient(session=session, settings=settings)
        repo = get_repository("https://api.test/users", headers={"Authorization": "Bearer t"}, client=client)
        repo.update(5, {"name": "a"})

        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://api.test/users/5")
        assert kwargs["json"] == {"name": "a"}
        assert kwargs["headers"] == {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": "Bearer t",
        }

    def test_existing_query_string_is_preserved(self):
        pairs = encode_query({"sort": "-name"})
        prepared = requests.Request("GET", "https://api.test/users?include=posts", params=pairs).prepare()
        assert unquote(prepared.url) == "https://api.test/users?include=posts&sort=-name"

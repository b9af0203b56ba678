"""Tests for the authenticated request wrapper and verb helpers."""

import httpx
import pytest

from dashboard.config import TOKEN_KEY, USER_KEY
from dashboard.errors import SessionExpiredError
from dashboard.models import RequestOptions


def unauthorized(request):
    return httpx.Response(401, json={"statusCode": 401, "message": "Unauthorized"})


class TestAuthHeader:
    def test_get_with_stored_token(self, store, make_client):
        """GET /users carries the bearer token and JSON content type."""
        store.set("abc", {"id": "1", "email": "admin@kidsgame.com"})
        client, rec = make_client()

        client.get("/users")

        req = rec.last
        assert req.method == "GET"
        assert str(req.url) == "http://localhost:3000/users"
        assert req.headers["Authorization"] == "Bearer abc"
        assert req.headers["Content-Type"] == "application/json"

    def test_no_header_when_auth_not_required(self, store, make_client):
        store.set("abc", {"id": "1", "email": "admin@kidsgame.com"})
        client, rec = make_client()

        client.get("/schools", RequestOptions(requires_auth=False))

        assert "Authorization" not in rec.last.headers

    def test_missing_token_sends_without_header(self, make_client):
        client, rec = make_client()

        response = client.get("/users")

        assert response.status_code == 200
        assert "Authorization" not in rec.last.headers

    def test_stored_token_wins_over_caller_header(self, store, make_client):
        store.set("fresh", {"id": "1", "email": "a@b.co"})
        client, rec = make_client()

        client.get("/users", RequestOptions(headers={"Authorization": "Bearer stale"}))

        assert rec.last.headers.get_list("Authorization") == ["Bearer fresh"]

    def test_caller_headers_merge_over_default(self, make_client):
        client, rec = make_client()

        client.get("/x", RequestOptions(headers={"content-type": "text/plain", "X-Trace": "1"}))

        assert rec.last.headers.get_list("Content-Type") == ["text/plain"]
        assert rec.last.headers["X-Trace"] == "1"


class TestUrlResolution:
    def test_absolute_url_is_untouched(self, make_client):
        client, rec = make_client()

        client.get("https://api.example.com/x")

        assert str(rec.last.url) == "https://api.example.com/x"

    def test_relative_without_slash(self, make_client):
        client, rec = make_client()

        client.get("seed-cards")

        assert str(rec.last.url) == "http://localhost:3000/seed-cards"

    def test_query_params(self, make_client):
        client, rec = make_client()

        client.get("/seed-cards", RequestOptions(params={"corridor": "fruits"}))

        assert str(rec.last.url) == "http://localhost:3000/seed-cards?corridor=fruits"


class TestVerbs:
    def test_post_serializes_compact_json(self, make_client):
        client, rec = make_client()

        client.post("/things", {"a": 1})

        assert rec.last.method == "POST"
        assert rec.last.content == b'{"a":1}'

    def test_post_without_payload_sends_no_body(self, make_client):
        client, rec = make_client()

        client.post("/things")

        assert rec.last.method == "POST"
        assert rec.last.content == b""

    @pytest.mark.parametrize("verb,method", [("patch", "PATCH"), ("put", "PUT")])
    def test_payload_verbs(self, make_client, verb, method):
        client, rec = make_client()

        getattr(client, verb)("/schools/7", {"name": "Oak Primary"})

        assert rec.last.method == method
        assert rec.last.content == b'{"name":"Oak Primary"}'

    def test_falsy_payload_is_still_sent(self, make_client):
        client, rec = make_client()

        client.put("/flags/1", False)

        assert rec.last.content == b"false"

    def test_delete(self, make_client):
        client, rec = make_client()

        client.delete("/seed-cards/3")

        assert rec.last.method == "DELETE"
        assert str(rec.last.url) == "http://localhost:3000/seed-cards/3"


class TestSessionExpiry:
    def test_401_tears_down_session(self, store, navigations, make_client):
        store.set("abc", {"id": "1", "email": "admin@kidsgame.com"})
        client, _ = make_client(unauthorized)

        with pytest.raises(SessionExpiredError, match="Session expired"):
            client.get("/users")

        assert TOKEN_KEY not in store.storage
        assert USER_KEY not in store.storage
        assert navigations == ["/login"]

    def test_401_without_auth_is_returned(self, store, navigations, make_client):
        store.set("abc", {"id": "1", "email": "admin@kidsgame.com"})
        client, _ = make_client(unauthorized)

        response = client.post("/auth/login", {"email": "x"}, RequestOptions(requires_auth=False))

        assert response.status_code == 401
        assert store.get_token() == "abc"
        assert navigations == []

    def test_401_with_no_token_still_redirects(self, store, navigations, make_client):
        client, _ = make_client(unauthorized)

        with pytest.raises(SessionExpiredError):
            client.get("/users")

        assert navigations == ["/login"]

    def test_other_errors_are_returned_as_is(self, store, navigations, make_client):
        store.set("abc", {"id": "1", "email": "admin@kidsgame.com"})
        client, _ = make_client(lambda request: httpx.Response(403, json={"message": "Forbidden"}))

        response = client.delete("/auth/users/2")

        assert response.status_code == 403
        assert store.get_token() == "abc"
        assert navigations == []

    def test_failing_listener_does_not_swallow_error(self, store, make_client):
        client, _ = make_client(unauthorized)

        @client.on_session_expired
        def broken(route):
            raise RuntimeError("router gone")

        with pytest.raises(SessionExpiredError):
            client.get("/users")


def test_transport_errors_propagate(make_client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(refuse)

    with pytest.raises(httpx.ConnectError):
        client.get("/users")

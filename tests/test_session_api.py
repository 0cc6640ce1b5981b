"""Tests for /token, /session/check and the shared error shape."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from brainwaves.main import app

from conftest import make_response

POST = "brainwaves.services.spotify_token_service.requests.post"


class TestToken:

    def test_missing_session(self, client):
        r = client.post("/token", json={})
        assert r.status_code == 400
        assert r.json() == {"ok": False, "error": "missing_session", "message": "Missing session"}

    def test_empty_body(self, client):
        r = client.post("/token")
        assert r.status_code == 400
        assert r.json()["error"] == "missing_session"

    def test_empty_session_string(self, client):
        r = client.post("/token", json={"session": ""})
        assert r.json()["error"] == "missing_session"

    def test_invalid_session(self, client):
        r = client.post("/token", json={"session": "not-a-session"})
        assert r.status_code == 401
        assert r.json() == {"ok": False, "error": "invalid_session", "message": "Invalid session"}

    def test_access_token(self, client, session):
        with patch(POST, return_value=make_response(200, {
            "access_token": "at-1", "expires_in": 3600, "refresh_token": "rt-2",
        })):
            r = client.post("/token", json={"session": session})

        assert r.status_code == 200
        body = r.json()
        assert body == {"ok": True, "access_token": "at-1", "expires_in": 3600}
        assert "rt-2" not in r.text
        assert "refresh-1" not in r.text

    def test_refresh_failed_carries_details(self, client, session):
        upstream = {"error": "invalid_grant"}
        with patch(POST, return_value=make_response(400, upstream)):
            r = client.post("/token", json={"session": session})

        assert r.status_code == 401
        assert r.json() == {
            "ok": False,
            "error": "token_refresh_failed",
            "message": "Token refresh failed",
            "details": upstream,
        }

    def test_network_failure_is_server_error(self, session):
        client = TestClient(app, raise_server_exceptions=False)
        with patch(POST, side_effect=ConnectionError("accounts unreachable")):
            r = client.post("/token", json={"session": session})

        assert r.status_code == 500
        assert r.json() == {
            "ok": False,
            "error": "server_error",
            "message": "accounts unreachable",
        }

    def test_numeric_session_is_an_unknown_session(self, client):
        with patch(POST) as mock_post:
            r = client.post("/token", json={"session": 123})

        assert r.status_code == 401
        assert r.json()["error"] == "invalid_session"
        mock_post.assert_not_called()

    def test_non_scalar_session_is_invalid_request(self, client):
        r = client.post("/token", json={"session": ["a"]})
        assert r.status_code == 400
        assert r.json()["error"] == "invalid_request"
        assert r.json()["ok"] is False


class TestSessionCheck:

    def test_missing_session(self, client):
        r = client.post("/session/check", json={})
        assert r.status_code == 400
        assert r.json()["error"] == "missing_session"

    def test_exists(self, client, session):
        with patch(POST) as mock_post:
            r = client.post("/session/check", json={"session": session})

        assert r.json() == {"ok": True, "exists": True}
        mock_post.assert_not_called()

    def test_does_not_exist(self, client):
        r = client.post("/session/check", json={"session": "nope"})
        assert r.status_code == 200
        assert r.json() == {"ok": True, "exists": False}


def test_root(client):
    r = client.get("/")
    assert r.json()["status"] == "ok"


class TestHttpErrors:

    def test_unknown_route(self, client):
        r = client.post("/spotify/nope", json={})
        assert r.status_code == 404
        assert r.json() == {"ok": False, "error": "not_found", "message": "Not Found"}

    def test_wrong_method(self, client):
        r = client.get("/token")
        assert r.status_code == 405
        assert r.json()["ok"] is False
        assert r.json()["error"] == "method_not_allowed"
        assert "POST" in r.headers["allow"]

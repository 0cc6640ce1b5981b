"""Shared fixtures: env for the app, a TestClient, fake upstream responses."""

import json
import os

# Must be set before brainwaves.config.settings is imported
os.environ["ENVIRONMENT"] = "production"
os.environ["SPOTIFY_CLIENT_ID"] = "test-client-id"
os.environ["SPOTIFY_CLIENT_SECRET"] = "test-client-secret"
os.environ["PUBLIC_BASE_URL"] = "https://brainwaves.example.com"
os.environ["APP_REDIRECT_URL"] = "brainwaves://callback"

import pytest
import requests
from fastapi.testclient import TestClient

from brainwaves.main import app
from brainwaves.services.session_store import login_state_store, session_store


def make_response(status_code=200, body=None, text=None):
    """Build a real requests.Response without touching the network."""
    r = requests.Response()
    r.status_code = status_code
    r.encoding = "utf-8"
    if body is not None:
        r._content = json.dumps(body).encode()
        r.headers["Content-Type"] = "application/json"
    elif text is not None:
        r._content = text.encode()
        r.headers["Content-Type"] = "text/plain"
    else:
        r._content = b""
    return r


@pytest.fixture(autouse=True)
def clean_stores():
    session_store.clear()
    login_state_store.clear()
    yield
    session_store.clear()
    login_state_store.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def session():
    """A live session backed by a known refresh token."""
    return session_store.create("refresh-1")

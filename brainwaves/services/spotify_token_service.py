import logging
from typing import Dict, Tuple

import requests

from brainwaves.config.settings import (
    CLIENT_ID,
    CLIENT_SECRET,
    PUBLIC_BASE_URL,
    REQUEST_TIMEOUT,
    SPOTIFY_ACCOUNTS_URL,
)
from brainwaves.services.errors import InvalidSessionError, TokenRefreshFailedError
from brainwaves.services.session_store import SessionStore, session_store
from brainwaves.services.spotify_http import json_or_text

logger = logging.getLogger(__name__)

TOKEN_URL = f"{SPOTIFY_ACCOUNTS_URL}/api/token"
AUTHORIZE_URL = f"{SPOTIFY_ACCOUNTS_URL}/authorize"
REDIRECT_URI = f"{PUBLIC_BASE_URL}/callback"

SCOPES = (
    "user-read-playback-state",
    "user-modify-playback-state",
    "user-read-currently-playing",
)


def _post_token(payload: Dict) -> requests.Response:
    # Client credentials go in the Basic auth header, not the form body
    return requests.post(
        TOKEN_URL,
        data=payload,
        auth=(CLIENT_ID, CLIENT_SECRET),
        timeout=REQUEST_TIMEOUT,
    )


def exchange_code(code: str) -> Tuple[bool, Dict]:
    """
    Trade the authorization code from /callback for tokens.
    Returns (ok, body); body is whatever Spotify sent back.
    """
    r = _post_token({
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": REDIRECT_URI,
    })
    body = json_or_text(r)
    if not isinstance(body, dict):
        body = {"error": "invalid_response", "body": body}

    if not r.ok:
        logger.warning("Authorization code exchange failed (%s): %s", r.status_code, body.get("error"))
        return False, body

    return True, body


def refresh_access_token(refresh_token: str) -> Dict:
    r = _post_token({
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    })
    body = json_or_text(r)

    if not r.ok or not isinstance(body, dict) or "access_token" not in body:
        logger.warning("Token refresh rejected by Spotify (%s)", r.status_code)
        raise TokenRefreshFailedError(details=body)

    return body


def get_access_token(session: str, store: SessionStore = session_store) -> Dict:
    """
    Resolve a session into a fresh access token.

    1. Look up the refresh token stored for the session
    2. Exchange it at the accounts service
    3. Keep the new refresh token if Spotify rotated it

    Nothing is cached: every call makes one refresh request, and two
    concurrent calls for the same session make two.
    """
    refresh_token = store.get(session)
    if not refresh_token:
        raise InvalidSessionError()

    token = refresh_access_token(refresh_token)

    rotated = token.get("refresh_token")
    if rotated and rotated != refresh_token:
        store.rotate(session, rotated)

    return {
        "access_token": token["access_token"],
        "expires_in": token.get("expires_in"),
    }

# brainwaves/api/spotify_auth_api.py
import json
import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, RedirectResponse

from brainwaves.config.settings import APP_REDIRECT_URL, CLIENT_ID
from brainwaves.services.session_store import (
    LoginStateStore,
    SessionStore,
    get_login_state_store,
    get_session_store,
)
from brainwaves.services.spotify_token_service import (
    AUTHORIZE_URL,
    REDIRECT_URI,
    SCOPES,
    exchange_code,
)

router = APIRouter()

logger = logging.getLogger(__name__)

NO_REFRESH_TOKEN_HELP = (
    "No refresh_token returned.\n\n"
    "Fix: Go to https://www.spotify.com/account/apps/ and REMOVE access for BrainWaves, "
    "then try /login again."
)


def build_authorize_url(state: str) -> str:
    params = {
        "response_type": "code",
        "client_id": CLIENT_ID,
        "redirect_uri": REDIRECT_URI,
        "scope": " ".join(SCOPES),
        "state": state,
        "show_dialog": "true",
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def build_app_redirect(session: str) -> str:
    """APP_REDIRECT_URL with session=<session> added to its query string."""
    parts = urlsplit(APP_REDIRECT_URL)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "session"]
    query.append(("session", session))
    return urlunsplit(parts._replace(query=urlencode(query)))


@router.get(
    "/login",
    summary="Spotify Login",
    description="Redirects the browser to the Spotify consent page.",
    response_class=RedirectResponse,
)
def login(states: LoginStateStore = Depends(get_login_state_store)):
    state = states.issue()
    return RedirectResponse(url=build_authorize_url(state))


@router.get(
    "/callback",
    summary="Spotify OAuth Callback",
    description=(
        "Spotify redirects here with code/state. The code is exchanged for tokens, "
        "the refresh token is stored under a new session, and the browser is sent "
        "back to the app with ?session=..."
    ),
)
def callback(
    code: Optional[str] = Query(None, description="Authorization code from Spotify"),
    state: Optional[str] = Query(None, description="State we sent from /login"),
    error: Optional[str] = Query(None, description="Set by Spotify when the user declines"),
    store: SessionStore = Depends(get_session_store),
    states: LoginStateStore = Depends(get_login_state_store),
):
    # Browser flow: answers are plain text, not the JSON error shape
    if error:
        return PlainTextResponse(f"Spotify error: {error}", status_code=400)
    if not code:
        return PlainTextResponse("No code received from Spotify", status_code=400)
    if not states.consume(state):
        return PlainTextResponse("Invalid or expired login state", status_code=400)

    try:
        ok, token_data = exchange_code(code)

        if not ok:
            return PlainTextResponse(
                "Token exchange error:\n\n" + json.dumps(token_data, indent=2),
                status_code=400,
            )

        refresh_token = token_data.get("refresh_token")
        if not refresh_token:
            return PlainTextResponse(NO_REFRESH_TOKEN_HELP, status_code=400)

        session = store.create(refresh_token)
        return RedirectResponse(url=build_app_redirect(session))

    except Exception as e:
        logger.exception("Callback failed")
        return PlainTextResponse(str(e) or "Server error", status_code=500)

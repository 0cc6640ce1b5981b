# brainwaves/api/session_api.py
from typing import Optional

from fastapi import APIRouter, Depends

from brainwaves.models.player_models import SessionRequest
from brainwaves.models.session_models import AccessTokenResponse, ErrorResponse, SessionCheckResponse
from brainwaves.services.errors import require
from brainwaves.services.session_store import SessionStore, get_session_store
from brainwaves.services.spotify_token_service import get_access_token

router = APIRouter(responses={
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})


@router.post(
    "/token",
    summary="Exchange a session for a Spotify access token",
    description=(
        "Refreshes against Spotify on every call. "
        "The refresh token itself never leaves the backend."
    ),
    response_model=AccessTokenResponse,
    response_model_exclude_none=True,
)
def token(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    session = require(payload.session, "session", "Missing session")

    token_data = get_access_token(session, store)
    return {"ok": True, **token_data}


@router.post(
    "/session/check",
    summary="Does this session exist?",
    response_model=SessionCheckResponse,
)
def session_check(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    session = require(payload.session, "session", "Missing session")

    return {"ok": True, "exists": store.exists(session)}

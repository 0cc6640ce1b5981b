# brainwaves/api/player_api.py
from typing import Optional

from fastapi import APIRouter, Depends

from brainwaves.models.player_models import (
    SessionRequest,
    SearchRequest,
    QueueRequest,
    SeekRequest,
    OkResponse,
    SearchResponse,
    QueueResponse,
    SeekResponse,
)
from brainwaves.models.session_models import ErrorResponse
from brainwaves.services import spotify_player_service as player
from brainwaves.services.errors import InvalidRequestError, require
from brainwaves.services.session_store import SessionStore, get_session_store
from brainwaves.services.spotify_token_service import get_access_token

router = APIRouter(responses={
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})

MAX_SEARCH_LIMIT = 50


def _access_token(session: Optional[str], store: SessionStore) -> str:
    session = require(session, "session", "Missing session")
    return get_access_token(session, store)["access_token"]


@router.post("/next", summary="Skip to the next track", response_model=OkResponse)
def next_track(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    access_token = _access_token(payload.session, store)

    player.next_track(access_token)
    return {"ok": True}


@router.post(
    "/current",
    summary="Currently playing track",
    description="Answers with a message instead of track fields when nothing is playing.",
)
def current(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    access_token = _access_token(payload.session, store)

    track = player.currently_playing(access_token)
    if track is None:
        return {"ok": True, "message": "Nothing is currently playing"}

    return {"ok": True, **track}


@router.post("/search", summary="Search tracks by text", response_model=SearchResponse)
def search(
    payload: Optional[SearchRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SearchRequest()
    session = require(payload.session, "session", "Missing session")
    q = require(payload.q, "q", "Missing q (search text)")
    if not 1 <= payload.limit <= MAX_SEARCH_LIMIT:
        raise InvalidRequestError(f"limit must be between 1 and {MAX_SEARCH_LIMIT}")

    access_token = _access_token(session, store)
    results = player.search_tracks(access_token, q, limit=payload.limit)

    return {"ok": True, "q": q, "results": results}


@router.post("/pause", summary="Pause playback", response_model=OkResponse)
def pause(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    access_token = _access_token(payload.session, store)

    player.pause(access_token)
    return {"ok": True}


@router.post("/play", summary="Resume playback", response_model=OkResponse)
def play(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    access_token = _access_token(payload.session, store)

    player.play(access_token)
    return {"ok": True}


@router.post("/queue", summary="Queue a track by Spotify URI", response_model=QueueResponse)
def queue(
    payload: Optional[QueueRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or QueueRequest()
    session = require(payload.session, "session", "Missing session")
    uri = require(payload.uri, "uri", "Missing uri (e.g. spotify:track:...)")

    access_token = _access_token(session, store)
    player.queue(access_token, uri)

    return {"ok": True, "queued": uri}


@router.post("/seek", summary="Seek within the current track", response_model=SeekResponse)
def seek(
    payload: Optional[SeekRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SeekRequest()
    session = require(payload.session, "session", "Missing session")
    position_ms = require(payload.position_ms, "position_ms", "Missing position_ms")
    if position_ms < 0:
        raise InvalidRequestError("position_ms must not be negative")

    access_token = _access_token(session, store)
    player.seek(access_token, position_ms)

    return {"ok": True, "position_ms": position_ms}


@router.post(
    "/position",
    summary="Playback position and track duration",
    description="Answers with a message instead of positions when no device is active.",
)
def position(
    payload: Optional[SessionRequest] = None,
    store: SessionStore = Depends(get_session_store),
):
    payload = payload or SessionRequest()
    access_token = _access_token(payload.session, store)

    pos = player.playback_position(access_token)
    if pos is None:
        return {"ok": True, "message": "No active device"}

    return {"ok": True, **pos}

# brainwaves/services/spotify_player_service.py
import logging
from typing import Any, Dict, List, Optional

import requests

from brainwaves.config.settings import REQUEST_TIMEOUT, SPOTIFY_API_BASE
from brainwaves.services.errors import SpotifyError
from brainwaves.services.spotify_http import bearer_headers, json_or_text

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5


# --------- Spotify API Wrapper ---------
def _spotify_request(
    access_token: str,
    method: str,
    path: str,
    label: str,
    params: Optional[Dict] = None,
) -> requests.Response:
    """
    One call against the Web API. 2xx (204 included) is returned as is,
    anything else becomes a SpotifyError with the upstream status and body.
    """
    url = f"{SPOTIFY_API_BASE}/{path}"
    r = requests.request(
        method,
        url,
        headers=bearer_headers(access_token),
        params=params,
        timeout=REQUEST_TIMEOUT,
    )

    if not r.ok:
        details = json_or_text(r)
        logger.warning("Spotify %s failed (%s)", label, r.status_code)
        raise SpotifyError(
            r.status_code,
            f"Spotify {label} failed",
            details if details is not None else "Unknown error",
        )

    return r


def _json_body(r: requests.Response) -> Optional[Dict]:
    body = json_or_text(r)
    return body if isinstance(body, dict) else None


def _artist_names(artists: Optional[List[Dict]]) -> Optional[str]:
    if artists is None:
        return None
    return ", ".join(a.get("name", "") for a in artists)


# --------- Playback commands ---------
def next_track(access_token: str) -> None:
    _spotify_request(access_token, "POST", "me/player/next", "/next")


def pause(access_token: str) -> None:
    _spotify_request(access_token, "PUT", "me/player/pause", "/pause")


def play(access_token: str) -> None:
    _spotify_request(access_token, "PUT", "me/player/play", "/play")


def queue(access_token: str, uri: str) -> None:
    _spotify_request(access_token, "POST", "me/player/queue", "/queue", params={"uri": uri})


def seek(access_token: str, position_ms: int) -> None:
    _spotify_request(
        access_token, "PUT", "me/player/seek", "/seek", params={"position_ms": position_ms}
    )


# --------- Read-only ---------
def currently_playing(access_token: str) -> Optional[Dict[str, Any]]:
    """
    - None: nothing is playing (Spotify answered 204)
    - dict: is_playing / track / artist / album of the current item
    """
    r = _spotify_request(
        access_token, "GET", "me/player/currently-playing", "/currently-playing"
    )
    if r.status_code == 204:
        return None

    data = _json_body(r) or {}
    item = data.get("item") or {}

    return {
        "is_playing": data.get("is_playing"),
        "track": item.get("name"),
        "artist": _artist_names(item.get("artists")),
        "album": (item.get("album") or {}).get("name"),
    }


def playback_position(access_token: str) -> Optional[Dict[str, int]]:
    """
    - None: no active device (204)
    - dict: progress_ms / duration_ms, 0 when Spotify leaves them out
    """
    r = _spotify_request(access_token, "GET", "me/player", "/player")
    if r.status_code == 204:
        return None

    data = _json_body(r) or {}
    item = data.get("item") or {}

    return {
        "progress_ms": data.get("progress_ms") or 0,
        "duration_ms": item.get("duration_ms") or 0,
    }


def search_tracks(access_token: str, q: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Dict]:
    r = _spotify_request(
        access_token,
        "GET",
        "search",
        "/search",
        params={"q": q, "type": "track", "limit": limit},
    )

    data = _json_body(r) or {}
    items = (data.get("tracks") or {}).get("items") or []

    results = []
    for t in items[:limit]:
        if not t:
            continue
        results.append({
            "id": t.get("id"),
            "name": t.get("name"),
            "artist": _artist_names(t.get("artists") or []),
            "album": (t.get("album") or {}).get("name"),
            "uri": t.get("uri"),
        })

    return results

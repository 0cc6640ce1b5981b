# brainwaves/services/spotify_http.py
from typing import Any, Optional

import requests


def bearer_headers(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


def json_or_text(r: requests.Response) -> Optional[Any]:
    """
    Spotify answers 204 with no body, errors with JSON,
    and proxies / rate limiters sometimes with HTML or plain text.
    Returns the parsed JSON, the raw text, or None when the body is empty.
    """
    if not r.text:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text

# brainwaves/services/errors.py
from typing import Any, Optional


class BrainWavesError(Exception):
    """
    Base error for everything the API reports as {ok: false, error, message, details?}.
    status_code is the HTTP status the response is sent with.
    """

    status_code = 500
    code = "server_error"
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"ok": False, "error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ===== 400: client input =====

class MissingFieldError(BrainWavesError):
    status_code = 400

    def __init__(self, field: str, message: str):
        self.code = f"missing_{field}"
        super().__init__(message)


class InvalidRequestError(BrainWavesError):
    status_code = 400
    code = "invalid_request"
    default_message = "Invalid request body"


# ===== 401: session / token =====

class InvalidSessionError(BrainWavesError):
    status_code = 401
    code = "invalid_session"
    default_message = "Invalid session"


class TokenRefreshFailedError(BrainWavesError):
    status_code = 401
    code = "token_refresh_failed"
    default_message = "Token refresh failed"


# ===== upstream =====

class SpotifyError(BrainWavesError):
    code = "spotify_error"
    default_message = "Spotify request failed"

    def __init__(self, status_code: int, message: Optional[str] = None, details: Any = None):
        self.status_code = status_code
        super().__init__(message, details)


def require(value: Any, field: str, message: str) -> Any:
    """Raise missing_<field> when value is None or empty."""
    if value is None or value == "":
        raise MissingFieldError(field, message)
    return value

from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional

# ======================================================
# Request bodies
# ======================================================
# Every field is optional on purpose: a missing field is reported as
# missing_<field> by the route, not as a validation error. Range checks
# also live in the route so they run after the session check.

class SessionRequest(BaseModel):
    session: Optional[str] = None

    @field_validator("session", mode="before")
    @classmethod
    def _session_as_text(cls, v: Any) -> Any:
        # A numeric session is looked up like any other unknown token
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class SearchRequest(SessionRequest):
    q: Optional[str] = None
    limit: int = Field(5, description="Max number of tracks returned, 1..50")


class QueueRequest(SessionRequest):
    uri: Optional[str] = Field(None, description="e.g. spotify:track:...")


class SeekRequest(SessionRequest):
    position_ms: Optional[int] = None


# ======================================================
# Responses
# ======================================================

class OkResponse(BaseModel):
    ok: bool = True


class TrackResult(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    uri: Optional[str] = None


class SearchResponse(OkResponse):
    q: str
    results: List[TrackResult]


class QueueResponse(OkResponse):
    queued: str


class SeekResponse(OkResponse):
    position_ms: int

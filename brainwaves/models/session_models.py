# brainwaves/models/session_models.py
from pydantic import BaseModel
from typing import Any, Optional


class AccessTokenResponse(BaseModel):
    ok: bool = True
    access_token: str
    expires_in: Optional[int] = None


class SessionCheckResponse(BaseModel):
    ok: bool = True
    exists: bool


# Uniform failure body for every JSON route
class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str
    details: Optional[Any] = None

# brainwaves/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brainwaves.config.settings import LOG_LEVEL, PUBLIC_BASE_URL, ensure_settings, log_settings

# === Import Routers ===
from brainwaves.api.spotify_auth_api import router as spotify_auth_router
from brainwaves.api.session_api import router as session_router
from brainwaves.api.player_api import router as player_router
from brainwaves.services.errors import BrainWavesError, InvalidRequestError

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Refuse to boot without credentials / URLs
log_settings()
ensure_settings()

app = FastAPI(
    title="BrainWaves Backend",
    description=(
        "Session token keeper for the BrainWaves remote: "
        "• Spotify OAuth (authorization code) "
        "• Session → refresh token → access token "
        "• Playback commands proxied to the Spotify Web API"
    ),
    version="0.1.0"
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error shape: {ok: false, error, message, details?} ===
@app.exception_handler(BrainWavesError)
async def brainwaves_error_handler(request: Request, exc: BrainWavesError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    body = {
        "ok": False,
        "error": HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
        "message": str(exc.detail),
    }
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    err = InvalidRequestError(details=[
        {"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()
    ])
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    err = BrainWavesError(str(exc) or None)
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


# === Spotify OAuth (/login, /callback) ===
app.include_router(spotify_auth_router, tags=["Spotify OAuth"])

# === Session token keeper (/token, /session/check) ===
app.include_router(session_router, tags=["Session"])

# === Playback proxy (/spotify/*) ===
app.include_router(player_router, prefix="/spotify", tags=["Playback"])


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "BrainWaves backend alive"
    }


logger.info("BrainWaves backend ready, public URL: %s", PUBLIC_BASE_URL)

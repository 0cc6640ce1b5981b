import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_env():
    if os.getenv("ENVIRONMENT") == "production":
        return

    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    env_path = os.path.join(base_dir, ".env")

    if os.path.exists(env_path):
        load_dotenv(env_path)


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


# Load env now
load_env()

# Spotify app credentials
CLIENT_ID = _env("SPOTIFY_CLIENT_ID")
CLIENT_SECRET = _env("SPOTIFY_CLIENT_SECRET")

# Where this backend is reachable (the OAuth redirect_uri is built from it)
PUBLIC_BASE_URL = _env("PUBLIC_BASE_URL").rstrip("/")

# Deep link the mobile app listens on, e.g. brainwaves://callback
APP_REDIRECT_URL = _env("APP_REDIRECT_URL")

# Upstream endpoints
SPOTIFY_ACCOUNTS_URL = _env("SPOTIFY_ACCOUNTS_URL", "https://accounts.spotify.com").rstrip("/")
SPOTIFY_API_BASE = _env("SPOTIFY_API_BASE", "https://api.spotify.com/v1").rstrip("/")
REQUEST_TIMEOUT = float(_env("SPOTIFY_REQUEST_TIMEOUT", "10"))

# Logging
LOG_LEVEL = _env("LOG_LEVEL", "INFO").upper()

REQUIRED_SETTINGS = (
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
    "PUBLIC_BASE_URL",
    "APP_REDIRECT_URL",
)


def missing_settings() -> list:
    """Names of the required variables that are empty or unset."""
    values = {
        "SPOTIFY_CLIENT_ID": CLIENT_ID,
        "SPOTIFY_CLIENT_SECRET": CLIENT_SECRET,
        "PUBLIC_BASE_URL": PUBLIC_BASE_URL,
        "APP_REDIRECT_URL": APP_REDIRECT_URL,
    }
    return [name for name in REQUIRED_SETTINGS if not values[name]]


def log_settings():
    logger.info("=== BrainWaves Backend Boot ===")
    logger.info("SPOTIFY_CLIENT_ID: %s", CLIENT_ID or "(missing)")
    logger.info("SPOTIFY_CLIENT_SECRET: %s", "loaded" if CLIENT_SECRET else "(missing)")
    logger.info("PUBLIC_BASE_URL: %s", PUBLIC_BASE_URL or "(missing)")
    logger.info("APP_REDIRECT_URL: %s", APP_REDIRECT_URL or "(missing)")


def ensure_settings():
    """
    Stop the process when any required variable is missing.
    Called once while the app is being built.
    """
    missing = missing_settings()
    if missing:
        logger.error("Missing env vars: %s. Check your .env file.", ", ".join(missing))
        raise SystemExit(1)

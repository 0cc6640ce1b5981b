import secrets
import threading
import time
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 24
LOGIN_STATE_TTL_SECONDS = 600  # a /login has 10 minutes to come back through /callback
MAX_PENDING_LOGIN_STATES = 1000


def random_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)


class SessionStore:
    """
    In-memory map: session token -> Spotify refresh token.
    Nothing is persisted, a restart drops every session.
    """

    def __init__(self):
        self._sessions: Dict[str, str] = {}
        self._lock = threading.Lock()

    # --------------------------
    # Create session
    # --------------------------
    def create(self, refresh_token: str) -> str:
        with self._lock:
            session = random_token()
            while session in self._sessions:
                session = random_token()
            self._sessions[session] = refresh_token

        logger.info("Session created (%d active)", len(self))
        return session

    def get(self, session: str) -> Optional[str]:
        return self._sessions.get(session)

    def exists(self, session: str) -> bool:
        return session in self._sessions

    # --------------------------
    # Replace the refresh token when Spotify rotates it
    # --------------------------
    def rotate(self, session: str, refresh_token: str) -> None:
        with self._lock:
            if session in self._sessions:
                self._sessions[session] = refresh_token

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


class LoginStateStore:
    """
    OAuth `state` values handed out by /login.
    Each one is valid once, for LOGIN_STATE_TTL_SECONDS. At most max_pending
    are kept; past that the oldest pending login is dropped.
    """

    def __init__(self, ttl_sec: int = LOGIN_STATE_TTL_SECONDS, max_pending: int = MAX_PENDING_LOGIN_STATES):
        self.ttl_sec = ttl_sec
        self.max_pending = max_pending
        self._states: Dict[str, int] = {}
        self._lock = threading.Lock()

    def issue(self) -> str:
        now = int(time.time())
        state = random_token()
        with self._lock:
            self._purge(now)
            while len(self._states) >= self.max_pending:
                # dicts keep insertion order, so the first key expires first
                del self._states[next(iter(self._states))]
            self._states[state] = now + self.ttl_sec
        return state

    def consume(self, state: Optional[str]) -> bool:
        """
        - unknown → False
        - expired → False (and forgotten)
        - valid   → True (and forgotten, so it cannot be replayed)
        """
        if not state:
            return False

        with self._lock:
            expires_at = self._states.pop(state, None)

        if expires_at is None:
            return False
        return expires_at >= int(time.time())

    def _purge(self, now: int) -> None:
        expired = [s for s, exp in self._states.items() if exp < now]
        for s in expired:
            del self._states[s]

    def clear(self) -> None:
        with self._lock:
            self._states.clear()

    def __len__(self) -> int:
        return len(self._states)


session_store = SessionStore()
login_state_store = LoginStateStore()


def get_session_store() -> SessionStore:
    return session_store


def get_login_state_store() -> LoginStateStore:
    return login_state_store

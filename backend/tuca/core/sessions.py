"""
Server-side sessions referenced by a signed cookie
"""

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Dict, Optional

from jose import JWTError, jwt

from tuca.core.settings import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Generated per process when SESSION_SECRET is unset; sessions then die with the process
SESSION_SECRET = settings.SESSION_SECRET or secrets.token_hex(32)


@dataclass
class SessionData:
    user_id: int
    expires_at: float


class SessionStore:
    """In-memory session table with expiry and periodic pruning"""

    def __init__(
        self,
        max_age: int = settings.SESSION_MAX_AGE_SECONDS,
        prune_interval: int = settings.SESSION_PRUNE_INTERVAL_SECONDS,
    ):
        self.max_age = max_age
        self.prune_interval = prune_interval
        self._sessions: Dict[str, SessionData] = {}
        self._last_prune = time.time()

    def create(self, user_id: int) -> str:
        self._maybe_prune()
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = SessionData(user_id=user_id, expires_at=time.time() + self.max_age)
        return session_id

    def get_user_id(self, session_id: str) -> Optional[int]:
        self._maybe_prune()
        data = self._sessions.get(session_id)
        if data is None:
            return None
        if data.expires_at <= time.time():
            self._sessions.pop(session_id, None)
            return None
        return data.user_id

    def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def destroy_user_sessions(self, user_id: int) -> int:
        doomed = [sid for sid, data in self._sessions.items() if data.user_id == user_id]
        for sid in doomed:
            del self._sessions[sid]
        return len(doomed)

    def prune(self) -> int:
        now = time.time()
        expired = [sid for sid, data in self._sessions.items() if data.expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        self._last_prune = now
        if expired:
            logger.info(f"Pruned {len(expired)} expired sessions")
        return len(expired)

    def _maybe_prune(self) -> None:
        if time.time() - self._last_prune >= self.prune_interval:
            self.prune()

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


def sign_session_id(session_id: str) -> str:
    return jwt.encode({"sid": session_id, "type": "session"}, SESSION_SECRET, algorithm=ALGORITHM)


def unsign_session_id(cookie_value: str) -> Optional[str]:
    """Return the session id from a cookie value, or None when the signature does not check out"""
    try:
        payload = jwt.decode(cookie_value, SESSION_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Session cookie rejected: {e}")
        return None

    if payload.get("type") != "session":
        return None
    return payload.get("sid")


session_store = SessionStore()

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt

from tuca.core.passwords import verify_password
from tuca.core.sessions import ALGORITHM, SESSION_SECRET, session_store, sign_session_id, unsign_session_id
from tuca.core.settings import settings
from tuca.db.models import User
from tuca.storage.base import Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)


# ===== SESSION COOKIE =====

def get_session_id(request: Request) -> Optional[str]:
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not cookie:
        return None
    return unsign_session_id(cookie)


def get_session_user_id(request: Request) -> Optional[int]:
    session_id = get_session_id(request)
    if not session_id:
        return None
    return session_store.get_user_id(session_id)


def start_session(response: Response, user_id: int) -> str:
    """Create a session for the user and attach its signed cookie to the response"""
    session_id = session_store.create(user_id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(session_id),
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    return session_id


def end_session(request: Request, response: Response) -> None:
    session_id = get_session_id(request)
    if session_id:
        session_store.destroy(session_id)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")


# ===== DEPENDENCIES =====

def require_auth(request: Request) -> int:
    """Return the session user id or reject with 401"""
    user_id = get_session_user_id(request)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return user_id


async def get_current_user(
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> User:
    user = await storage.get_user(user_id)
    if not user:
        logger.warning(f"Session references missing user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return user


async def require_admin(
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> User:
    user = await storage.get_user(user_id)
    if not user or not user.is_admin:
        logger.warning(f"Admin access denied for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user


async def authenticate_user(storage: Storage, email: str, password: str) -> Optional[User]:
    user = await storage.get_user_by_email(email)
    if not user:
        logger.warning("Authentication failed: unknown email")
        return None
    if not verify_password(password, user.password_hash):
        logger.warning(f"Authentication failed: invalid password for user {user.id}")
        return None
    logger.info(f"User authenticated successfully: {user.id}")
    return user


# ===== PASSWORD RESET =====

def _password_fingerprint(user: User) -> str:
    return hashlib.sha256(user.password_hash.encode()).hexdigest()[:16]


def create_password_reset_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Signed token that stops working once the password changes or it expires"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "fp": _password_fingerprint(user),
        "type": "reset",
        "exp": expire,
    }
    return jwt.encode(to_encode, SESSION_SECRET, algorithm=ALGORITHM)


async def resolve_password_reset_token(storage: Storage, token: str) -> Optional[User]:
    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Password reset token rejected: {e}")
        return None

    if payload.get("type") != "reset" or not payload.get("sub"):
        return None

    try:
        user_id = int(payload["sub"])
    except ValueError:
        return None

    user = await storage.get_user(user_id)
    if not user or payload.get("fp") != _password_fingerprint(user):
        return None
    return user

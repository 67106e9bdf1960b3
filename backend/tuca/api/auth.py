from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
import structlog

from tuca.api.schemas import (
    AuthResponse, CurrentUserResponse, LoginRequest, MessageResponse,
    PasswordResetConfirm, PasswordResetRequest, RegisterRequest, UserProfile,
)
from tuca.core.passwords import get_password_hash, validate_password_strength
from tuca.core.rate_limit import limiter
from tuca.core.security import (
    authenticate_user,
    create_password_reset_token,
    end_session,
    get_session_user_id,
    resolve_password_reset_token,
    start_session,
)
from tuca.core.sessions import session_store
from tuca.core.settings import settings
from tuca.db.models import UserRole
from tuca.storage.base import DuplicateError, Storage
from tuca.storage.provider import get_storage

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = "If an account exists for this email, a password reset link has been sent"


def ensure_strong_password(password: str) -> None:
    validation = validate_password_strength(password)
    if not validation["is_valid"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="; ".join(validation["errors"])
        )


@router.post("/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User registered and signed in"},
        400: {"description": "Invalid input or email already registered"},
        429: {"description": "Too many registration attempts"},
    },
    summary="User registration",
)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register(
    request: Request,
    response: Response,
    payload: RegisterRequest,
    storage: Storage = Depends(get_storage),
):
    """Create an account with the sign-up questionnaire answers and start a session"""
    ensure_strong_password(payload.password)

    if await storage.get_user_by_email(payload.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    data = payload.storage_fields(exclude={"password", "confirm_password"})
    data.update({
        "password_hash": get_password_hash(payload.password),
        "role": UserRole.USER.value,
    })

    try:
        user = await storage.create_user(data)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("user_registration_error", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed"
        )

    start_session(response, user.id)
    logger.info(
        "user_registration_success",
        user_id=user.id,
        ip_address=request.client.host if request.client else None
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserProfile.model_validate(user),
    )


@router.post("/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"},
    },
    summary="User login",
)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest,
    storage: Storage = Depends(get_storage),
):
    user = await authenticate_user(storage, payload.email, payload.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    start_session(response, user.id)
    logger.info(
        "user_login_success",
        user_id=user.id,
        ip_address=request.client.host if request.client else None
    )
    return AuthResponse(message="Login successful", user=UserProfile.model_validate(user))


@router.post("/logout", response_model=MessageResponse, summary="User logout")
async def logout(request: Request, response: Response):
    """Destroy the server-side session and clear its cookie"""
    user_id = get_session_user_id(request)
    end_session(request, response)
    if user_id is not None:
        logger.info("user_logout", user_id=user_id)
    return MessageResponse(message="Logout successful")


@router.get("/me",
    response_model=CurrentUserResponse,
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Session user no longer exists"},
    },
)
async def me(request: Request, storage: Storage = Depends(get_storage)):
    user_id = get_session_user_id(request)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    user = await storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return CurrentUserResponse(user=UserProfile.model_validate(user))


@router.post("/password-reset",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request a password reset",
)
async def request_password_reset(
    payload: PasswordResetRequest,
    storage: Storage = Depends(get_storage),
):
    """Issue a reset token; the response never reveals whether the email is registered"""
    user = await storage.get_user_by_email(payload.email)
    if user:
        token = create_password_reset_token(user)
        if settings.is_production:
            logger.info("password_reset_requested", user_id=user.id)
        else:
            # No mail delivery; the link is only surfaced in development logs
            logger.info("password_reset_requested", user_id=user.id, reset_link=f"/reset-password?token={token}")
    else:
        logger.info("password_reset_unknown_email")

    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/password-reset/confirm",
    response_model=MessageResponse,
    responses={400: {"description": "Invalid or expired reset token"}},
    summary="Set a new password with a reset token",
)
async def confirm_password_reset(
    payload: PasswordResetConfirm,
    storage: Storage = Depends(get_storage),
):
    user = await resolve_password_reset_token(storage, payload.token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired reset token"
        )

    ensure_strong_password(payload.password)
    await storage.update_user(user.id, {"password_hash": get_password_hash(payload.password)})
    revoked = session_store.destroy_user_sessions(user.id)

    logger.info("password_reset_completed", user_id=user.id, sessions_revoked=revoked)
    return MessageResponse(message="Password has been reset successfully")

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from tuca.api.auth import ensure_strong_password
from tuca.api.schemas import (
    ChangePasswordRequest, MessageResponse, RoleUpdate, UserProfile, UserProfileUpdate,
)
from tuca.core.passwords import get_password_hash, verify_password
from tuca.core.security import get_current_user, require_admin
from tuca.db.models import User
from tuca.storage.base import DuplicateError, NotFoundError, Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfile)
async def read_profile(current_user: User = Depends(get_current_user)):
    """Profile of the signed-in user including travel preferences"""
    return current_user


@router.patch("/me",
    response_model=UserProfile,
    responses={400: {"description": "Email already in use"}},
)
async def update_profile(
    payload: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    data = payload.storage_fields()
    if not data:
        return current_user

    try:
        user = await storage.update_user(current_user.id, data)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Profile updated for user {user.id}: {sorted(data)}")
    return user


@router.post("/me/change-password",
    response_model=MessageResponse,
    responses={400: {"description": "Wrong current password or weak new password"}},
)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if not verify_password(payload.current_password, current_user.password_hash):
        logger.warning(f"Password change failed: invalid current password for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    ensure_strong_password(payload.new_password)
    await storage.update_user(current_user.id, {"password_hash": get_password_hash(payload.new_password)})

    logger.info(f"Password changed successfully for user {current_user.id}")
    return MessageResponse(message="Password changed successfully")


@router.get("", response_model=List[UserProfile])
async def list_users(
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await storage.list_users()


@router.patch("/{user_id}/role",
    response_model=UserProfile,
    responses={404: {"description": "User not found"}},
)
async def update_role(
    user_id: int,
    payload: RoleUpdate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    try:
        user = await storage.update_user(user_id, {"role": payload.role.value})
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info(f"Admin {admin.id} set role of user {user_id} to {payload.role.value}")
    return user

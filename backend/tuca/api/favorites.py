import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tuca.api.schemas import (
    FavoriteCheck, FavoriteCreate, FavoriteNotesUpdate, FavoriteRead, MessageResponse,
)
from tuca.core.security import require_auth
from tuca.db.models import CatalogKind, Favorite
from tuca.storage.base import DuplicateError, Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["favorites"])


async def get_owned_favorite(
    favorite_id: int,
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> Favorite:
    favorite = await storage.get_favorite(favorite_id)
    if not favorite:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
    if favorite.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return favorite


@router.get("", response_model=List[FavoriteRead])
async def list_favorites(
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
):
    return await storage.list_favorites(user_id)


@router.post("",
    response_model=FavoriteRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Unknown item or already a favorite"}},
)
async def add_favorite(
    payload: FavoriteCreate,
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
):
    if not await storage.get_item(payload.item_type, payload.item_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{payload.item_type.value.capitalize()} {payload.item_id} does not exist"
        )

    try:
        favorite = await storage.add_favorite({
            "user_id": user_id,
            "item_type": payload.item_type.value,
            "item_id": payload.item_id,
            "notes": payload.notes,
        })
    except DuplicateError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Item is already in favorites"
        )

    logger.info(f"User {user_id} saved {payload.item_type.value} {payload.item_id}")
    return favorite


@router.get("/check", response_model=FavoriteCheck)
async def check_favorite(
    item_type: CatalogKind = Query(..., alias="itemType"),
    item_id: int = Query(..., alias="itemId"),
    user_id: int = Depends(require_auth),
    storage: Storage = Depends(get_storage),
):
    favorite = await storage.find_favorite(user_id, item_type.value, item_id)
    return FavoriteCheck(is_favorite=favorite is not None)


@router.get("/{favorite_id}", response_model=FavoriteRead)
async def get_favorite(favorite: Favorite = Depends(get_owned_favorite)):
    return favorite


@router.patch("/{favorite_id}", response_model=FavoriteRead)
async def update_favorite_notes(
    payload: FavoriteNotesUpdate,
    favorite: Favorite = Depends(get_owned_favorite),
    storage: Storage = Depends(get_storage),
):
    return await storage.update_favorite_notes(favorite.id, payload.notes)


@router.delete("/{favorite_id}", response_model=MessageResponse)
async def delete_favorite(
    favorite: Favorite = Depends(get_owned_favorite),
    storage: Storage = Depends(get_storage),
):
    await storage.delete_favorite(favorite.id)
    return MessageResponse(message="Favorite removed successfully")

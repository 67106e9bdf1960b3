import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from tuca.api.schemas import MessageResponse, TestimonialCreate, TestimonialRead
from tuca.core.security import get_current_user, require_admin
from tuca.db.models import TESTIMONIAL_TARGETS, User
from tuca.storage.base import NotFoundError, Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


@router.get("", response_model=List[TestimonialRead])
async def list_testimonials(storage: Storage = Depends(get_storage)):
    return await storage.list_testimonials()


@router.get("/approved", response_model=List[TestimonialRead])
async def list_approved_testimonials(storage: Storage = Depends(get_storage)):
    return await storage.list_testimonials(approved_only=True)


@router.post("",
    response_model=TestimonialRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Referenced item does not exist"}},
)
async def create_testimonial(
    payload: TestimonialCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """The author is always the session user; only admins may publish directly"""
    for kind, column in TESTIMONIAL_TARGETS.items():
        target_id = getattr(payload, column)
        if target_id is not None and not await storage.get_item(kind, target_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{kind.value.capitalize()} {target_id} does not exist"
            )

    data = payload.model_dump()
    data["user_id"] = current_user.id
    data["approved"] = bool(payload.approved and current_user.is_admin)

    testimonial = await storage.create_testimonial(data)
    logger.info(f"Testimonial {testimonial.id} submitted by user {current_user.id}")
    return testimonial


@router.patch("/{testimonial_id}/approve",
    response_model=TestimonialRead,
    responses={404: {"description": "Testimonial not found"}},
)
async def approve_testimonial(
    testimonial_id: int,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    try:
        testimonial = await storage.approve_testimonial(testimonial_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Testimonial not found")

    logger.info(f"Admin {admin.id} approved testimonial {testimonial_id}")
    return testimonial


@router.delete("/{testimonial_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Testimonial not found"}},
)
async def delete_testimonial(
    testimonial_id: int,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if not await storage.delete_testimonial(testimonial_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Testimonial not found")
    return MessageResponse(message="Testimonial deleted successfully")

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from tuca.api.schemas import BookingCreate, BookingRead, BookingStatusUpdate
from tuca.core.pricing import BookingRuleError, calculate_total_price, check_guests
from tuca.core.security import get_current_user, require_admin
from tuca.db.models import Booking, BookingStatus, User
from tuca.storage.base import NotFoundError, Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])

CANCELLABLE_STATUSES = {BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value}


async def get_visible_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> Booking:
    booking = await storage.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    if booking.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return booking


@router.post("",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Unknown item or party size out of range"}},
)
async def create_booking(
    payload: BookingCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Book a catalog item; the total price is always computed here"""
    item = await storage.get_item(payload.booking_type, payload.item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{payload.booking_type.value.capitalize()} {payload.item_id} does not exist"
        )

    try:
        check_guests(payload.booking_type, item, payload.guests)
    except BookingRuleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    total_price = calculate_total_price(
        payload.booking_type, item, payload.start_date, payload.end_date, payload.guests
    )
    booking = await storage.create_booking({
        "user_id": current_user.id,
        "booking_type": payload.booking_type.value,
        "item_id": payload.item_id,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "guests": payload.guests,
        "total_price": total_price,
        "status": BookingStatus.PENDING.value,
    })

    logger.info(
        f"Booking {booking.id} created by user {current_user.id}: "
        f"{payload.booking_type.value} {payload.item_id}, total {total_price}"
    )
    return booking


@router.get("", response_model=List[BookingRead])
async def list_bookings(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Own bookings; admins see every booking"""
    if current_user.is_admin:
        return await storage.list_bookings()
    return await storage.list_bookings(user_id=current_user.id)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(booking: Booking = Depends(get_visible_booking)):
    return booking


@router.patch("/{booking_id}/cancel",
    response_model=BookingRead,
    responses={400: {"description": "Booking can no longer be cancelled"}},
)
async def cancel_booking(
    booking: Booking = Depends(get_visible_booking),
    storage: Storage = Depends(get_storage),
):
    if booking.status not in CANCELLABLE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot cancel a {booking.status} booking"
        )

    updated = await storage.update_booking_status(booking.id, BookingStatus.CANCELLED.value)
    logger.info(f"Booking {booking.id} cancelled")
    return updated


@router.patch("/{booking_id}/status",
    response_model=BookingRead,
    responses={404: {"description": "Booking not found"}},
)
async def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    try:
        booking = await storage.update_booking_status(booking_id, payload.status.value)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    logger.info(f"Admin {admin.id} set booking {booking_id} to {payload.status.value}")
    return booking

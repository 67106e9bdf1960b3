"""
Admin dashboard statistics
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from tuca.api.schemas import AdminStats, KindStats
from tuca.core.security import require_admin
from tuca.db.models import BookingStatus, CatalogKind, User
from tuca.storage.base import Storage
from tuca.storage.provider import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats",
    response_model=AdminStats,
    responses={
        200: {"description": "Dashboard statistics retrieved successfully"},
        500: {"description": "Storage error"}
    },
    summary="Get dashboard statistics",
    description="Counts for every catalog kind plus users, bookings and testimonials awaiting review"
)
async def get_admin_stats(
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    try:
        catalog = {}
        for kind in CatalogKind:
            catalog[kind.value] = KindStats(
                total=await storage.count_items(kind),
                featured=await storage.count_items(kind, featured_only=True),
            )
        total_items = sum(s.total for s in catalog.values())

        users = await storage.list_users()
        bookings = await storage.list_bookings()
        testimonials = await storage.list_testimonials()

        stats = AdminStats(
            catalog=catalog,
            total_items=total_items,
            users=len(users),
            admins=sum(1 for u in users if u.is_admin),
            bookings=len(bookings),
            pending_bookings=sum(1 for b in bookings if b.status == BookingStatus.PENDING.value),
            testimonials=len(testimonials),
            pending_testimonials=sum(1 for t in testimonials if not t.approved),
            last_updated=datetime.now(timezone.utc),
        )

        logger.info(f"Admin stats retrieved: {total_items} catalog items")
        return stats

    except Exception as e:
        logger.error(f"Error retrieving admin stats: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve dashboard statistics"
        )

"""
In-memory storage backend: one dict per entity with auto-incrementing ids
"""

import logging
from typing import Any, Dict, List, Optional, Type

from sqlmodel import SQLModel

from tuca.db.models import (
    Booking, CATALOG_MODELS, CatalogKind, Favorite, FEATURABLE_KINDS,
    TESTIMONIAL_TARGETS, Testimonial, User,
)
from tuca.storage.base import DuplicateError, NotFoundError, Storage, normalize_email
from tuca.storage.seed import (
    SAMPLE_CATALOG, SAMPLE_TESTIMONIALS, admin_user_data, sample_testimonial,
)

logger = logging.getLogger(__name__)


class _Table:
    """Rows of one entity keyed by id"""

    def __init__(self, model: Type[SQLModel]):
        self.model = model
        self.rows: Dict[int, Any] = {}
        self.next_id = 1

    def insert(self, data: Dict[str, Any]) -> Any:
        row = self.model(**{**data, "id": self.next_id})
        self.rows[self.next_id] = row
        self.next_id += 1
        return row

    def values(self) -> List[Any]:
        return [self.rows[k] for k in sorted(self.rows)]


def _apply(row: Any, data: Dict[str, Any]) -> Any:
    for key, value in data.items():
        if key in ("id", "created_at"):
            continue
        setattr(row, key, value)
    return row


class MemStorage(Storage):
    def __init__(self, seed: bool = True):
        self.users = _Table(User)
        self.catalog: Dict[CatalogKind, _Table] = {
            kind: _Table(model) for kind, model in CATALOG_MODELS.items()
        }
        self.testimonials = _Table(Testimonial)
        self.favorites = _Table(Favorite)
        self.bookings = _Table(Booking)

        if seed:
            self._seed()

    def _seed(self) -> None:
        admin = self.users.insert(admin_user_data())
        catalog_ids: Dict[CatalogKind, List[int]] = {}
        for kind, rows in SAMPLE_CATALOG:
            for row in rows:
                item = self.catalog[kind].insert(dict(row))
                catalog_ids.setdefault(kind, []).append(item.id)
        for row in SAMPLE_TESTIMONIALS:
            self.testimonials.insert(sample_testimonial(row, admin.id, catalog_ids))
        logger.info("In-memory storage seeded with sample data")

    # ===== USERS =====

    async def get_user(self, user_id: int) -> Optional[User]:
        return self.users.rows.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        email = normalize_email(email)
        for user in self.users.rows.values():
            if user.email == email:
                return user
        return None

    async def list_users(self) -> List[User]:
        return self.users.values()

    async def create_user(self, data: Dict[str, Any]) -> User:
        data = {**data, "email": normalize_email(data["email"])}
        if await self.get_user_by_email(data["email"]):
            raise DuplicateError("User with this email already exists")
        return self.users.insert(data)

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        user = self.users.rows.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        if "email" in data:
            data = {**data, "email": normalize_email(data["email"])}
            existing = await self.get_user_by_email(data["email"])
            if existing and existing.id != user_id:
                raise DuplicateError("User with this email already exists")
        return _apply(user, data)

    # ===== CATALOG =====

    async def list_items(self, kind: CatalogKind, featured_only: bool = False) -> List[Any]:
        items = self.catalog[kind].values()
        if featured_only:
            if kind not in FEATURABLE_KINDS:
                return []
            items = [item for item in items if item.featured]
        return items

    async def get_item(self, kind: CatalogKind, item_id: int) -> Optional[Any]:
        return self.catalog[kind].rows.get(item_id)

    async def create_item(self, kind: CatalogKind, data: Dict[str, Any]) -> Any:
        return self.catalog[kind].insert(data)

    async def update_item(self, kind: CatalogKind, item_id: int, data: Dict[str, Any]) -> Any:
        item = self.catalog[kind].rows.get(item_id)
        if item is None:
            raise NotFoundError(kind.value.capitalize(), item_id)
        return _apply(item, data)

    async def delete_item(self, kind: CatalogKind, item_id: int) -> bool:
        if self.catalog[kind].rows.pop(item_id, None) is None:
            return False

        self.favorites.rows = {
            fid: fav for fid, fav in self.favorites.rows.items()
            if not (fav.item_type == kind.value and fav.item_id == item_id)
        }

        column = TESTIMONIAL_TARGETS.get(kind)
        if column:
            for testimonial in self.testimonials.rows.values():
                if getattr(testimonial, column) == item_id:
                    setattr(testimonial, column, None)
        return True

    async def count_items(self, kind: CatalogKind, featured_only: bool = False) -> int:
        return len(await self.list_items(kind, featured_only))

    # ===== TESTIMONIALS =====

    async def list_testimonials(self, approved_only: bool = False) -> List[Testimonial]:
        items = self.testimonials.values()
        if approved_only:
            items = [t for t in items if t.approved]
        return items

    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]:
        return self.testimonials.rows.get(testimonial_id)

    async def create_testimonial(self, data: Dict[str, Any]) -> Testimonial:
        return self.testimonials.insert(data)

    async def approve_testimonial(self, testimonial_id: int) -> Testimonial:
        testimonial = self.testimonials.rows.get(testimonial_id)
        if testimonial is None:
            raise NotFoundError("Testimonial", testimonial_id)
        testimonial.approved = True
        return testimonial

    async def delete_testimonial(self, testimonial_id: int) -> bool:
        return self.testimonials.rows.pop(testimonial_id, None) is not None

    # ===== FAVORITES =====

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        return [f for f in self.favorites.values() if f.user_id == user_id]

    async def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        return self.favorites.rows.get(favorite_id)

    async def find_favorite(self, user_id: int, item_type: str, item_id: int) -> Optional[Favorite]:
        for fav in self.favorites.rows.values():
            if fav.user_id == user_id and fav.item_type == item_type and fav.item_id == item_id:
                return fav
        return None

    async def add_favorite(self, data: Dict[str, Any]) -> Favorite:
        if await self.find_favorite(data["user_id"], data["item_type"], data["item_id"]):
            raise DuplicateError("Item is already in favorites")
        return self.favorites.insert(data)

    async def update_favorite_notes(self, favorite_id: int, notes: Optional[str]) -> Favorite:
        fav = self.favorites.rows.get(favorite_id)
        if fav is None:
            raise NotFoundError("Favorite", favorite_id)
        fav.notes = notes
        return fav

    async def delete_favorite(self, favorite_id: int) -> bool:
        return self.favorites.rows.pop(favorite_id, None) is not None

    # ===== BOOKINGS =====

    async def list_bookings(self, user_id: Optional[int] = None) -> List[Booking]:
        items = self.bookings.values()
        if user_id is not None:
            items = [b for b in items if b.user_id == user_id]
        return items

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.bookings.rows.get(booking_id)

    async def create_booking(self, data: Dict[str, Any]) -> Booking:
        return self.bookings.insert(data)

    async def update_booking_status(self, booking_id: int, status: str) -> Booking:
        booking = self.bookings.rows.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        booking.status = status
        return booking

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "backend": "memory",
            "users": len(self.users.rows),
            "bookings": len(self.bookings.rows),
        }

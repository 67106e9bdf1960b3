"""
SQL storage backend built on SQLModel tables and an async SQLAlchemy engine
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError

from tuca.db.models import (
    Booking, CATALOG_MODELS, CatalogKind, Favorite, FEATURABLE_KINDS,
    TESTIMONIAL_TARGETS, Testimonial, User,
)
from tuca.db.session import DatabaseManager
from tuca.storage.base import DuplicateError, NotFoundError, Storage, normalize_email
from tuca.storage.seed import seed_storage

logger = logging.getLogger(__name__)


def _apply(row: Any, data: Dict[str, Any]) -> Any:
    for key, value in data.items():
        if key in ("id", "created_at"):
            continue
        setattr(row, key, value)
    return row


class DatabaseStorage(Storage):
    def __init__(self, manager: Optional[DatabaseManager] = None):
        self.db = manager or DatabaseManager()

    async def initialize(self, seed: bool = True) -> None:
        """Create the engine and tables, seeding sample data into an empty database"""
        await self.db.initialize()
        await self.db.init_db()

        if seed:
            async with self.db.get_session() as session:
                user_count = (await session.execute(select(func.count()).select_from(User))).scalar_one()
            if user_count == 0:
                await seed_storage(self)

    async def _add(self, row: Any) -> Any:
        async with self.db.get_session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row

    async def _get(self, model, row_id: int) -> Optional[Any]:
        async with self.db.get_session() as session:
            return await session.get(model, row_id)

    async def _all(self, statement) -> List[Any]:
        async with self.db.get_session() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def _update(self, model, row_id: int, data: Dict[str, Any], entity: str) -> Any:
        async with self.db.get_session() as session:
            row = await session.get(model, row_id)
            if row is None:
                raise NotFoundError(entity, row_id)
            _apply(row, data)
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row

    async def _delete(self, model, row_id: int) -> bool:
        async with self.db.get_session() as session:
            row = await session.get(model, row_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            return True

    # ===== USERS =====

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        rows = await self._all(select(User).where(User.email == normalize_email(email)))
        return rows[0] if rows else None

    async def list_users(self) -> List[User]:
        return await self._all(select(User).order_by(User.id))

    async def create_user(self, data: Dict[str, Any]) -> User:
        data = {**data, "email": normalize_email(data["email"])}
        if await self.get_user_by_email(data["email"]):
            raise DuplicateError("User with this email already exists")
        try:
            user = await self._add(User(**data))
        except IntegrityError as e:
            raise DuplicateError("User with this email already exists") from e
        logger.info(f"Created user: {user.id}")
        return user

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        if "email" in data:
            data = {**data, "email": normalize_email(data["email"])}
            existing = await self.get_user_by_email(data["email"])
            if existing and existing.id != user_id:
                raise DuplicateError("User with this email already exists")
        return await self._update(User, user_id, data, "User")

    # ===== CATALOG =====

    async def list_items(self, kind: CatalogKind, featured_only: bool = False) -> List[Any]:
        model = CATALOG_MODELS[kind]
        statement = select(model).order_by(model.id)
        if featured_only:
            if kind not in FEATURABLE_KINDS:
                return []
            statement = statement.where(model.featured == True)  # noqa: E712
        return await self._all(statement)

    async def get_item(self, kind: CatalogKind, item_id: int) -> Optional[Any]:
        return await self._get(CATALOG_MODELS[kind], item_id)

    async def create_item(self, kind: CatalogKind, data: Dict[str, Any]) -> Any:
        item = await self._add(CATALOG_MODELS[kind](**data))
        logger.info(f"Created {kind.value} {item.id}")
        return item

    async def update_item(self, kind: CatalogKind, item_id: int, data: Dict[str, Any]) -> Any:
        return await self._update(CATALOG_MODELS[kind], item_id, data, kind.value.capitalize())

    async def delete_item(self, kind: CatalogKind, item_id: int) -> bool:
        model = CATALOG_MODELS[kind]
        async with self.db.get_session() as session:
            item = await session.get(model, item_id)
            if item is None:
                return False

            await session.execute(
                delete(Favorite).where(
                    Favorite.item_type == kind.value,
                    Favorite.item_id == item_id,
                )
            )
            column = TESTIMONIAL_TARGETS.get(kind)
            if column:
                await session.execute(
                    update(Testimonial)
                    .where(getattr(Testimonial, column) == item_id)
                    .values({column: None})
                )
            await session.delete(item)
            await session.commit()

        logger.info(f"Deleted {kind.value} {item_id}")
        return True

    async def count_items(self, kind: CatalogKind, featured_only: bool = False) -> int:
        model = CATALOG_MODELS[kind]
        statement = select(func.count()).select_from(model)
        if featured_only:
            if kind not in FEATURABLE_KINDS:
                return 0
            statement = statement.where(model.featured == True)  # noqa: E712
        async with self.db.get_session() as session:
            return (await session.execute(statement)).scalar_one()

    # ===== TESTIMONIALS =====

    async def list_testimonials(self, approved_only: bool = False) -> List[Testimonial]:
        statement = select(Testimonial).order_by(Testimonial.id)
        if approved_only:
            statement = statement.where(Testimonial.approved == True)  # noqa: E712
        return await self._all(statement)

    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]:
        return await self._get(Testimonial, testimonial_id)

    async def create_testimonial(self, data: Dict[str, Any]) -> Testimonial:
        return await self._add(Testimonial(**data))

    async def approve_testimonial(self, testimonial_id: int) -> Testimonial:
        return await self._update(Testimonial, testimonial_id, {"approved": True}, "Testimonial")

    async def delete_testimonial(self, testimonial_id: int) -> bool:
        return await self._delete(Testimonial, testimonial_id)

    # ===== FAVORITES =====

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        return await self._all(
            select(Favorite).where(Favorite.user_id == user_id).order_by(Favorite.id)
        )

    async def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        return await self._get(Favorite, favorite_id)

    async def find_favorite(self, user_id: int, item_type: str, item_id: int) -> Optional[Favorite]:
        rows = await self._all(
            select(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.item_type == item_type,
                Favorite.item_id == item_id,
            )
        )
        return rows[0] if rows else None

    async def add_favorite(self, data: Dict[str, Any]) -> Favorite:
        if await self.find_favorite(data["user_id"], data["item_type"], data["item_id"]):
            raise DuplicateError("Item is already in favorites")
        try:
            return await self._add(Favorite(**data))
        except IntegrityError as e:
            raise DuplicateError("Item is already in favorites") from e

    async def update_favorite_notes(self, favorite_id: int, notes: Optional[str]) -> Favorite:
        return await self._update(Favorite, favorite_id, {"notes": notes}, "Favorite")

    async def delete_favorite(self, favorite_id: int) -> bool:
        return await self._delete(Favorite, favorite_id)

    # ===== BOOKINGS =====

    async def list_bookings(self, user_id: Optional[int] = None) -> List[Booking]:
        statement = select(Booking).order_by(Booking.id)
        if user_id is not None:
            statement = statement.where(Booking.user_id == user_id)
        return await self._all(statement)

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        return await self._get(Booking, booking_id)

    async def create_booking(self, data: Dict[str, Any]) -> Booking:
        booking = await self._add(Booking(**data))
        logger.info(f"Created booking {booking.id} for user {booking.user_id}")
        return booking

    async def update_booking_status(self, booking_id: int, status: str) -> Booking:
        return await self._update(Booking, booking_id, {"status": status}, "Booking")

    # ===== LIFECYCLE =====

    async def health_check(self) -> Dict[str, Any]:
        return await self.db.health_check()

    async def close(self) -> None:
        await self.db.close()

"""
Storage interface shared by the in-memory and SQL backends
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from tuca.db.models import (
    Booking, CatalogKind, Favorite, Testimonial, User,
)


class StorageError(Exception):
    """Base class for storage failures"""


class NotFoundError(StorageError):
    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateError(StorageError):
    """Raised when a write would break a uniqueness rule"""


class Storage(ABC):
    """Async persistence contract used by the API layer"""

    # ===== USERS =====

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def list_users(self) -> List[User]: ...

    @abstractmethod
    async def create_user(self, data: Dict[str, Any]) -> User:
        """Create a user; raises DuplicateError when the email is taken"""

    @abstractmethod
    async def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        """Merge fields into a user; raises NotFoundError"""

    # ===== CATALOG =====

    @abstractmethod
    async def list_items(self, kind: CatalogKind, featured_only: bool = False) -> List[Any]: ...

    @abstractmethod
    async def get_item(self, kind: CatalogKind, item_id: int) -> Optional[Any]: ...

    @abstractmethod
    async def create_item(self, kind: CatalogKind, data: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update_item(self, kind: CatalogKind, item_id: int, data: Dict[str, Any]) -> Any:
        """Partial update; raises NotFoundError"""

    @abstractmethod
    async def delete_item(self, kind: CatalogKind, item_id: int) -> bool:
        """Delete an item, drop favorites pointing at it and detach its testimonials"""

    @abstractmethod
    async def count_items(self, kind: CatalogKind, featured_only: bool = False) -> int: ...

    # ===== TESTIMONIALS =====

    @abstractmethod
    async def list_testimonials(self, approved_only: bool = False) -> List[Testimonial]: ...

    @abstractmethod
    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]: ...

    @abstractmethod
    async def create_testimonial(self, data: Dict[str, Any]) -> Testimonial: ...

    @abstractmethod
    async def approve_testimonial(self, testimonial_id: int) -> Testimonial: ...

    @abstractmethod
    async def delete_testimonial(self, testimonial_id: int) -> bool: ...

    # ===== FAVORITES =====

    @abstractmethod
    async def list_favorites(self, user_id: int) -> List[Favorite]: ...

    @abstractmethod
    async def get_favorite(self, favorite_id: int) -> Optional[Favorite]: ...

    @abstractmethod
    async def find_favorite(self, user_id: int, item_type: str, item_id: int) -> Optional[Favorite]: ...

    @abstractmethod
    async def add_favorite(self, data: Dict[str, Any]) -> Favorite:
        """Raises DuplicateError when the user already saved the item"""

    @abstractmethod
    async def update_favorite_notes(self, favorite_id: int, notes: Optional[str]) -> Favorite: ...

    @abstractmethod
    async def delete_favorite(self, favorite_id: int) -> bool: ...

    # ===== BOOKINGS =====

    @abstractmethod
    async def list_bookings(self, user_id: Optional[int] = None) -> List[Booking]: ...

    @abstractmethod
    async def get_booking(self, booking_id: int) -> Optional[Booking]: ...

    @abstractmethod
    async def create_booking(self, data: Dict[str, Any]) -> Booking: ...

    @abstractmethod
    async def update_booking_status(self, booking_id: int, status: str) -> Booking: ...

    # ===== LIFECYCLE =====

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "backend": type(self).__name__}

    async def close(self) -> None:
        return None


def normalize_email(email: str) -> str:
    return email.strip().lower()

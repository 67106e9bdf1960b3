from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON, UniqueConstraint

# Enums
class CatalogKind(str, Enum):
    EXPERIENCE = "experience"
    ACCOMMODATION = "accommodation"
    PACKAGE = "package"
    VEHICLE = "vehicle"
    RESTAURANT = "restaurant"

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def created_at_field() -> Any:
    """Insert timestamp column; every table gets its own Column instance"""
    return Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


def json_list_field() -> Any:
    return Field(default=None, sa_column=Column(JSON, nullable=True))


# Models
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(
        index=True,
        unique=True,
        max_length=255,
        description="Login email, stored lower-cased"
    )
    password_hash: str = Field(max_length=255, description="bcrypt hash")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    profile_picture: Optional[str] = None
    role: str = Field(default=UserRole.USER.value, max_length=20)

    # Travel preferences collected by the sign-up questionnaire
    travel_dates: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Arrival/departure as {'from': iso-date, 'to': iso-date}"
    )
    group_size: Optional[int] = None
    travel_interests: Optional[List[str]] = json_list_field()
    accommodation_preference: Optional[str] = None  # budget, mid-range, luxury
    dietary_restrictions: Optional[List[str]] = json_list_field()
    activity_level: Optional[str] = None  # low, medium, high
    transport_preference: Optional[str] = None  # guided-tour, rental, public
    special_requirements: Optional[str] = None
    previous_visit: bool = Field(default=False)

    created_at: datetime = created_at_field()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class Experience(SQLModel, table=True):
    __tablename__ = "experiences"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: str
    price: float
    duration: str = Field(description="Free text, e.g. '3 hours' or '2 days'")
    image: str
    featured: bool = Field(default=False, index=True)
    rating: Optional[float] = None
    location: Optional[str] = None
    tags: Optional[List[str]] = json_list_field()
    created_at: datetime = created_at_field()


class Accommodation(SQLModel, table=True):
    __tablename__ = "accommodations"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: str
    price: float = Field(description="Price per night")
    image: str
    featured: bool = Field(default=False, index=True)
    rating: Optional[float] = None
    location: Optional[str] = None
    amenities: Optional[List[str]] = json_list_field()
    bedrooms: Optional[int] = None
    capacity: Optional[int] = None
    created_at: datetime = created_at_field()


class Package(SQLModel, table=True):
    __tablename__ = "packages"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    description: str
    price: float
    image: str
    featured: bool = Field(default=False, index=True)
    duration: str
    duration_days: int = Field(default=1)
    location: Optional[str] = None
    rating: Optional[float] = None
    min_people: int = Field(default=1)
    max_people: int = Field(default=4)
    includes: Optional[List[str]] = json_list_field()
    inclusions: Optional[List[str]] = json_list_field()
    tags: Optional[List[str]] = json_list_field()
    created_at: datetime = created_at_field()


class VehicleRental(SQLModel, table=True):
    __tablename__ = "vehicle_rentals"

    id: Optional[int] = Field(default=None, primary_key=True)
    vehicle_type: str = Field(max_length=50)
    title: str = Field(max_length=200)
    description: str
    price_per_day: float
    image: str
    capacity: Optional[int] = None
    features: Optional[List[str]] = json_list_field()
    created_at: datetime = created_at_field()


class Restaurant(SQLModel, table=True):
    __tablename__ = "restaurants"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    description: str
    cuisine: str
    price_range: str = Field(max_length=10)
    image: str
    location: Optional[str] = None
    opening_hours: Optional[str] = None
    featured: bool = Field(default=False, index=True)
    rating: Optional[float] = None
    created_at: datetime = created_at_field()


class Testimonial(SQLModel, table=True):
    __tablename__ = "testimonials"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    content: str
    rating: float
    experience_id: Optional[int] = Field(default=None, foreign_key="experiences.id")
    accommodation_id: Optional[int] = Field(default=None, foreign_key="accommodations.id")
    package_id: Optional[int] = Field(default=None, foreign_key="packages.id")
    approved: bool = Field(default=False, index=True)
    created_at: datetime = created_at_field()


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    booking_type: str = Field(max_length=20)
    item_id: int
    start_date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    end_date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    guests: int
    total_price: float
    status: str = Field(default=BookingStatus.PENDING.value, max_length=20)
    created_at: datetime = created_at_field()


class Favorite(SQLModel, table=True):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint('user_id', 'item_type', 'item_id', name='uq_favorites_user_item'),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    item_type: str = Field(max_length=20)
    item_id: int
    notes: Optional[str] = None
    created_at: datetime = created_at_field()


CATALOG_MODELS: Dict[CatalogKind, Type[SQLModel]] = {
    CatalogKind.EXPERIENCE: Experience,
    CatalogKind.ACCOMMODATION: Accommodation,
    CatalogKind.PACKAGE: Package,
    CatalogKind.VEHICLE: VehicleRental,
    CatalogKind.RESTAURANT: Restaurant,
}

# Kinds that carry a "featured" flag
FEATURABLE_KINDS = {
    CatalogKind.EXPERIENCE,
    CatalogKind.ACCOMMODATION,
    CatalogKind.PACKAGE,
    CatalogKind.RESTAURANT,
}

# Testimonial foreign key column for each reviewable kind
TESTIMONIAL_TARGETS: Dict[CatalogKind, str] = {
    CatalogKind.EXPERIENCE: "experience_id",
    CatalogKind.ACCOMMODATION: "accommodation_id",
    CatalogKind.PACKAGE: "package_id",
}

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Import enums from models
from tuca.db.models import BookingStatus, CatalogKind, UserRole

AccommodationPreference = Literal["budget", "mid-range", "luxury"]
ActivityLevel = Literal["low", "medium", "high"]
TransportPreference = Literal["guided-tour", "rental", "public"]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str


# ===== USER SCHEMAS =====

class TravelDates(CamelModel):
    from_: date = Field(..., alias="from")
    to: date

    @model_validator(mode="after")
    def check_order(self):
        if self.to < self.from_:
            raise ValueError("Departure date must be on or after arrival date")
        return self


class TravelPreferences(CamelModel):
    travel_dates: Optional[TravelDates] = None
    group_size: Optional[int] = Field(None, ge=1, le=50)
    travel_interests: Optional[List[str]] = None
    accommodation_preference: Optional[AccommodationPreference] = None
    dietary_restrictions: Optional[List[str]] = None
    activity_level: Optional[ActivityLevel] = None
    transport_preference: Optional[TransportPreference] = None
    special_requirements: Optional[str] = Field(None, max_length=1000)
    previous_visit: Optional[bool] = None

    def storage_fields(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """Fields that were sent, keyed by column name, with travel dates as ISO strings"""
        data = self.model_dump(exclude_unset=True, exclude_none=True, exclude=exclude)
        if self.travel_dates is not None and "travel_dates" in data:
            data["travel_dates"] = self.travel_dates.model_dump(mode="json", by_alias=True)
        return data


class RegisterRequest(TravelPreferences):
    email: EmailStr
    password: str = Field(..., min_length=1)
    confirm_password: Optional[str] = None
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserProfile(TravelPreferences):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None
    role: UserRole
    created_at: datetime


class UserProfileUpdate(TravelPreferences):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    profile_picture: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    user: UserProfile


class CurrentUserResponse(CamelModel):
    user: UserProfile


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


class PasswordResetRequest(CamelModel):
    email: EmailStr


class PasswordResetConfirm(CamelModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RoleUpdate(CamelModel):
    role: UserRole


# ===== CATALOG SCHEMAS =====

class ExperienceCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    duration: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    featured: bool = False
    rating: Optional[float] = Field(None, ge=0, le=5)
    location: Optional[str] = None
    tags: Optional[List[str]] = None


class ExperienceUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)
    featured: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    location: Optional[str] = None
    tags: Optional[List[str]] = None


class ExperienceRead(ExperienceCreate):
    id: int
    created_at: datetime


class AccommodationCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, description="Price per night")
    image: str = Field(..., min_length=1)
    featured: bool = False
    rating: Optional[float] = Field(None, ge=0, le=5)
    location: Optional[str] = None
    amenities: Optional[List[str]] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1)


class AccommodationUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    featured: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    location: Optional[str] = None
    amenities: Optional[List[str]] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1)


class AccommodationRead(AccommodationCreate):
    id: int
    created_at: datetime


class PackageCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    image: str = Field(..., min_length=1)
    featured: bool = False
    duration: str = Field(..., min_length=1)
    duration_days: int = Field(1, ge=1)
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    min_people: int = Field(1, ge=1)
    max_people: int = Field(4, ge=1)
    includes: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_group_bounds(self):
        if self.max_people < self.min_people:
            raise ValueError("maxPeople must be greater than or equal to minPeople")
        return self


class PackageUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    featured: Optional[bool] = None
    duration: Optional[str] = Field(None, min_length=1)
    duration_days: Optional[int] = Field(None, ge=1)
    location: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    min_people: Optional[int] = Field(None, ge=1)
    max_people: Optional[int] = Field(None, ge=1)
    includes: Optional[List[str]] = None
    inclusions: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class PackageRead(PackageCreate):
    id: int
    created_at: datetime


class VehicleCreate(CamelModel):
    vehicle_type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price_per_day: float = Field(..., ge=0)
    image: str = Field(..., min_length=1)
    capacity: Optional[int] = Field(None, ge=1)
    features: Optional[List[str]] = None


class VehicleUpdate(CamelModel):
    vehicle_type: Optional[str] = Field(None, min_length=1, max_length=50)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    price_per_day: Optional[float] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, ge=1)
    features: Optional[List[str]] = None


class VehicleRead(VehicleCreate):
    id: int
    created_at: datetime


class RestaurantCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    cuisine: str = Field(..., min_length=1)
    price_range: str = Field(..., min_length=1, max_length=10)
    image: str = Field(..., min_length=1)
    location: Optional[str] = None
    opening_hours: Optional[str] = None
    featured: bool = False
    rating: Optional[float] = Field(None, ge=0, le=5)


class RestaurantUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    cuisine: Optional[str] = Field(None, min_length=1)
    price_range: Optional[str] = Field(None, min_length=1, max_length=10)
    image: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    opening_hours: Optional[str] = None
    featured: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class RestaurantRead(RestaurantCreate):
    id: int
    created_at: datetime


# ===== TESTIMONIAL SCHEMAS =====

class TestimonialCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)
    rating: float = Field(..., ge=0, le=5)
    experience_id: Optional[int] = None
    accommodation_id: Optional[int] = None
    package_id: Optional[int] = None
    approved: bool = False


class TestimonialRead(CamelModel):
    id: int
    user_id: int
    content: str
    rating: float
    experience_id: Optional[int] = None
    accommodation_id: Optional[int] = None
    package_id: Optional[int] = None
    approved: bool
    created_at: datetime


# ===== FAVORITE SCHEMAS =====

class FavoriteCreate(CamelModel):
    item_type: CatalogKind
    item_id: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=1000)


class FavoriteNotesUpdate(CamelModel):
    notes: Optional[str] = Field(..., max_length=1000)


class FavoriteRead(CamelModel):
    id: int
    user_id: int
    item_type: CatalogKind
    item_id: int
    notes: Optional[str] = None
    created_at: datetime


class FavoriteCheck(CamelModel):
    is_favorite: bool


# ===== BOOKING SCHEMAS =====

class BookingCreate(CamelModel):
    booking_type: CatalogKind
    item_id: int = Field(..., ge=1)
    start_date: datetime
    end_date: datetime
    guests: int = Field(..., ge=1, le=100)

    @field_validator("start_date", "end_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after start date")
        return self


class BookingRead(CamelModel):
    id: int
    user_id: int
    booking_type: CatalogKind
    item_id: int
    start_date: datetime
    end_date: datetime
    guests: int
    total_price: float
    status: BookingStatus
    created_at: datetime


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


# ===== ADMIN SCHEMAS =====

class KindStats(CamelModel):
    total: int
    featured: int


class AdminStats(CamelModel):
    catalog: Dict[str, KindStats]
    total_items: int
    users: int
    admins: int
    bookings: int
    pending_bookings: int
    testimonials: int
    pending_testimonials: int
    last_updated: datetime

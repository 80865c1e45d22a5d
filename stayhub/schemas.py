from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from .models import BookingStatus

# ==== Users ====

class RegisterIn(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6)
    name: str
    email: str
    avatar: Optional[str] = None

class LoginIn(BaseModel):
    username: str
    password: str

class UserOut(BaseModel):
    id: int
    username: str
    name: str
    email: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True

# ==== Properties ====

class PropertyIn(BaseModel):
    title: str
    description: str
    price: int = Field(ge=0)
    location: str
    city: str
    state: str
    country: str
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    guests: int = Field(ge=1)
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    property_type: str
    latitude: Optional[str] = None
    longitude: Optional[str] = None

class PropertyOut(PropertyIn):
    id: int
    host_id: int
    rating: Optional[int] = None
    review_count: int = 0

    class Config:
        from_attributes = True

class AvailabilityOut(BaseModel):
    property_id: int
    start_date: date
    end_date: date
    available: bool
    blocked: List[tuple[date, date]]

class QuoteOut(BaseModel):
    nights: int
    nightly_price: int
    subtotal: int
    cleaning_fee: int
    service_fee: int
    total: int

    class Config:
        from_attributes = True

# ==== Bookings ====

class BookingCreateIn(BaseModel):
    property_id: int
    start_date: date
    end_date: date
    guests: int = Field(ge=1)
    total_price: int = Field(ge=0)

class BookingStatusIn(BaseModel):
    # Plain string: unknown values are rejected by the booking service
    status: str

class BookingOut(BaseModel):
    id: int
    property_id: int
    user_id: int
    start_date: date
    end_date: date
    guests: int
    total_price: int
    status: BookingStatus
    created_at: Optional[datetime] = None

    class Config:
        use_enum_values = True
        from_attributes = True

# ==== Favorites ====

class FavoriteIn(BaseModel):
    property_id: int

class FavoriteOut(BaseModel):
    id: int
    user_id: int
    property_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FavoriteWithPropertyOut(BaseModel):
    favorite: FavoriteOut
    property: PropertyOut

class FavoriteCheckOut(BaseModel):
    is_favorite: bool

# ==== Reviews ====

class ReviewIn(BaseModel):
    rating: int
    comment: str

class ReviewOut(BaseModel):
    id: int
    property_id: int
    user_id: int
    rating: int
    comment: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

from typing import List

from fastapi import APIRouter, Depends

from ..config import settings
from ..errors import GuestLimitExceeded, InvalidRange
from ..models import User
from ..schemas import BookingCreateIn, BookingStatusIn, BookingOut
from ..security import require_user
from ..services import listings
from ..services.bookings import BookingService
from ..storage import EntityStore, get_store

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


def booking_service(store: EntityStore = Depends(get_store)) -> BookingService:
    return BookingService(store, released_statuses=settings.CONFLICT_RELEASED_STATUSES)


@router.get("", response_model=List[BookingOut])
def api_bookings(user: User = Depends(require_user), service: BookingService = Depends(booking_service)):
    return service.bookings_for_user(user.id)


@router.post("", response_model=BookingOut, status_code=201)
def api_create_booking(payload: BookingCreateIn, user: User = Depends(require_user), service: BookingService = Depends(booking_service)):
    prop = listings.get_property(service.store, payload.property_id)
    if payload.start_date >= payload.end_date:
        raise InvalidRange("End date must be after start date")
    # Guest limit is a request-level rule, the booking core does not enforce it
    if payload.guests > prop.guests:
        raise GuestLimitExceeded(f"This property allows at most {prop.guests} guests")
    return service.create_booking(
        property_id=payload.property_id,
        user_id=user.id,
        start=payload.start_date,
        end=payload.end_date,
        guests=payload.guests,
        total_price=payload.total_price,
    )


@router.get("/{booking_id}", response_model=BookingOut)
def api_booking(booking_id: int, user: User = Depends(require_user), service: BookingService = Depends(booking_service)):
    return service.get_booking(booking_id, user.id)


@router.patch("/{booking_id}/status", response_model=BookingOut)
def api_update_booking_status(booking_id: int, payload: BookingStatusIn, user: User = Depends(require_user), service: BookingService = Depends(booking_service)):
    return service.update_status(booking_id, user.id, payload.status)

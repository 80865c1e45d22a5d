"""Booking lifecycle: creation with conflict detection, and status updates."""
import logging
from datetime import date
from typing import Iterable

from ..errors import Conflict, Forbidden, InvalidRange, InvalidStatus, NotFound
from ..models import Booking, BookingStatus
from ..storage import EntityStore
from .availability import AvailabilityChecker

logger = logging.getLogger(__name__)

STATUS_VALUES = frozenset(s.value for s in BookingStatus)


class BookingService:
    def __init__(self, store: EntityStore, released_statuses: Iterable[str] = ()):
        self.store = store
        self.availability = AvailabilityChecker(store, released_statuses)

    def create_booking(self, property_id: int, user_id: int, start: date, end: date, guests: int, total_price: int) -> Booking:
        """
        Create a pending booking for ``[start, end)``.

        Raises NotFound when the property or the user is missing, InvalidRange
        when ``start >= end`` (checked before any conflict lookup), and Conflict
        when the range overlaps a blocking booking. ``total_price`` is stored as
        given by the caller.
        """
        with self.store.property_scope(property_id):
            if self.store.get_property_by_id(property_id) is None:
                raise NotFound(f"Property {property_id} not found")
            if self.store.get_user(user_id) is None:
                raise NotFound(f"User {user_id} not found")
            if start >= end:
                raise InvalidRange("End date must be after start date")
            if self.availability.has_conflict(property_id, start, end):
                logger.info("Rejected booking for property %s: %s..%s overlaps", property_id, start, end)
                raise Conflict("The selected dates are not available")
            booking = self.store.create(
                Booking,
                property_id=property_id,
                user_id=user_id,
                start_date=start,
                end_date=end,
                guests=guests,
                total_price=total_price,
                status=BookingStatus.PENDING.value,
            )
        logger.info("Booking %s created for property %s (%s..%s)", booking.id, property_id, start, end)
        return booking

    def update_status(self, booking_id: int, actor_user_id: int, new_status: str) -> Booking:
        """
        Set a booking's status to any known value.

        Only the guest who made the booking or the host of its property may do so.
        """
        booking = self.store.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")
        status = new_status.value if isinstance(new_status, BookingStatus) else new_status
        if status not in STATUS_VALUES:
            raise InvalidStatus(f"Invalid status: {new_status!r}")
        property_id = booking.property_id
        with self.store.property_scope(property_id):
            # Re-read under the scope; the first read only located the property
            booking = self.store.get_booking_by_id(booking_id)
            if booking is None:
                raise NotFound(f"Booking {booking_id} not found")
            prop = self.store.get_property_by_id(property_id)
            host_id = prop.host_id if prop is not None else None
            if actor_user_id not in (booking.user_id, host_id):
                raise Forbidden("Not authorized")
            updated = self.store.update(Booking, booking_id, status=status)
        logger.info("Booking %s set to %s by user %s", booking_id, status, actor_user_id)
        return updated

    def get_booking(self, booking_id: int, actor_user_id: int) -> Booking:
        booking = self.store.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")
        prop = self.store.get_property_by_id(booking.property_id)
        if actor_user_id != booking.user_id and (prop is None or prop.host_id != actor_user_id):
            raise Forbidden("Not authorized")
        return booking

    def bookings_for_user(self, user_id: int) -> list[Booking]:
        return self.store.get_bookings_for_user(user_id)

    def bookings_for_property(self, property_id: int) -> list[Booking]:
        return self.store.get_bookings_for_property(property_id)

from datetime import date
from typing import Iterable, Optional

from ..models import Booking, BookingStatus
from ..storage import EntityStore


def ranges_overlap(start: date, end: date, other_start: date, other_end: date) -> bool:
    """Return True if [start, end) overlaps [other_start, other_end).

    Ranges that only touch (one ends the day the other starts) do not overlap,
    so a checkout and the next check-in can share a day.
    """
    return start < other_end and end > other_start


class AvailabilityChecker:
    """
    Decides whether a date range is free for a property.

    By default every booking blocks its dates whatever its status.
    Statuses listed in ``released_statuses`` (e.g. ``{"cancelled"}``) stop blocking.
    """

    def __init__(self, store: EntityStore, released_statuses: Iterable[str] = ()):
        self.store = store
        self.released_statuses = frozenset(s.value if isinstance(s, BookingStatus) else s for s in released_statuses)

    def blocking_bookings(self, property_id: int, *, exclude_booking_id: Optional[int] = None) -> list[Booking]:
        return [
            b for b in self.store.get_bookings_for_property(property_id)
            if b.status not in self.released_statuses and b.id != exclude_booking_id
        ]

    def conflicting_bookings(self, property_id: int, start: date, end: date, *, exclude_booking_id: Optional[int] = None) -> list[Booking]:
        return [
            b for b in self.blocking_bookings(property_id, exclude_booking_id=exclude_booking_id)
            if ranges_overlap(start, end, b.start_date, b.end_date)
        ]

    def has_conflict(self, property_id: int, start: date, end: date, *, exclude_booking_id: Optional[int] = None) -> bool:
        return bool(self.conflicting_bookings(property_id, start, end, exclude_booking_id=exclude_booking_id))

    def blocked_ranges(self, property_id: int) -> list[tuple[date, date]]:
        """Blocked [start, end) ranges of a property, ordered by start date."""
        return sorted((b.start_date, b.end_date) for b in self.blocking_bookings(property_id))

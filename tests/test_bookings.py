import threading
from contextlib import contextmanager

import pytest

from stayhub.errors import Conflict, Forbidden, InvalidRange, InvalidStatus, NotFound
from stayhub.models import Booking, BookingStatus
from stayhub.services.availability import ranges_overlap
from stayhub.services.bookings import BookingService
from stayhub.storage import MemoryStore

from tests.conftest import make_property, make_user


@pytest.fixture
def service(store):
    return BookingService(store)


def _create(service, listing, user, start, end):
    return service.create_booking(listing.id, user.id, start, end, guests=2, total_price=500)


def test_new_booking_is_pending(service, listing, guest, june):
    booking = _create(service, listing, guest, june(1), june(5))

    assert booking.id == 1
    assert booking.status == BookingStatus.PENDING.value
    assert booking.total_price == 500
    assert service.store.get_bookings_for_property(listing.id) == [booking]


def test_june_scenario(service, listing, guest, june):
    first = _create(service, listing, guest, june(1), june(5))
    service.update_status(first.id, guest.id, "confirmed")

    assert _create(service, listing, guest, june(5), june(10)).status == "pending"
    with pytest.raises(Conflict):
        _create(service, listing, guest, june(4), june(6))
    with pytest.raises(InvalidRange):
        _create(service, listing, guest, june(10), june(3))


def test_invalid_range_wins_over_conflict(service, listing, guest, june):
    _create(service, listing, guest, june(1), june(5))

    with pytest.raises(InvalidRange):
        _create(service, listing, guest, june(3), june(3))
    with pytest.raises(InvalidRange):
        _create(service, listing, guest, june(4), june(2))


def test_unknown_property_or_user(service, listing, guest, june):
    with pytest.raises(NotFound):
        service.create_booking(999, guest.id, june(1), june(2), guests=1, total_price=1)
    with pytest.raises(NotFound):
        service.create_booking(listing.id, 999, june(1), june(2), guests=1, total_price=1)


def test_cancelled_booking_still_blocks_by_default(service, listing, guest, june):
    booking = _create(service, listing, guest, june(1), june(5))
    service.update_status(booking.id, guest.id, "cancelled")

    with pytest.raises(Conflict):
        _create(service, listing, guest, june(2), june(4))


def test_released_cancelled_dates_can_be_rebooked(store, listing, guest, june):
    service = BookingService(store, released_statuses={"cancelled"})
    booking = _create(service, listing, guest, june(1), june(5))
    service.update_status(booking.id, guest.id, "cancelled")

    assert _create(service, listing, guest, june(2), june(4)).status == "pending"


def test_accepted_bookings_never_overlap(service, listing, guest, june):
    requests = [(1, 5), (3, 7), (5, 8), (7, 9), (8, 12), (2, 3), (12, 13), (11, 14), (13, 20)]
    accepted = []
    for start, end in requests:
        try:
            accepted.append(_create(service, listing, guest, june(start), june(end)))
        except Conflict:
            pass

    assert [(b.start_date.day, b.end_date.day) for b in accepted] == [(1, 5), (5, 8), (8, 12), (12, 13), (13, 20)]
    for i, a in enumerate(accepted):
        for b in accepted[i + 1:]:
            assert not ranges_overlap(a.start_date, a.end_date, b.start_date, b.end_date)


def test_concurrent_requests_for_same_dates_accept_one(service, listing, guest, june):
    barrier = threading.Barrier(8)
    results = []

    def attempt():
        barrier.wait()
        try:
            results.append(_create(service, listing, guest, june(1), june(5)))
        except Conflict:
            results.append(None)

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len([r for r in results if r is not None]) == 1
    assert len(service.store.get_bookings_for_property(listing.id)) == 1


@pytest.mark.parametrize("actor", ["guest", "host"])
def test_guest_and_host_may_update_status(request, service, listing, guest, june, actor):
    booking = _create(service, listing, guest, june(1), june(5))
    actor_user = request.getfixturevalue(actor)

    updated = service.update_status(booking.id, actor_user.id, "confirmed")

    assert updated.status == "confirmed"
    assert service.store.get_booking_by_id(booking.id).status == "confirmed"


def test_other_users_are_forbidden(service, listing, guest, stranger, june):
    booking = _create(service, listing, guest, june(1), june(5))

    with pytest.raises(Forbidden):
        service.update_status(booking.id, stranger.id, "cancelled")
    assert service.store.get_booking_by_id(booking.id).status == "pending"


def test_any_known_status_is_accepted(service, listing, guest, june):
    booking = _create(service, listing, guest, june(1), june(5))

    # No state machine: completed -> pending is allowed
    for status in ("completed", "pending", "cancelled", "confirmed", BookingStatus.COMPLETED):
        assert service.update_status(booking.id, guest.id, status).status == BookingStatus(status).value


def test_update_status_failures(service, listing, guest, stranger, june):
    booking = _create(service, listing, guest, june(1), june(5))

    with pytest.raises(NotFound):
        service.update_status(999, guest.id, "confirmed")
    with pytest.raises(InvalidStatus):
        service.update_status(booking.id, guest.id, "checked_in")
    # Status is validated before authorization
    with pytest.raises(InvalidStatus):
        service.update_status(booking.id, stranger.id, "bogus")


def test_get_booking_is_limited_to_parties(service, listing, guest, host, stranger, june):
    booking = _create(service, listing, guest, june(1), june(5))

    assert service.get_booking(booking.id, guest.id) is booking
    assert service.get_booking(booking.id, host.id) is booking
    with pytest.raises(Forbidden):
        service.get_booking(booking.id, stranger.id)


def test_status_update_rereads_booking_inside_scope(june):
    class RemovingStore(MemoryStore):
        """Drops every booking of the property as soon as its scope is entered."""

        @contextmanager
        def property_scope(self, property_id):
            with super().property_scope(property_id):
                for booking in self.get_bookings_for_property(property_id):
                    self.delete(Booking, booking.id)
                yield

    store = RemovingStore()
    guest = make_user(store, "guest")
    prop = make_property(store, make_user(store, "host").id)
    booking = store.create(Booking, property_id=prop.id, user_id=guest.id, start_date=june(1), end_date=june(5), guests=1, total_price=1)

    with pytest.raises(NotFound):
        BookingService(store).update_status(booking.id, guest.id, "confirmed")
    assert store.get_booking_by_id(booking.id) is None

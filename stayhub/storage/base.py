"""Storage contract shared by the in-memory and SQL backends.

The booking and review services only talk to :class:`EntityStore`; they never
know which backend sits underneath. Backends implement the six generic
operations plus :meth:`EntityStore.property_scope`; the composite lookups used
by the booking, favorite and review flows are built on top of them here.
"""
from __future__ import annotations

import abc
from typing import Any, Callable, ContextManager, Optional, TypeVar

from ..models import Booking, Favorite, Property, Review, User

T = TypeVar("T")


class EntityStore(abc.ABC):

    @abc.abstractmethod
    def create(self, model: type[T], **fields: Any) -> T:
        """Persist a new entity and return it with its assigned id."""

    @abc.abstractmethod
    def get(self, model: type[T], entity_id: int) -> Optional[T]:
        ...

    @abc.abstractmethod
    def list_all(self, model: type[T]) -> list[T]:
        ...

    @abc.abstractmethod
    def list_where(self, model: type[T], predicate: Optional[Callable[[T], bool]] = None, **criteria: Any) -> list[T]:
        """Entities whose attributes equal ``criteria`` and that satisfy ``predicate``."""

    @abc.abstractmethod
    def update(self, model: type[T], entity_id: int, **changes: Any) -> Optional[T]:
        ...

    @abc.abstractmethod
    def delete(self, model: type[T], entity_id: int) -> bool:
        ...

    @abc.abstractmethod
    def property_scope(self, property_id: int) -> ContextManager[None]:
        """
        Exclusive access to one property's bookings and reviews.
        Everything written inside the block becomes visible atomically when it exits,
        and no other scope on the same property runs in between.
        """

    # ---- Users ----

    def get_user(self, user_id: int) -> Optional[User]:
        return self.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        found = self.list_where(User, username=username)
        return found[0] if found else None

    # ---- Properties ----

    def get_property_by_id(self, property_id: int) -> Optional[Property]:
        return self.get(Property, property_id)

    def get_properties_by_host(self, host_id: int) -> list[Property]:
        return self.list_where(Property, host_id=host_id)

    # ---- Bookings ----

    def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.get(Booking, booking_id)

    def get_bookings_for_property(self, property_id: int) -> list[Booking]:
        return self.list_where(Booking, property_id=property_id)

    def get_bookings_for_user(self, user_id: int) -> list[Booking]:
        return self.list_where(Booking, user_id=user_id)

    # ---- Reviews ----

    def get_reviews_for_property(self, property_id: int) -> list[Review]:
        return self.list_where(Review, property_id=property_id)

    # ---- Favorites ----

    def find_favorite(self, user_id: int, property_id: int) -> Optional[Favorite]:
        found = self.list_where(Favorite, user_id=user_id, property_id=property_id)
        return found[0] if found else None

    def get_favorites_for_user(self, user_id: int) -> list[Favorite]:
        return self.list_where(Favorite, user_id=user_id)

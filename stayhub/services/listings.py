from typing import Any, Optional

from ..errors import NotFound
from ..models import Property
from ..storage import EntityStore

_SEARCH_FIELDS = ("title", "description", "location", "city", "state", "country")


def create_property(store: EntityStore, host_id: int, **fields: Any) -> Property:
    """Create a listing owned by ``host_id``. Derived rating fields always start unset."""
    fields.pop("rating", None)
    fields.pop("review_count", None)
    fields.setdefault("images", [])
    fields.setdefault("amenities", [])
    return store.create(Property, host_id=host_id, rating=None, review_count=0, **fields)


def get_property(store: EntityStore, property_id: int) -> Property:
    prop = store.get_property_by_id(property_id)
    if prop is None:
        raise NotFound(f"Property {property_id} not found")
    return prop


def search_properties(store: EntityStore, query: str) -> list[Property]:
    """Case-insensitive substring match over the text fields of a listing."""
    if not query:
        return store.list_all(Property)
    needle = query.lower()
    return store.list_where(
        Property,
        lambda p: any(needle in (getattr(p, f) or "").lower() for f in _SEARCH_FIELDS),
    )


def filter_properties(
    store: EntityStore,
    min_price: Optional[int] = None,
    max_price: Optional[int] = None,
    bedrooms: Optional[int] = None,
    bathrooms: Optional[int] = None,
    location: Optional[str] = None,
    property_type: Optional[str] = None,
) -> list[Property]:
    """Bedrooms/bathrooms are minimums; location matches city, state or country."""
    def matches(p: Property) -> bool:
        if min_price is not None and p.price < min_price:
            return False
        if max_price is not None and p.price > max_price:
            return False
        if bedrooms is not None and p.bedrooms < bedrooms:
            return False
        if bathrooms is not None and p.bathrooms < bathrooms:
            return False
        if property_type is not None and p.property_type != property_type:
            return False
        if location is not None:
            loc = location.lower()
            if not any(loc in v.lower() for v in (p.city, p.state, p.country)):
                return False
        return True

    return store.list_where(Property, matches)

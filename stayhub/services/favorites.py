from ..errors import NotFound
from ..models import Favorite, Property
from ..storage import EntityStore


def add_favorite(store: EntityStore, user_id: int, property_id: int) -> Favorite:
    """Mark a property as favorite. Adding the same pair twice returns the existing row."""
    if store.get_property_by_id(property_id) is None:
        raise NotFound(f"Property {property_id} not found")
    existing = store.find_favorite(user_id, property_id)
    if existing is not None:
        return existing
    return store.create(Favorite, user_id=user_id, property_id=property_id)


def remove_favorite(store: EntityStore, user_id: int, property_id: int) -> bool:
    favorite = store.find_favorite(user_id, property_id)
    if favorite is None:
        return False
    return store.delete(Favorite, favorite.id)


def is_favorite(store: EntityStore, user_id: int, property_id: int) -> bool:
    return store.find_favorite(user_id, property_id) is not None


def list_favorites(store: EntityStore, user_id: int) -> list[tuple[Favorite, Property]]:
    # Favorites of since-deleted properties are skipped
    pairs = []
    for favorite in store.get_favorites_for_user(user_id):
        prop = store.get_property_by_id(favorite.property_id)
        if prop is not None:
            pairs.append((favorite, prop))
    return pairs

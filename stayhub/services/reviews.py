import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ..errors import InvalidRating, NotFound
from ..models import Property, Review
from ..storage import EntityStore

logger = logging.getLogger(__name__)


def average_rating(ratings: Iterable[int]) -> Optional[int]:
    """Mean rating rounded half away from zero; None when there are no ratings."""
    values = list(ratings)
    if not values:
        return None
    mean = Decimal(sum(values)) / Decimal(len(values))
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class RatingAggregator:
    """Records reviews and keeps Property.rating / Property.review_count in sync."""

    def __init__(self, store: EntityStore, min_rating: int = 1, max_rating: int = 10):
        self.store = store
        self.min_rating = min_rating
        self.max_rating = max_rating

    def record_review(self, property_id: int, user_id: int, rating: int, comment: str) -> Review:
        with self.store.property_scope(property_id):
            if self.store.get_property_by_id(property_id) is None:
                raise NotFound(f"Property {property_id} not found")
            if self.store.get_user(user_id) is None:
                raise NotFound(f"User {user_id} not found")
            if not self.min_rating <= rating <= self.max_rating:
                raise InvalidRating(f"Rating must be between {self.min_rating} and {self.max_rating}")
            review = self.store.create(Review, property_id=property_id, user_id=user_id, rating=rating, comment=comment)
            self.recompute(property_id)
        return review

    def recompute(self, property_id: int) -> Optional[Property]:
        """Rebuild the rating aggregate of a property from all of its reviews."""
        with self.store.property_scope(property_id):
            reviews = self.store.get_reviews_for_property(property_id)
            rating = average_rating(r.rating for r in reviews)
            prop = self.store.update(Property, property_id, rating=rating, review_count=len(reviews))
        logger.info("Property %s rating=%s over %d review(s)", property_id, rating, len(reviews))
        return prop

    def reviews_for_property(self, property_id: int) -> list[Review]:
        # Not taken inside property_scope: a listing may briefly show one more
        # review than Property.review_count while record_review is running.
        return self.store.get_reviews_for_property(property_id)

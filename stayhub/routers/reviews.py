from typing import List

from fastapi import APIRouter, Depends

from ..config import settings
from ..models import User
from ..schemas import ReviewIn, ReviewOut
from ..security import require_user
from ..services import listings
from ..services.reviews import RatingAggregator
from ..storage import EntityStore, get_store

router = APIRouter(prefix="/api/properties", tags=["reviews"])


def rating_aggregator(store: EntityStore = Depends(get_store)) -> RatingAggregator:
    return RatingAggregator(store, min_rating=settings.REVIEW_RATING_MIN, max_rating=settings.REVIEW_RATING_MAX)


@router.get("/{property_id}/reviews", response_model=List[ReviewOut])
def api_reviews(property_id: int, aggregator: RatingAggregator = Depends(rating_aggregator)):
    listings.get_property(aggregator.store, property_id)
    return aggregator.reviews_for_property(property_id)


@router.post("/{property_id}/reviews", response_model=ReviewOut, status_code=201)
def api_create_review(property_id: int, payload: ReviewIn, user: User = Depends(require_user), aggregator: RatingAggregator = Depends(rating_aggregator)):
    return aggregator.record_review(property_id, user.id, payload.rating, payload.comment)

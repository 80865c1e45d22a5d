from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends

from ..config import settings
from ..errors import InvalidRange
from ..models import User
from ..schemas import PropertyIn, PropertyOut, AvailabilityOut, QuoteOut
from ..security import require_user
from ..services import listings
from ..services.availability import AvailabilityChecker
from ..services.pricing import quote_stay
from ..storage import EntityStore, get_store

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=List[PropertyOut])
def api_properties(
    store: EntityStore = Depends(get_store),
    search: Optional[str] = None,
    min_price: Optional[int] = None,
    max_price: Optional[int] = None,
    bedrooms: Optional[int] = None,
    bathrooms: Optional[int] = None,
    location: Optional[str] = None,
    property_type: Optional[str] = None,
):
    if search:
        return listings.search_properties(store, search)
    return listings.filter_properties(
        store,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        location=location,
        property_type=property_type,
    )


@router.post("", response_model=PropertyOut, status_code=201)
def api_create_property(payload: PropertyIn, user: User = Depends(require_user), store: EntityStore = Depends(get_store)):
    return listings.create_property(store, host_id=user.id, **payload.model_dump())


@router.get("/{property_id}", response_model=PropertyOut)
def api_property(property_id: int, store: EntityStore = Depends(get_store)):
    return listings.get_property(store, property_id)


@router.get("/{property_id}/availability", response_model=AvailabilityOut)
def api_availability(property_id: int, start_date: date, end_date: date, store: EntityStore = Depends(get_store)):
    listings.get_property(store, property_id)
    if start_date >= end_date:
        raise InvalidRange("End date must be after start date")
    checker = AvailabilityChecker(store, settings.CONFLICT_RELEASED_STATUSES)
    return AvailabilityOut(
        property_id=property_id,
        start_date=start_date,
        end_date=end_date,
        available=not checker.has_conflict(property_id, start_date, end_date),
        blocked=checker.blocked_ranges(property_id),
    )


@router.get("/{property_id}/quote", response_model=QuoteOut)
def api_quote(property_id: int, start_date: date, end_date: date, store: EntityStore = Depends(get_store)):
    prop = listings.get_property(store, property_id)
    quote = quote_stay(
        prop.price,
        start_date,
        end_date,
        cleaning_fee=settings.CLEANING_FEE,
        service_fee_percent=settings.SERVICE_FEE_PERCENT,
    )
    return QuoteOut.model_validate(quote)

from datetime import date

import pytest

from stayhub.errors import InvalidRange, NotFound
from stayhub.models import Property
from stayhub.seed import SAMPLE_LISTINGS, seed_sample_data
from stayhub.services import favorites, listings
from stayhub.services.pricing import quote_stay

from tests.conftest import make_property


@pytest.fixture
def catalog(store, host):
    return [
        make_property(store, host.id, title="Beachfront Paradise", city="Malibu", state="California", price=349, bedrooms=3, property_type="beach house"),
        make_property(store, host.id, title="Mountain Cabin Retreat", city="Aspen", state="Colorado", price=229, bedrooms=2, bathrooms=1, property_type="cabin"),
        make_property(store, host.id, title="Lakeside Cabin", city="Lake Tahoe", state="California", price=245, bedrooms=2, bathrooms=1, property_type="cabin"),
    ]


def test_create_property_ignores_client_rating(store, host):
    prop = make_property(store, host.id, rating=95, review_count=40)

    assert prop.rating is None
    assert prop.review_count == 0
    assert prop.host_id == host.id


def test_search_is_case_insensitive_substring(store, catalog):
    assert [p.title for p in listings.search_properties(store, "cabin")] == ["Mountain Cabin Retreat", "Lakeside Cabin"]
    assert [p.title for p in listings.search_properties(store, "CALIFORNIA")] == ["Beachfront Paradise", "Lakeside Cabin"]
    assert len(listings.search_properties(store, "")) == 3


def test_filters(store, catalog):
    assert [p.price for p in listings.filter_properties(store, min_price=230, max_price=300)] == [245]
    assert [p.city for p in listings.filter_properties(store, bedrooms=3)] == ["Malibu"]
    assert len(listings.filter_properties(store, property_type="cabin", location="california")) == 1
    assert len(listings.filter_properties(store)) == 3


def test_get_property_not_found(store):
    with pytest.raises(NotFound):
        listings.get_property(store, 1)


def test_favorites_are_unique_per_pair(store, guest, listing):
    first = favorites.add_favorite(store, guest.id, listing.id)
    again = favorites.add_favorite(store, guest.id, listing.id)

    assert again.id == first.id
    assert favorites.is_favorite(store, guest.id, listing.id)
    assert [p.id for _, p in favorites.list_favorites(store, guest.id)] == [listing.id]
    assert favorites.remove_favorite(store, guest.id, listing.id) is True
    assert favorites.remove_favorite(store, guest.id, listing.id) is False
    assert not favorites.is_favorite(store, guest.id, listing.id)


def test_favorite_of_unknown_property(store, guest):
    with pytest.raises(NotFound):
        favorites.add_favorite(store, guest.id, 404)


def test_quote_stay():
    quote = quote_stay(189, date(2025, 6, 1), date(2025, 6, 5))

    assert quote.nights == 4
    assert quote.subtotal == 756
    assert quote.cleaning_fee == 50
    assert quote.service_fee == 91  # 90.72
    assert quote.total == 897


def test_quote_rejects_empty_stay():
    with pytest.raises(InvalidRange):
        quote_stay(100, date(2025, 6, 5), date(2025, 6, 5))


def test_sample_data_is_seeded_once(store):
    assert seed_sample_data(store, "demo-host", "demo12345") == len(SAMPLE_LISTINGS)
    assert seed_sample_data(store, "demo-host", "demo12345") == 0

    host = store.get_user_by_username("demo-host")
    listed = store.list_all(Property)
    assert len(listed) == len(SAMPLE_LISTINGS)
    assert {p.host_id for p in listed} == {host.id}
    assert all(p.rating is None and p.review_count == 0 for p in listed)
    assert [p.city for p in listings.search_properties(store, "beach")] == ["Malibu"]

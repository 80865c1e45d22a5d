import logging

from .models import Property, User
from .security import hash_password
from .services.listings import create_property
from .storage import EntityStore

logger = logging.getLogger(__name__)

SAMPLE_LISTINGS = [
    {
        "title": "Modern City Apartment",
        "description": "Beautiful modern apartment in the heart of downtown with amazing city views, fully renovated with high-end appliances and stylish decor.",
        "price": 189,
        "location": "Downtown",
        "city": "Seattle",
        "state": "Washington",
        "country": "United States",
        "bedrooms": 2,
        "bathrooms": 2,
        "guests": 4,
        "images": ["https://images.unsplash.com/photo-1522708323590-d24dbb6b0267"],
        "amenities": ["Wifi", "Kitchen", "TV", "Air conditioning", "Washer", "Dryer"],
        "latitude": "47.6062",
        "longitude": "-122.3321",
        "property_type": "apartment",
    },
    {
        "title": "Beachfront Paradise",
        "description": "Stunning beachfront property with direct ocean access, panoramic views and a spacious deck.",
        "price": 349,
        "location": "Malibu",
        "city": "Malibu",
        "state": "California",
        "country": "United States",
        "bedrooms": 3,
        "bathrooms": 2,
        "guests": 6,
        "images": ["https://images.unsplash.com/photo-1499793983690-e29da59ef1c2"],
        "amenities": ["Beach access", "Ocean view", "Kitchen", "Wifi", "Parking", "BBQ grill"],
        "latitude": "34.0259",
        "longitude": "-118.7798",
        "property_type": "beach house",
    },
    {
        "title": "Mountain Cabin Retreat",
        "description": "Cozy cabin nestled in the woods with mountain views, hiking trails nearby and a wood-burning fireplace.",
        "price": 229,
        "location": "Aspen",
        "city": "Aspen",
        "state": "Colorado",
        "country": "United States",
        "bedrooms": 2,
        "bathrooms": 1,
        "guests": 4,
        "images": ["https://images.unsplash.com/photo-1470770841072-f978cf4d019e"],
        "amenities": ["Fireplace", "Mountain view", "Kitchen", "Wifi", "Hiking trails", "Parking"],
        "latitude": "39.1911",
        "longitude": "-106.8175",
        "property_type": "cabin",
    },
    {
        "title": "Luxury Villa with Pool",
        "description": "Luxury villa with private pool and a spacious outdoor entertainment area, close to local attractions.",
        "price": 399,
        "location": "Scottsdale",
        "city": "Scottsdale",
        "state": "Arizona",
        "country": "United States",
        "bedrooms": 4,
        "bathrooms": 3,
        "guests": 8,
        "images": ["https://images.unsplash.com/photo-1564013799919-ab600027ffc6"],
        "amenities": ["Pool", "Hot tub", "Kitchen", "Wifi", "Parking", "BBQ grill", "Air conditioning"],
        "latitude": "33.4942",
        "longitude": "-111.9261",
        "property_type": "villa",
    },
    {
        "title": "Designer Loft Apartment",
        "description": "Stylish urban loft with high ceilings and designer furnishings in a trendy neighborhood.",
        "price": 175,
        "location": "Brooklyn",
        "city": "Brooklyn",
        "state": "New York",
        "country": "United States",
        "bedrooms": 1,
        "bathrooms": 1,
        "guests": 2,
        "images": ["https://images.unsplash.com/photo-1502672260266-1c1ef2d93688"],
        "amenities": ["Wifi", "Kitchen", "TV", "Air conditioning", "Workspace", "Elevator"],
        "latitude": "40.6782",
        "longitude": "-73.9442",
        "property_type": "apartment",
    },
]


def seed_sample_data(store: EntityStore, username: str, password: str) -> int:
    """
    Create a demo host owning the sample listings. Does nothing when any
    listing exists already. Returns the number of listings created.

    Sample listings start unrated; ratings only come from recorded reviews.
    """
    if store.list_all(Property):
        return 0
    host = store.get_user_by_username(username)
    if host is None:
        host = store.create(
            User,
            username=username,
            hashed_password=hash_password(password),
            name="Demo Host",
            email=f"{username}@stayhub.local",
        )
    for fields in SAMPLE_LISTINGS:
        create_property(store, host.id, **dict(fields))
    logger.info("Seeded %d sample listing(s) for host %s", len(SAMPLE_LISTINGS), username)
    return len(SAMPLE_LISTINGS)

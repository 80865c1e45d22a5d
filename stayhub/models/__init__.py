from .user import User
from .property import Property
from .booking import Booking, BookingStatus
from .favorite import Favorite
from .review import Review

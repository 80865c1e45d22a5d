"""Failure kinds raised by the booking and review core.

Every domain failure carries a stable ``code`` so the HTTP layer can map it
to a status without inspecting messages. ``StorageError`` is not
part of that family: it reports the backing store misbehaving, not a rejected
request.
"""


class StayHubError(Exception):
    code = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(StayHubError):
    """A referenced entity does not exist."""
    code = "not_found"


class InvalidRange(StayHubError):
    """Start date is not strictly before end date."""
    code = "invalid_range"


class Conflict(StayHubError):
    """Requested dates overlap an existing booking."""
    code = "conflict"


class InvalidStatus(StayHubError):
    """Unknown booking status value."""
    code = "invalid_status"


class Forbidden(StayHubError):
    """Actor has no authority over the booking."""
    code = "forbidden"


class InvalidRating(StayHubError):
    """Review rating outside the accepted bounds."""
    code = "invalid_rating"


class GuestLimitExceeded(StayHubError):
    """More guests than the property accommodates."""
    code = "too_many_guests"


class StorageError(Exception):
    """The backing store failed (connection lost, constraint violated, ...)."""

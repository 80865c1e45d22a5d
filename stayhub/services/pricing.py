from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from ..errors import InvalidRange


@dataclass
class StayQuote:
    nights: int
    nightly_price: int
    subtotal: int
    cleaning_fee: int
    service_fee: int

    @property
    def total(self) -> int:
        return self.subtotal + self.cleaning_fee + self.service_fee


def quote_stay(nightly_price: int, start: date, end: date, cleaning_fee: int = 50, service_fee_percent: int = 12) -> StayQuote:
    """
    Price breakdown shown to guests before booking.
    Informational only: bookings store the total the caller submits.
    """
    if start >= end:
        raise InvalidRange("End date must be after start date")
    nights = (end - start).days
    subtotal = nightly_price * nights
    service_fee = int((Decimal(subtotal) * service_fee_percent / 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return StayQuote(
        nights=nights,
        nightly_price=nightly_price,
        subtotal=subtotal,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
    )

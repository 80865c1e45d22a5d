from datetime import date, datetime
from enum import Enum as PyEnum
from sqlalchemy import Integer, String, Date, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column
from ..db import Base

class BookingStatus(str, PyEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # composite index helps overlap searches
        Index("ix_bookings_property_start_end", "property_id", "start_date", "end_date"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Weak references, existence is only checked when the booking is created
    property_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    guests: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    # Plain string column: any of the BookingStatus values, no state machine
    status: Mapped[str] = mapped_column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

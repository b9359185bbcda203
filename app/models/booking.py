from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    Enum,
    Numeric,
    Index,
    text,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.booking import BookingStatus, PaymentStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    facility_id = Column(Integer, ForeignKey("facilities.id"), nullable=False, index=True)
    sport_type = Column(String, nullable=False)  # English name of the sport type
    booking_date = Column(Date, nullable=False)
    start_time = Column(String, nullable=False)  # Hora de inicio "HH:MM"
    end_time = Column(String, nullable=False)  # Hora de fin "HH:MM"
    duration_minutes = Column(Integer, nullable=False)
    number_of_players = Column(Integer, default=1)
    base_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    payment_status = Column(
        Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    special_requests = Column(String, nullable=True)

    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(String, nullable=True)
    refund_percentage = Column(Integer, nullable=True)
    refund_amount = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("app.models.user.User", back_populates="bookings")
    facility = relationship("app.models.facility.Facility", back_populates="bookings")


# Only one active booking may start at a given facility/sport/date/time
ACTIVE_STATUS_CLAUSE = "status IN ('PENDING', 'CONFIRMED', 'CHECKED_IN')"

Index(
    "uq_active_booking_slot",
    Booking.facility_id,
    Booking.sport_type,
    Booking.booking_date,
    Booking.start_time,
    unique=True,
    postgresql_where=text(ACTIVE_STATUS_CLAUSE),
    sqlite_where=text(ACTIVE_STATUS_CLAUSE),
)

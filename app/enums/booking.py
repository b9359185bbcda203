from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle states of a reservation"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED_BY_USER = "cancelled_by_user"
    CANCELLED_BY_FACILITY = "cancelled_by_facility"
    REJECTED = "rejected"
    NO_SHOW = "no_show"


# Statuses that still hold their time interval on the facility
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_IN,
)

TERMINAL_BOOKING_STATUSES = (
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED_BY_USER,
    BookingStatus.CANCELLED_BY_FACILITY,
    BookingStatus.REJECTED,
    BookingStatus.NO_SHOW,
)


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"

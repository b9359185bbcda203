from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import booking as booking_crud
from app.crud import facility as facility_crud
from app.enums.booking import BookingStatus, PaymentStatus
from app.exceptions import BookingConflictError, NotFoundError, SportifyError
from app.models.booking import Booking
from app.models.user import User
from app.schemas.booking import BookingCreate
from app.services.facility_service import quote_price, require_sport_type
from app.utils.time_utils import parse_time_to_minutes, overlaps_any

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLAYERS = 30


def create_booking(db: Session, data: BookingCreate, user: User, now: datetime) -> Booking:
    """
    Creates a pending booking for one of the generated slots.

    Raises:
        NotFoundError: facility missing, not approved/active, or sport unknown
        SportifyError: past date, unknown slot, too many players, past midnight
        BookingConflictError: interval overlaps an active booking
    """
    facility = facility_crud.get_bookable_facility(db, data.facility_id)
    if facility is None:
        raise NotFoundError("Facility not found")

    if data.booking_date < now.date():
        raise SportifyError("Cannot book a date in the past")

    sport = require_sport_type(facility, data.sport_type)

    max_players = sport.facility.max_capacity or DEFAULT_MAX_PLAYERS
    if data.number_of_players > max_players:
        raise SportifyError(f"Number of players cannot exceed {max_players}")

    quote = quote_price(
        facility, sport.name_en, data.booking_date, data.start_time, data.duration_hours, now
    )

    start = parse_time_to_minutes(quote.start_time)
    interval = (start, start + data.duration_hours * 60)
    occupied = booking_crud.get_occupied_ranges(
        db, facility.id, sport.name_en, data.booking_date
    )
    if overlaps_any(interval, occupied):
        logger.info(
            f"Booking conflict for facility {facility.id} {sport.name_en} "
            f"{data.booking_date} {quote.start_time}"
        )
        raise BookingConflictError("This time slot is already booked")

    booking = Booking(
        user_id=user.id,
        facility_id=facility.id,
        sport_type=sport.name_en,
        booking_date=data.booking_date,
        start_time=quote.start_time,
        end_time=quote.end_time,
        duration_minutes=data.duration_hours * 60,
        number_of_players=data.number_of_players,
        base_price=quote.base_price,
        total_price=quote.total_price,
        currency=quote.currency,
        status=BookingStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        special_requests=data.special_requests,
    )

    try:
        booking = booking_crud.create_booking(db, booking)
    except IntegrityError:
        db.rollback()
        raise BookingConflictError("This time slot is already booked")

    logger.info(
        f"Booking {booking.id} created by user {user.id} for facility {facility.id} "
        f"on {booking.booking_date} {booking.start_time}-{booking.end_time}"
    )
    return booking

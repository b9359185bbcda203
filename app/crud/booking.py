from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional, Tuple

from app.enums.booking import (
    ACTIVE_BOOKING_STATUSES,
    BookingStatus,
    TERMINAL_BOOKING_STATUSES,
)
from app.models.booking import Booking
from app.models.facility import Facility
from app.utils.time_utils import parse_time_to_minutes


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    user_id: Optional[int] = None,
    facility_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
) -> List[Booking]:
    query = db.query(Booking)

    if user_id:
        query = query.filter(Booking.user_id == user_id)
    if facility_id:
        query = query.filter(Booking.facility_id == facility_id)
    if status:
        query = query.filter(Booking.status == status)

    return (
        query.order_by(Booking.booking_date.desc(), Booking.start_time.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_upcoming_bookings(db: Session, user_id: int, today: date) -> List[Booking]:
    """Active bookings from today onwards, soonest first"""
    return (
        db.query(Booking)
        .filter(
            Booking.user_id == user_id,
            Booking.booking_date >= today,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .order_by(Booking.booking_date.asc(), Booking.start_time.asc())
        .all()
    )


def get_past_bookings(db: Session, user_id: int, today: date) -> List[Booking]:
    """Finished or cancelled bookings dated before today, latest first"""
    return (
        db.query(Booking)
        .filter(
            Booking.user_id == user_id,
            Booking.booking_date < today,
            Booking.status.in_(TERMINAL_BOOKING_STATUSES),
        )
        .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
        .all()
    )


def get_bookings_for_owner(
    db: Session,
    owner_id: int,
    facility_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
) -> List[Booking]:
    query = db.query(Booking).join(Facility).filter(Facility.owner_id == owner_id)

    if facility_id:
        query = query.filter(Booking.facility_id == facility_id)
    if status:
        query = query.filter(Booking.status == status)

    return query.order_by(Booking.booking_date.desc(), Booking.start_time.desc()).all()


def count_facility_bookings(db: Session, facility_id: int) -> int:
    return db.query(Booking).filter(Booking.facility_id == facility_id).count()


def get_occupied_ranges(
    db: Session, facility_id: int, sport_type: str, booking_date: date
) -> List[Tuple[int, int]]:
    """
    Time ranges (minutes since midnight, [start, end)) held by active bookings
    of a facility's sport type on a date.
    """
    active_bookings = (
        db.query(Booking)
        .filter(
            Booking.facility_id == facility_id,
            Booking.sport_type == sport_type,
            Booking.booking_date == booking_date,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .all()
    )

    ranges = []
    for booking in active_bookings:
        start = parse_time_to_minutes(booking.start_time)
        if start == -1:
            continue
        ranges.append((start, start + booking.duration_minutes))

    return ranges


def create_booking(db: Session, booking: Booking) -> Booking:
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def count_active_bookings_for_sports(
    db: Session, facility_id: int, sport_types: List[str]
) -> int:
    """Active bookings of a facility held under any of the given sport names"""
    if not sport_types:
        return 0
    return (
        db.query(Booking)
        .filter(
            Booking.facility_id == facility_id,
            Booking.sport_type.in_(sport_types),
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .count()
    )

"""
Tests for booking creation and availability
"""
from decimal import Decimal

import pytest

from app.enums.booking import BookingStatus, PaymentStatus
from app.exceptions import BookingConflictError, NotFoundError, SportifyError
from app.models.booking import Booking
from app.schemas.booking import BookingCreate
from app.services import booking_lifecycle as lifecycle
from app.services.booking_service import create_booking
from app.services.facility_service import get_availability

from conftest import NOW, TOMORROW


def _request(facility, start_time="09:00", duration_hours=1, **overrides):
    data = dict(
        facility_id=facility.id,
        sport_type="Football",
        booking_date=TOMORROW,
        start_time=start_time,
        duration_hours=duration_hours,
        number_of_players=6,
    )
    data.update(overrides)
    return BookingCreate(**data)


def test_creates_pending_booking(db, booker, facility):
    booking = create_booking(db, _request(facility, duration_hours=2), booker, NOW)

    assert booking.id is not None
    assert booking.status == BookingStatus.PENDING
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.user_id == booker.id
    assert booking.start_time == "09:00"
    assert booking.end_time == "11:00"
    assert booking.duration_minutes == 120
    assert booking.base_price == Decimal("50")
    assert booking.total_price == Decimal("100")
    assert booking.currency == "SAR"


def test_overlapping_request_is_rejected(db, booker, stranger, facility):
    create_booking(db, _request(facility, duration_hours=2), booker, NOW)

    with pytest.raises(BookingConflictError):
        create_booking(db, _request(facility, start_time="10:00"), stranger, NOW)

    assert db.query(Booking).count() == 1


def test_same_start_is_rejected(db, booker, stranger, facility):
    create_booking(db, _request(facility), booker, NOW)

    with pytest.raises(BookingConflictError):
        create_booking(db, _request(facility), stranger, NOW)


def test_adjacent_booking_is_allowed(db, booker, stranger, facility):
    create_booking(db, _request(facility), booker, NOW)

    booking = create_booking(db, _request(facility, start_time="10:00"), stranger, NOW)

    assert booking.start_time == "10:00"


def test_cancelled_booking_frees_the_slot(db, booker, stranger, facility):
    first = create_booking(db, _request(facility), booker, NOW)
    lifecycle.cancel_booking(db, first, booker, NOW)

    second = create_booking(db, _request(facility), stranger, NOW)

    assert second.status == BookingStatus.PENDING


def test_facility_must_be_approved(db, booker, pending_facility):
    with pytest.raises(NotFoundError):
        create_booking(db, _request(pending_facility), booker, NOW)


def test_inactive_facility_cannot_be_booked(db, booker, facility):
    facility.is_active = False
    db.commit()

    with pytest.raises(NotFoundError):
        create_booking(db, _request(facility), booker, NOW)


def test_past_date_is_rejected(db, booker, facility):
    with pytest.raises(SportifyError) as exc_info:
        create_booking(
            db, _request(facility, booking_date=NOW.date().replace(day=12)), booker, NOW
        )

    assert "past" in exc_info.value.message


def test_start_must_match_a_slot(db, booker, facility):
    with pytest.raises(SportifyError):
        create_booking(db, _request(facility, start_time="09:30"), booker, NOW)


def test_unknown_sport_type(db, booker, facility):
    with pytest.raises(NotFoundError):
        create_booking(db, _request(facility, sport_type="Padel"), booker, NOW)


def test_player_limit(db, booker, facility):
    with pytest.raises(SportifyError) as exc_info:
        create_booking(db, _request(facility, number_of_players=11), booker, NOW)

    assert "10" in exc_info.value.message


def test_booking_cannot_pass_midnight(db, booker, facility):
    with pytest.raises(SportifyError):
        create_booking(
            db, _request(facility, start_time="23:00", duration_hours=2), booker, NOW
        )


def test_availability_flags_booked_slots(db, booker, facility):
    create_booking(db, _request(facility, duration_hours=2), booker, NOW)

    slots = get_availability(db, facility, "Football", TOMORROW, NOW)

    assert [(slot.start, slot.available) for slot in slots] == [
        ("09:00", False),
        ("10:00", False),
        ("11:00", True),
        ("22:00", True),
        ("23:00", True),
    ]

"""
Tests for booking status transitions, permissions and refunds
"""
from datetime import datetime
from decimal import Decimal

import pytest

from app.enums.booking import BookingStatus, PaymentStatus
from app.exceptions import InvalidTransitionError, PermissionDeniedError
from app.schemas.facility import CancellationPolicy
from app.services import booking_lifecycle as lifecycle

from conftest import NOW, TOMORROW, create_booking_row


def test_owner_confirms_pending_booking(db, owner, pending_booking):
    booking = lifecycle.confirm_booking(db, pending_booking, owner, NOW)

    assert booking.status == BookingStatus.CONFIRMED


def test_admin_acts_for_the_facility(db, admin, pending_booking):
    booking = lifecycle.confirm_booking(db, pending_booking, admin, NOW)

    assert booking.status == BookingStatus.CONFIRMED


def test_booker_cannot_confirm(db, booker, pending_booking):
    with pytest.raises(PermissionDeniedError):
        lifecycle.confirm_booking(db, pending_booking, booker, NOW)

    db.refresh(pending_booking)
    assert pending_booking.status == BookingStatus.PENDING


def test_confirming_twice_is_invalid(db, owner, pending_booking):
    lifecycle.confirm_booking(db, pending_booking, owner, NOW)

    with pytest.raises(InvalidTransitionError) as exc_info:
        lifecycle.confirm_booking(db, pending_booking, owner, NOW)

    assert exc_info.value.details["current_status"] == "confirmed"


def test_reject_refunds_in_full(db, owner, pending_booking):
    booking = lifecycle.reject_booking(db, pending_booking, owner, NOW, reason="Maintenance")

    assert booking.status == BookingStatus.REJECTED
    assert booking.refund_percentage == 100
    assert booking.cancellation_reason == "Maintenance"
    # Nothing was paid, so nothing moves to refunded
    assert booking.payment_status == PaymentStatus.PENDING


def test_user_cancels_before_policy_window(db, booker, pending_booking):
    # Starts Wednesday 09:00, 46.5 hours after NOW; policy is 24h / 50%
    booking = lifecycle.cancel_booking(db, pending_booking, booker, NOW)

    assert booking.status == BookingStatus.CANCELLED_BY_USER
    assert booking.refund_percentage == 50
    assert booking.refund_amount == Decimal("25.00")
    assert booking.cancelled_at == NOW


def test_user_cancels_inside_policy_window(db, booker, facility):
    booking = create_booking_row(db, booker, facility, TOMORROW)

    # Starts Tuesday 09:00, 22.5 hours after NOW
    booking = lifecycle.cancel_booking(db, booking, booker, NOW)

    assert booking.refund_percentage == 0
    assert booking.refund_amount == Decimal("0.00")


def test_paid_cancellation_is_marked_refunded(db, booker, facility):
    booking = create_booking_row(
        db,
        booker,
        facility,
        datetime(2026, 10, 22).date(),
        status=BookingStatus.CONFIRMED,
        payment_status=PaymentStatus.COMPLETED,
    )

    booking = lifecycle.cancel_booking(db, booking, booker, NOW)

    assert booking.payment_status == PaymentStatus.REFUNDED


def test_paid_cancellation_without_refund_stays_completed(db, booker, facility):
    booking = create_booking_row(
        db,
        booker,
        facility,
        TOMORROW,
        status=BookingStatus.CONFIRMED,
        payment_status=PaymentStatus.COMPLETED,
    )

    booking = lifecycle.cancel_booking(db, booking, booker, NOW)

    assert booking.refund_percentage == 0
    assert booking.payment_status == PaymentStatus.COMPLETED


def test_owner_cannot_cancel_as_user(db, owner, pending_booking):
    with pytest.raises(PermissionDeniedError):
        lifecycle.cancel_booking(db, pending_booking, owner, NOW)


def test_stranger_cannot_touch_booking(db, stranger, pending_booking):
    with pytest.raises(PermissionDeniedError):
        lifecycle.cancel_booking(db, pending_booking, stranger, NOW)
    with pytest.raises(PermissionDeniedError):
        lifecycle.reject_booking(db, pending_booking, stranger, NOW)


def test_facility_cancellation_needs_confirmed_booking(db, owner, pending_booking):
    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel_booking_by_facility(db, pending_booking, owner, NOW)

    lifecycle.confirm_booking(db, pending_booking, owner, NOW)
    booking = lifecycle.cancel_booking_by_facility(db, pending_booking, owner, NOW)

    assert booking.status == BookingStatus.CANCELLED_BY_FACILITY
    assert booking.refund_percentage == 100


def test_full_visit(db, owner, booker, pending_booking):
    lifecycle.confirm_booking(db, pending_booking, owner, NOW)
    lifecycle.check_in_booking(db, pending_booking, owner, NOW)
    booking = lifecycle.complete_booking(db, pending_booking, owner, NOW)

    assert booking.status == BookingStatus.COMPLETED

    # Completed is terminal
    with pytest.raises(InvalidTransitionError):
        lifecycle.cancel_booking(db, booking, booker, NOW)


def test_no_show_from_confirmed(db, owner, pending_booking):
    with pytest.raises(InvalidTransitionError):
        lifecycle.mark_no_show(db, pending_booking, owner, NOW)

    lifecycle.confirm_booking(db, pending_booking, owner, NOW)
    booking = lifecycle.mark_no_show(db, pending_booking, owner, NOW)

    assert booking.status == BookingStatus.NO_SHOW


def test_check_in_requires_confirmation(db, owner, pending_booking):
    with pytest.raises(InvalidTransitionError):
        lifecycle.check_in_booking(db, pending_booking, owner, NOW)


def test_transition_table():
    assert lifecycle.can_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED)
    assert not lifecycle.can_transition(BookingStatus.PENDING, BookingStatus.COMPLETED)
    assert not lifecycle.can_transition(BookingStatus.REJECTED, BookingStatus.CONFIRMED)

    for status in (
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED_BY_USER,
        BookingStatus.CANCELLED_BY_FACILITY,
        BookingStatus.REJECTED,
        BookingStatus.NO_SHOW,
    ):
        assert lifecycle.is_terminal(status)
    assert not lifecycle.is_terminal(BookingStatus.CHECKED_IN)


def test_refund_for_policy():
    policy = CancellationPolicy(hours=24, refund_percentage=80)
    start = datetime(2026, 10, 21, 9, 0)

    assert lifecycle.refund_for(policy, datetime(2026, 10, 20, 3, 0), start) == 80
    assert lifecycle.refund_for(policy, datetime(2026, 10, 20, 9, 0), start) == 80
    assert lifecycle.refund_for(policy, datetime(2026, 10, 20, 23, 0), start) == 0
    assert lifecycle.refund_for(policy, datetime(2026, 10, 21, 10, 0), start) == 0


def test_payment_status_after_cancellation():
    assert (
        lifecycle.payment_status_after(
            BookingStatus.CANCELLED_BY_USER, PaymentStatus.COMPLETED, 50
        )
        == PaymentStatus.REFUNDED
    )
    assert (
        lifecycle.payment_status_after(
            BookingStatus.CANCELLED_BY_USER, PaymentStatus.PENDING, 100
        )
        == PaymentStatus.PENDING
    )
    assert (
        lifecycle.payment_status_after(
            BookingStatus.CONFIRMED, PaymentStatus.COMPLETED, 100
        )
        == PaymentStatus.COMPLETED
    )


def test_confirmed_booking_cannot_be_rejected(db, owner, pending_booking):
    lifecycle.confirm_booking(db, pending_booking, owner, NOW)

    with pytest.raises(InvalidTransitionError):
        lifecycle.reject_booking(db, pending_booking, owner, NOW)


def test_rejected_booking_is_final_for_the_owner(db, owner, pending_booking):
    lifecycle.reject_booking(db, pending_booking, owner, NOW)

    with pytest.raises(InvalidTransitionError):
        lifecycle.confirm_booking(db, pending_booking, owner, NOW)


@pytest.mark.parametrize(
    "status",
    [
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED_BY_USER,
        BookingStatus.CANCELLED_BY_FACILITY,
    ],
)
def test_booker_cannot_cancel_a_closed_booking(db, booker, facility, status):
    booking = create_booking_row(db, booker, facility, TOMORROW, status=status)

    with pytest.raises(InvalidTransitionError) as exc_info:
        lifecycle.cancel_booking(db, booking, booker, NOW)

    assert exc_info.value.details["current_status"] == status.value
    db.refresh(booking)
    assert booking.status == status
    assert booking.refund_percentage is None

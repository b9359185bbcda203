"""
Booking lifecycle: the allowed status transitions, who may perform them,
and the refund/payment bookkeeping attached to cancellations.

    pending    -> confirmed | rejected          (facility)
    pending    -> cancelled_by_user             (booker)
    confirmed  -> cancelled_by_user             (booker)
    confirmed  -> cancelled_by_facility         (facility)
    confirmed  -> checked_in | no_show          (facility)
    checked_in -> completed                     (facility)

"facility" means the facility owner or an admin.
"""

from datetime import datetime, time, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Optional
import logging

from sqlalchemy.orm import Session

from app.enums.booking import BookingStatus, PaymentStatus
from app.exceptions import InvalidTransitionError, PermissionDeniedError
from app.models.booking import Booking
from app.models.user import User
from app.schemas.facility import CancellationPolicy
from app.utils.time_utils import parse_time_to_minutes

logger = logging.getLogger(__name__)


class LifecycleActor(str, Enum):
    BOOKER = "booker"
    FACILITY = "facility"


TRANSITIONS: Dict[BookingStatus, Dict[BookingStatus, LifecycleActor]] = {
    BookingStatus.PENDING: {
        BookingStatus.CONFIRMED: LifecycleActor.FACILITY,
        BookingStatus.REJECTED: LifecycleActor.FACILITY,
        BookingStatus.CANCELLED_BY_USER: LifecycleActor.BOOKER,
    },
    BookingStatus.CONFIRMED: {
        BookingStatus.CANCELLED_BY_USER: LifecycleActor.BOOKER,
        BookingStatus.CANCELLED_BY_FACILITY: LifecycleActor.FACILITY,
        BookingStatus.CHECKED_IN: LifecycleActor.FACILITY,
        BookingStatus.NO_SHOW: LifecycleActor.FACILITY,
    },
    BookingStatus.CHECKED_IN: {
        BookingStatus.COMPLETED: LifecycleActor.FACILITY,
    },
}

# Target status -> actor required, independent of the source status
REQUIRED_ACTOR = {
    target: actor
    for edges in TRANSITIONS.values()
    for target, actor in edges.items()
}

REFUNDING_STATUSES = (
    BookingStatus.CANCELLED_BY_USER,
    BookingStatus.CANCELLED_BY_FACILITY,
    BookingStatus.REJECTED,
)


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in TRANSITIONS.get(current, {})


def is_terminal(status: BookingStatus) -> bool:
    return not TRANSITIONS.get(status)


def acting_roles(booking: Booking, user: User) -> set:
    """Roles the user holds with respect to this booking."""
    roles = set()
    if booking.user_id == user.id:
        roles.add(LifecycleActor.BOOKER)
    if user.is_admin or (booking.facility and booking.facility.owner_id == user.id):
        roles.add(LifecycleActor.FACILITY)
    return roles


def booking_start(booking: Booking, tzinfo=None) -> datetime:
    minutes = parse_time_to_minutes(booking.start_time)
    if minutes == -1:
        raise ValueError(f"Invalid booking start time {booking.start_time!r}")
    return datetime.combine(
        booking.booking_date, time(minutes // 60, minutes % 60), tzinfo=tzinfo
    )


def refund_for(policy: CancellationPolicy, now: datetime, start: datetime) -> int:
    """
    Refund percentage for a cancellation made at `now` for a booking that
    starts at `start`.

    Cancelling at least `policy.hours` before the start earns the policy's
    refund percentage; later cancellations, and cancellations after the
    start, earn nothing.
    """
    hours_before = (start - now).total_seconds() / 3600
    if hours_before < 0:
        return 0
    if hours_before >= policy.hours:
        return policy.refund_percentage
    return 0


def payment_status_after(
    target: BookingStatus, payment_status: PaymentStatus, refund_percentage: int
) -> PaymentStatus:
    if (
        target in REFUNDING_STATUSES
        and payment_status == PaymentStatus.COMPLETED
        and refund_percentage > 0
    ):
        return PaymentStatus.REFUNDED
    return payment_status


def _refund_amount(total_price: Decimal, percentage: int) -> Decimal:
    amount = Decimal(total_price) * Decimal(percentage) / Decimal(100)
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _as_utc_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def policy_for(booking: Booking) -> CancellationPolicy:
    facility = booking.facility
    return CancellationPolicy(
        hours=facility.cancellation_hours if facility else 24,
        refund_percentage=facility.cancellation_refund_percentage if facility else 100,
    )


def transition(
    db: Session,
    booking: Booking,
    target: BookingStatus,
    user: User,
    now: datetime,
    reason: Optional[str] = None,
) -> Booking:
    """
    Moves a booking to `target` on behalf of `user`.

    Raises:
        PermissionDeniedError: user is not the actor allowed for this change
        InvalidTransitionError: the change is not defined from the current status
    """
    required_actor = REQUIRED_ACTOR.get(target)
    if required_actor is None:
        raise InvalidTransitionError(booking.status.value, target.value)

    if required_actor not in acting_roles(booking, user):
        if required_actor == LifecycleActor.BOOKER:
            raise PermissionDeniedError("Only the user who made the booking can do this")
        raise PermissionDeniedError("Only the facility owner can do this")

    current = booking.status
    if not can_transition(current, target):
        logger.info(
            f"Rejected transition for booking {booking.id}: {current.value} -> {target.value}"
        )
        raise InvalidTransitionError(current.value, target.value)

    if target in REFUNDING_STATUSES:
        if target == BookingStatus.CANCELLED_BY_USER:
            start = booking_start(booking, tzinfo=now.tzinfo)
            percentage = refund_for(policy_for(booking), now, start)
        else:
            percentage = 100

        booking.refund_percentage = percentage
        booking.refund_amount = _refund_amount(booking.total_price, percentage)
        booking.cancelled_at = _as_utc_naive(now)
        booking.cancellation_reason = reason
        booking.payment_status = payment_status_after(
            target, booking.payment_status, percentage
        )

    booking.status = target
    db.commit()
    db.refresh(booking)

    logger.info(
        f"Booking {booking.id} moved {current.value} -> {target.value} by user {user.id}"
    )
    return booking


def confirm_booking(db: Session, booking: Booking, user: User, now: datetime) -> Booking:
    return transition(db, booking, BookingStatus.CONFIRMED, user, now)


def reject_booking(
    db: Session, booking: Booking, user: User, now: datetime, reason: Optional[str] = None
) -> Booking:
    return transition(db, booking, BookingStatus.REJECTED, user, now, reason)


def cancel_booking(
    db: Session, booking: Booking, user: User, now: datetime, reason: Optional[str] = None
) -> Booking:
    return transition(db, booking, BookingStatus.CANCELLED_BY_USER, user, now, reason)


def cancel_booking_by_facility(
    db: Session, booking: Booking, user: User, now: datetime, reason: Optional[str] = None
) -> Booking:
    return transition(db, booking, BookingStatus.CANCELLED_BY_FACILITY, user, now, reason)


def check_in_booking(db: Session, booking: Booking, user: User, now: datetime) -> Booking:
    return transition(db, booking, BookingStatus.CHECKED_IN, user, now)


def complete_booking(db: Session, booking: Booking, user: User, now: datetime) -> Booking:
    return transition(db, booking, BookingStatus.COMPLETED, user, now)


def mark_no_show(db: Session, booking: Booking, user: User, now: datetime) -> Booking:
    return transition(db, booking, BookingStatus.NO_SHOW, user, now)

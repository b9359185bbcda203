from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from enum import Enum

from app.database import get_db
from app.crud import booking as crud
from app.enums.booking import BookingStatus
from app.exceptions import SportifyError
from app.models.booking import Booking
from app.models.user import User
from app.schemas.booking import BookingAction, BookingCreate, BookingResponse
from app.services import booking_lifecycle as lifecycle
from app.services import booking_service
from app.services.auth import get_current_user
from app.services.clock import Clock, get_clock
from app.utils.http_errors import to_http_exception

router = APIRouter()


class BookingTab(str, Enum):
    UPCOMING = "upcoming"
    PAST = "past"


def _get_visible_booking(db: Session, booking_id: int, user: User) -> Booking:
    booking = crud.get_booking(db=db, booking_id=booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    if not lifecycle.acting_roles(booking, user):
        raise HTTPException(status_code=403, detail="Not allowed to access this booking")
    return booking


def _apply(
    db: Session,
    booking_id: int,
    target: BookingStatus,
    user: User,
    clock: Clock,
    action: Optional[BookingAction] = None,
) -> Booking:
    booking = crud.get_booking(db=db, booking_id=booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    reason = action.reason if action else None
    try:
        return lifecycle.transition(db, booking, target, user, clock.now(), reason)
    except SportifyError as e:
        raise to_http_exception(e)


@router.post("/", response_model=BookingResponse, status_code=201)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    try:
        return booking_service.create_booking(db, booking, current_user, clock.now())
    except SportifyError as e:
        raise to_http_exception(e)


@router.get("/", response_model=List[BookingResponse])
def read_my_bookings(
    tab: Optional[BookingTab] = None,
    status: Optional[BookingStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    today = clock.now().date()
    if tab == BookingTab.UPCOMING:
        return crud.get_upcoming_bookings(db, current_user.id, today)
    if tab == BookingTab.PAST:
        return crud.get_past_bookings(db, current_user.id, today)
    return crud.get_bookings(
        db, skip=skip, limit=limit, user_id=current_user.id, status=status
    )


@router.get("/facility", response_model=List[BookingResponse])
def read_facility_bookings(
    facility_id: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Bookings across the facilities owned by the current user."""
    return crud.get_bookings_for_owner(
        db, owner_id=current_user.id, facility_id=facility_id, status=status
    )


@router.get("/{booking_id}", response_model=BookingResponse)
def read_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_visible_booking(db, booking_id, current_user)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
def confirm_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(db, booking_id, BookingStatus.CONFIRMED, current_user, clock)


@router.post("/{booking_id}/reject", response_model=BookingResponse)
def reject_booking(
    booking_id: int,
    action: Optional[BookingAction] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(db, booking_id, BookingStatus.REJECTED, current_user, clock, action)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: int,
    action: Optional[BookingAction] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(
        db, booking_id, BookingStatus.CANCELLED_BY_USER, current_user, clock, action
    )


@router.post("/{booking_id}/cancel-by-facility", response_model=BookingResponse)
def cancel_booking_by_facility(
    booking_id: int,
    action: Optional[BookingAction] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(
        db, booking_id, BookingStatus.CANCELLED_BY_FACILITY, current_user, clock, action
    )


@router.post("/{booking_id}/check-in", response_model=BookingResponse)
def check_in_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(db, booking_id, BookingStatus.CHECKED_IN, current_user, clock)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(db, booking_id, BookingStatus.COMPLETED, current_user, clock)


@router.post("/{booking_id}/no-show", response_model=BookingResponse)
def mark_no_show(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    return _apply(db, booking_id, BookingStatus.NO_SHOW, current_user, clock)

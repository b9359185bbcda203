from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.enums.booking import BookingStatus, PaymentStatus
from app.services.pricing import MAX_DURATION_HOURS


class BookingCreate(BaseModel):
    facility_id: int
    sport_type: str  # English name of one of the facility's sport types
    booking_date: date
    start_time: str  # Formato "HH:MM", must match a generated slot
    duration_hours: int = Field(default=1, ge=1, le=MAX_DURATION_HOURS)
    number_of_players: int = Field(default=1, ge=1)
    special_requests: Optional[str] = None


class BookingAction(BaseModel):
    """Optional reason attached to a reject/cancel action"""

    reason: Optional[str] = None


class BookingResponse(BaseModel):
    id: int
    user_id: int
    facility_id: int
    sport_type: str
    booking_date: date
    start_time: str
    end_time: str
    duration_minutes: int
    number_of_players: int
    base_price: Decimal
    total_price: Decimal
    currency: str
    status: BookingStatus
    payment_status: PaymentStatus
    special_requests: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    refund_percentage: Optional[int] = None
    refund_amount: Optional[Decimal] = None
    created_at: datetime

    class Config:
        from_attributes = True

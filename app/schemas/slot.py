from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List


class Slot(BaseModel):
    """A concrete one-hour bookable interval"""

    start: str  # Formato "HH:MM"
    end: str  # Formato "HH:MM"
    price: Decimal


class AvailableSlot(Slot):
    available: bool = True


class AvailabilityResponse(BaseModel):
    facility_id: int
    sport_type: str
    date: date
    currency: str
    slots: List[AvailableSlot]


class PriceQuote(BaseModel):
    facility_id: int
    sport_type: str
    date: date
    start_time: str
    end_time: str
    duration_hours: int
    base_price: Decimal
    total_price: Decimal
    currency: str

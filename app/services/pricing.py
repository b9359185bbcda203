from decimal import Decimal

from app.schemas.slot import Slot

MAX_DURATION_HOURS = 10


def calculate_total_price(slot: Slot, duration_hours: int) -> Decimal:
    """
    Total price of a booking: the slot's hourly price times the duration.

    The duration is not checked against the slot's own span or against the
    prices of the following slots; the chosen slot's rate applies to every
    hour.
    """
    if slot is None:
        raise ValueError("A slot is required to price a booking")
    if duration_hours < 1:
        raise ValueError("Duration must be at least one hour")

    return slot.price * duration_hours

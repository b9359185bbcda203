"""
Expands a sport type's pricing schedule into bookable one-hour slots.

A configured TimeWindow (e.g. 09:00-12:00 at 50) is split into consecutive
one-hour slots (09:00-10:00, 10:00-11:00, 11:00-12:00), each carrying the
window price. A trailing remainder shorter than an hour is dropped.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple
import logging

from app.enums.facility import Weekday, WEEKDAYS_BY_INDEX
from app.schemas.pricing import PricingSchedule, TimeWindow
from app.schemas.slot import Slot
from app.utils.time_utils import (
    parse_time_to_minutes,
    minutes_to_time_string,
    minutes_of_day,
    overlaps_any,
)

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60


def weekday_for(target_date: date) -> Weekday:
    return WEEKDAYS_BY_INDEX[target_date.weekday()]


def split_window(window: TimeWindow) -> List[Slot]:
    """
    Splits a priced window into one-hour slots.

    Args:
        window: Configured window with "HH:MM" start and end

    Returns:
        List of slots; empty when the window is malformed, shorter than an
        hour or ends before it starts
    """
    start_minutes = parse_time_to_minutes(window.start)
    end_minutes = parse_time_to_minutes(window.end)

    if start_minutes == -1 or end_minutes == -1:
        logger.warning(
            f"Skipping window with invalid times start={window.start!r} end={window.end!r}"
        )
        return []

    slot_count = max(0, (end_minutes - start_minutes) // SLOT_MINUTES)

    slots = []
    for i in range(slot_count):
        slot_start = start_minutes + i * SLOT_MINUTES
        slots.append(
            Slot(
                start=minutes_to_time_string(slot_start),
                end=minutes_to_time_string(slot_start + SLOT_MINUTES),
                price=window.price,
            )
        )
    return slots


def generate_slots(
    schedule: Optional[PricingSchedule], target_date: date, now: datetime
) -> List[Slot]:
    """
    Computes the bookable slots of a sport type for a calendar date.

    Slots come back sorted by start time. When target_date is the current
    date of `now`, only slots starting strictly after the current minute are
    kept. Existing bookings are not taken into account here.

    Args:
        schedule: Pricing schedule of the sport type
        target_date: Date to generate slots for
        now: Current instant, in the facility's timezone

    Returns:
        Ordered list of slots (possibly empty)
    """
    if schedule is None:
        return []

    day_pricing = schedule.for_day(weekday_for(target_date))
    if day_pricing is None or not day_pricing.time_slots:
        return []

    slots: List[Slot] = []
    for window in day_pricing.time_slots:
        slots.extend(split_window(window))

    slots.sort(key=lambda slot: slot.start)

    if target_date == now.date():
        current_minutes = minutes_of_day(now)
        slots = [
            slot for slot in slots if parse_time_to_minutes(slot.start) > current_minutes
        ]

    return slots


def find_slot(slots: List[Slot], start_time: str) -> Optional[Slot]:
    return next((slot for slot in slots if slot.start == start_time), None)


def is_slot_free(slot: Slot, occupied: List[Tuple[int, int]]) -> bool:
    """True when the slot does not intersect any occupied [start, end) range."""
    interval = (parse_time_to_minutes(slot.start), parse_time_to_minutes(slot.end))
    return not overlaps_any(interval, occupied)

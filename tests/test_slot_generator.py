"""
Tests for slot generation from pricing schedules
"""
from datetime import date, datetime
from decimal import Decimal

from app.enums.facility import Weekday
from app.schemas.pricing import PricingSchedule, TimeWindow, default_pricing_schedule
from app.services.slot_generator import (
    find_slot,
    generate_slots,
    is_slot_free,
    split_window,
    weekday_for,
)
from app.utils.time_utils import intervals_overlap, parse_time_to_minutes

from conftest import make_day

MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
# A moment on another day, so today's filtering never applies
EARLIER = datetime(2026, 10, 1, 8, 0)


def _starts(slots):
    return [slot.start for slot in slots]


def test_weekday_mapping():
    assert weekday_for(date(2026, 10, 18)) == Weekday.SUNDAY
    assert weekday_for(MONDAY) == Weekday.MONDAY
    assert weekday_for(date(2026, 10, 24)) == Weekday.SATURDAY


def test_three_hour_window_gives_three_slots():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))

    slots = generate_slots(schedule, MONDAY, EARLIER)

    assert [(slot.start, slot.end) for slot in slots] == [
        ("09:00", "10:00"),
        ("10:00", "11:00"),
        ("11:00", "12:00"),
    ]
    assert all(slot.price == Decimal("50") for slot in slots)


def test_day_without_pricing_has_no_slots():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))

    assert generate_slots(schedule, TUESDAY, EARLIER) == []
    assert generate_slots(None, MONDAY, EARLIER) == []


def test_day_with_empty_windows_has_no_slots():
    schedule = PricingSchedule(monday=make_day())

    assert generate_slots(schedule, MONDAY, EARLIER) == []


def test_window_shorter_than_an_hour_is_dropped():
    schedule = PricingSchedule(monday=make_day(("09:00", "09:45", 50)))

    assert generate_slots(schedule, MONDAY, EARLIER) == []


def test_remainder_of_window_is_dropped():
    slots = split_window(TimeWindow(start="09:00", end="10:30", price=Decimal("40")))

    assert [(slot.start, slot.end) for slot in slots] == [("09:00", "10:00")]


def test_window_ending_before_start_gives_nothing():
    assert split_window(TimeWindow(start="12:00", end="09:00", price=Decimal("40"))) == []


def test_invalid_times_are_skipped():
    schedule = PricingSchedule(
        monday=make_day(("9am", "12:00", 50), ("14:00", "16:00", 70))
    )

    slots = generate_slots(schedule, MONDAY, EARLIER)

    assert _starts(slots) == ["14:00", "15:00"]


def test_window_may_end_at_midnight():
    slots = split_window(TimeWindow(start="22:00", end="24:00", price=Decimal("60")))

    assert [(slot.start, slot.end) for slot in slots] == [
        ("22:00", "23:00"),
        ("23:00", "24:00"),
    ]


def test_slots_are_sorted_and_keep_their_window_price():
    schedule = PricingSchedule(
        monday=make_day(("18:00", "20:00", 80), ("09:00", "11:00", 50))
    )

    slots = generate_slots(schedule, MONDAY, EARLIER)

    assert _starts(slots) == ["09:00", "10:00", "18:00", "19:00"]
    assert [slot.price for slot in slots] == [
        Decimal("50"),
        Decimal("50"),
        Decimal("80"),
        Decimal("80"),
    ]


def test_today_keeps_only_slots_starting_after_now():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))

    slots = generate_slots(schedule, MONDAY, datetime(2026, 10, 19, 10, 30))

    assert _starts(slots) == ["11:00"]


def test_slot_starting_at_current_minute_is_excluded():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))

    slots = generate_slots(schedule, MONDAY, datetime(2026, 10, 19, 10, 0, 59))

    assert _starts(slots) == ["11:00"]


def test_future_date_is_not_filtered_by_time_of_day():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))

    slots = generate_slots(schedule, MONDAY, datetime(2026, 10, 18, 23, 59))

    assert len(slots) == 3


def test_generation_is_repeatable():
    schedule = PricingSchedule(
        monday=make_day(("09:00", "12:00", 50), ("15:00", "17:00", 65))
    )

    assert generate_slots(schedule, MONDAY, EARLIER) == generate_slots(
        schedule, MONDAY, EARLIER
    )


def test_default_schedule_yields_no_slots_until_configured():
    schedule = default_pricing_schedule()

    assert schedule.friday.is_weekend
    assert not schedule.monday.is_weekend
    assert generate_slots(schedule, MONDAY, EARLIER) == []


def test_find_slot_and_free_check():
    schedule = PricingSchedule(monday=make_day(("09:00", "12:00", 50)))
    slots = generate_slots(schedule, MONDAY, EARLIER)

    slot = find_slot(slots, "10:00")
    assert slot.end == "11:00"
    assert find_slot(slots, "10:30") is None

    # 09:00-11:00 booked
    occupied = [(540, 660)]
    assert not is_slot_free(slot, occupied)
    assert is_slot_free(find_slot(slots, "11:00"), occupied)


def test_time_parsing():
    assert parse_time_to_minutes("09:30") == 570
    assert parse_time_to_minutes("24:00") == 1440
    assert parse_time_to_minutes("24:30") == -1
    assert parse_time_to_minutes("10:75") == -1
    assert parse_time_to_minutes("ab:cd") == -1
    assert parse_time_to_minutes("9") == -1
    assert parse_time_to_minutes(None) == -1


def test_adjacent_intervals_do_not_overlap():
    assert not intervals_overlap((540, 600), (600, 660))
    assert intervals_overlap((540, 660), (600, 720))

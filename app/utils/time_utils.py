"""
Helpers for "HH:MM" time-of-day strings.
All pricing windows, slots and booking times are stored in this fixed-width
24h format so they also sort lexicographically.
"""

from datetime import datetime
from typing import List, Tuple

MINUTES_PER_DAY = 1440


def parse_time_to_minutes(time_str: str) -> int:
    """
    Converts an "HH:MM" string into minutes since midnight.

    "24:00" is accepted as the end of the day.

    Returns:
        int: Minutes since midnight (0-1440), or -1 when the string is malformed
    """
    try:
        parts = time_str.split(":")
        if len(parts) != 2:
            return -1
        hours = int(parts[0])
        minutes = int(parts[1])
    except (ValueError, AttributeError):
        return -1

    if not 0 <= minutes < 60:
        return -1
    total = hours * 60 + minutes
    if not 0 <= total <= MINUTES_PER_DAY:
        return -1
    return total


def minutes_to_time_string(minutes: int) -> str:
    hours = minutes // 60
    mins = minutes % 60
    return f"{hours:02d}:{mins:02d}"


def minutes_of_day(moment: datetime) -> int:
    """Minutes since midnight of a datetime, seconds are truncated."""
    return moment.hour * 60 + moment.minute


def intervals_overlap(first: Tuple[int, int], second: Tuple[int, int]) -> bool:
    """Half-open interval overlap: [start, end) ranges in minutes."""
    return first[0] < second[1] and second[0] < first[1]


def overlaps_any(interval: Tuple[int, int], occupied: List[Tuple[int, int]]) -> bool:
    return any(intervals_overlap(interval, other) for other in occupied)

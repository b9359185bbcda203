from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo
from dotenv import load_dotenv
import os

load_dotenv()

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the configured application timezone"""

    def __init__(self, timezone: str = APP_TIMEZONE):
        self.tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Clock frozen at a given instant"""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock

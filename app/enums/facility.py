from enum import Enum


class VerificationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class FieldType(str, Enum):
    """Field placement of a sport facility; OTHER uses the custom text"""

    UNSET = ""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    OTHER = "other"


class Weekday(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


# Indexed by date.weekday() (0 = Monday)
WEEKDAYS_BY_INDEX = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)

# Default weekend days used by the registration wizard
DEFAULT_WEEKEND_DAYS = (Weekday.THURSDAY, Weekday.FRIDAY, Weekday.SATURDAY)


class RegistrationStep(str, Enum):
    BASIC = "basic"
    DETAILS = "details"
    MEDIA = "media"

from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List, Optional

from app.enums.facility import FieldType, Weekday, DEFAULT_WEEKEND_DAYS


class TimeWindow(BaseModel):
    """An owner-configured priced interval within one weekday"""

    start: str = ""  # Formato "HH:MM"
    end: str = ""  # Formato "HH:MM"
    price: Decimal = Decimal("0")  # Price per hour in the facility currency


class DayPricing(BaseModel):
    is_weekend: bool = Field(default=False, alias="isWeekend")
    time_slots: List[TimeWindow] = Field(default_factory=list, alias="timeSlots")

    class Config:
        populate_by_name = True


class PricingSchedule(BaseModel):
    """Per-weekday pricing of one sport type, keyed by lowercase weekday name"""

    sunday: Optional[DayPricing] = None
    monday: Optional[DayPricing] = None
    tuesday: Optional[DayPricing] = None
    wednesday: Optional[DayPricing] = None
    thursday: Optional[DayPricing] = None
    friday: Optional[DayPricing] = None
    saturday: Optional[DayPricing] = None

    def for_day(self, weekday: Weekday) -> Optional[DayPricing]:
        return getattr(self, weekday.value)

    def days(self):
        for weekday in Weekday:
            day = self.for_day(weekday)
            if day is not None:
                yield weekday, day


class Dimensions(BaseModel):
    width: float = 0
    length: float = 0


class Equipment(BaseModel):
    name_en: str
    name_ar: str = ""
    quantity: int = Field(default=1, ge=0)


class SportFacilityDetails(BaseModel):
    field_type: FieldType = FieldType.UNSET
    custom_field_type_en: Optional[str] = None
    custom_field_type_ar: Optional[str] = None
    surface_type_en: str = ""
    surface_type_ar: str = ""
    custom_surface_type_en: Optional[str] = None
    custom_surface_type_ar: Optional[str] = None
    dimensions: Dimensions = Field(default_factory=Dimensions)
    max_capacity: int = Field(default=0, ge=0)
    equipment: List[Equipment] = Field(default_factory=list)


class SportType(BaseModel):
    name_en: str = ""
    name_ar: str = ""
    pricing: PricingSchedule = Field(default_factory=PricingSchedule)
    facility: SportFacilityDetails = Field(default_factory=SportFacilityDetails)


def default_pricing_schedule() -> PricingSchedule:
    """
    Empty seven-day schedule the registration wizard starts from.
    Each day carries one blank window; Thursday to Saturday are weekend days.
    """
    days = {
        weekday.value: DayPricing(
            is_weekend=weekday in DEFAULT_WEEKEND_DAYS,
            time_slots=[TimeWindow()],
        )
        for weekday in Weekday
    }
    return PricingSchedule(**days)

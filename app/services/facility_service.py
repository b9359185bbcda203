from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.crud import booking as booking_crud
from app.enums.user_role import Language
from app.exceptions import NotFoundError, SportifyError
from app.models.facility import Facility
from app.schemas.facility import FacilitySummary
from app.schemas.pricing import SportType
from app.schemas.slot import AvailableSlot, PriceQuote
from app.services.pricing import calculate_total_price
from app.services.slot_generator import generate_slots, find_slot, is_slot_free
from app.utils.locale import localized
from app.utils.time_utils import parse_time_to_minutes, minutes_to_time_string, MINUTES_PER_DAY


def load_sport_types(facility: Facility) -> List[SportType]:
    """Re-validates the stored sport types into their typed structures."""
    return [SportType.model_validate(item) for item in (facility.sport_types or [])]


def get_sport_type(facility: Facility, name: str) -> Optional[SportType]:
    wanted = name.strip().lower()
    return next(
        (sport for sport in load_sport_types(facility) if sport.name_en.strip().lower() == wanted),
        None,
    )


def require_sport_type(facility: Facility, name: str) -> SportType:
    sport = get_sport_type(facility, name)
    if sport is None:
        raise NotFoundError(f"Sport type '{name}' is not offered by this facility")
    return sport


def get_availability(
    db: Session, facility: Facility, sport_name: str, target_date: date, now: datetime
) -> List[AvailableSlot]:
    """
    Generated slots for a date, each flagged with whether an active booking
    already holds it. The flag is advisory; booking creation re-checks.
    """
    sport = require_sport_type(facility, sport_name)
    slots = generate_slots(sport.pricing, target_date, now)
    occupied = booking_crud.get_occupied_ranges(db, facility.id, sport.name_en, target_date)

    return [
        AvailableSlot(**slot.model_dump(), available=is_slot_free(slot, occupied))
        for slot in slots
    ]


def quote_price(
    facility: Facility,
    sport_name: str,
    target_date: date,
    start_time: str,
    duration_hours: int,
    now: datetime,
) -> PriceQuote:
    sport = require_sport_type(facility, sport_name)
    slots = generate_slots(sport.pricing, target_date, now)
    slot = find_slot(slots, start_time)
    if slot is None:
        raise SportifyError("Selected time slot is not available")

    end_minutes = parse_time_to_minutes(slot.start) + duration_hours * 60
    if end_minutes > MINUTES_PER_DAY:
        raise SportifyError("Booking cannot extend past midnight")

    return PriceQuote(
        facility_id=facility.id,
        sport_type=sport.name_en,
        date=target_date,
        start_time=slot.start,
        end_time=minutes_to_time_string(end_minutes),
        duration_hours=duration_hours,
        base_price=slot.price,
        total_price=calculate_total_price(slot, duration_hours),
        currency=facility.currency,
    )


def summarize(facility: Facility, lang: Language = Language.EN) -> FacilitySummary:
    main_photo = facility.main_photo or (facility.photos[0] if facility.photos else None)
    return FacilitySummary(
        id=facility.id,
        name=localized(facility, "facility_name", lang),
        description=localized(facility, "facility_description", lang),
        address=localized(facility, "address", lang),
        country_id=facility.country_id,
        city_id=facility.city_id,
        currency=facility.currency,
        sport_types=[localized(sport, "name", lang) for sport in load_sport_types(facility)],
        main_photo_url=main_photo.url if main_photo else None,
    )

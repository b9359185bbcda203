from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import country as country_crud
from app.crud import facility as crud
from app.enums.user_role import Language
from app.exceptions import SportifyError
from app.models.facility import Facility
from app.models.user import User
from app.schemas.facility import (
    FacilityResponse,
    FacilitySummary,
    FacilityUpdate,
    SportTypesUpdate,
)
from app.schemas.slot import AvailabilityResponse, PriceQuote
from app.services import facility_service
from app.services.auth import get_current_user
from app.services.clock import Clock, get_clock
from app.services.pricing import MAX_DURATION_HOURS
from app.services.registration import validate_facility_update, validate_sport_types
from app.utils.http_errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_bookable_facility(db: Session, facility_id: int) -> Facility:
    facility = crud.get_bookable_facility(db, facility_id)
    if facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")
    return facility


def _get_managed_facility(db: Session, facility_id: int, user: User) -> Facility:
    facility = crud.get_facility(db, facility_id)
    if facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")
    if facility.owner_id != user.id and not user.is_admin:
        raise HTTPException(
            status_code=403, detail="You can only manage your own facilities"
        )
    return facility


@router.get("/", response_model=List[FacilitySummary])
def read_facilities(
    country_code: Optional[str] = None,
    city_id: Optional[int] = None,
    sport: Optional[str] = None,
    lang: Language = Language.EN,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    country_id = None
    if country_code:
        country = country_crud.get_country_by_code(db, country_code)
        if country is None:
            raise HTTPException(status_code=404, detail="Country not found")
        country_id = country.id

    facilities = crud.get_bookable_facilities(
        db, skip=skip, limit=limit, country_id=country_id, city_id=city_id
    )
    if sport:
        facilities = [
            facility
            for facility in facilities
            if facility_service.get_sport_type(facility, sport) is not None
        ]

    return [facility_service.summarize(facility, lang) for facility in facilities]


@router.get("/mine", response_model=List[FacilityResponse])
def read_my_facilities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return crud.get_facilities_by_owner(db, current_user.id)


@router.get("/{facility_id}", response_model=FacilityResponse)
def read_facility(facility_id: int, db: Session = Depends(get_db)):
    return _get_bookable_facility(db, facility_id)


@router.get("/{facility_id}/availability", response_model=AvailabilityResponse)
def read_availability(
    facility_id: int,
    sport_type: str,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    facility = _get_bookable_facility(db, facility_id)
    try:
        slots = facility_service.get_availability(
            db, facility, sport_type, target_date, clock.now()
        )
    except SportifyError as e:
        raise to_http_exception(e)

    return AvailabilityResponse(
        facility_id=facility.id,
        sport_type=sport_type,
        date=target_date,
        currency=facility.currency,
        slots=slots,
    )


@router.get("/{facility_id}/quote", response_model=PriceQuote)
def read_price_quote(
    facility_id: int,
    sport_type: str,
    start_time: str,
    target_date: date = Query(..., alias="date"),
    duration_hours: int = Query(1, ge=1, le=MAX_DURATION_HOURS),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    facility = _get_bookable_facility(db, facility_id)
    try:
        return facility_service.quote_price(
            facility, sport_type, target_date, start_time, duration_hours, clock.now()
        )
    except SportifyError as e:
        raise to_http_exception(e)


@router.put("/{facility_id}", response_model=FacilityResponse)
def update_facility(
    facility_id: int,
    facility: FacilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_facility = _get_managed_facility(db, facility_id, current_user)

    errors = validate_facility_update(db_facility, facility)
    if errors:
        raise HTTPException(status_code=422, detail={"errors": errors})

    return crud.update_facility(db=db, facility_id=facility_id, facility=facility)


@router.put("/{facility_id}/sport-types", response_model=FacilityResponse)
def update_sport_types(
    facility_id: int,
    update: SportTypesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Edit flow for sport types and their pricing schedules.
    Runs the same checks as the registration details step.
    """
    db_facility = _get_managed_facility(db, facility_id, current_user)

    errors = validate_sport_types(update.sport_types)
    if errors:
        raise HTTPException(status_code=422, detail={"errors": errors})

    # Bookings reference sport types by English name
    kept_names = {sport.name_en for sport in update.sport_types}
    dropped_names = [
        sport.name_en
        for sport in facility_service.load_sport_types(db_facility)
        if sport.name_en not in kept_names
    ]
    if booking_crud.count_active_bookings_for_sports(db, facility_id, dropped_names) > 0:
        logger.warning(
            f"Refused sport type edit on facility {facility_id}: "
            f"active bookings under {dropped_names}"
        )
        raise HTTPException(
            status_code=409,
            detail="Sport types with active bookings cannot be renamed or removed",
        )

    sport_types = [
        sport.model_dump(mode="json", by_alias=True) for sport in update.sport_types
    ]
    logger.info(f"User {current_user.id} updated sport types of facility {facility_id}")
    return crud.update_sport_types(db, facility_id, sport_types)


@router.delete("/{facility_id}")
def delete_facility(
    facility_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _get_managed_facility(db, facility_id, current_user)

    # Bookings are never deleted, so neither is a facility that has them
    if booking_crud.count_facility_bookings(db, facility_id) > 0:
        raise HTTPException(
            status_code=400,
            detail="Facility has bookings; deactivate it instead",
        )

    crud.delete_facility(db=db, facility_id=facility_id)
    return {"message": "Facility deleted successfully"}

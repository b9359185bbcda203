"""
Partner registration: wizard gates and assembly of the facility record.

The wizard has three validated steps (basic info, details, media) followed
by a review step. Each gate returns a field -> message map; an empty map
means the step passes. Submission runs every gate again before anything is
written.
"""

from typing import Dict, List, Optional
from dotenv import load_dotenv
import logging
import os
import re

from sqlalchemy.orm import Session

from app.crud import country as country_crud
from app.crud import facility as facility_crud
from app.enums.facility import RegistrationStep, VerificationStatus
from app.enums.user_role import UserRole
from app.exceptions import RegistrationValidationError
from app.models.facility import Facility
from app.models.user import User
from app.schemas.facility import (
    BasicInfo,
    FacilityRegistration,
    FacilityUpdate,
    PhotoUpload,
)
from app.schemas.pricing import SportType
from app.utils.time_utils import parse_time_to_minutes

load_dotenv()

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")

MAX_PHOTO_SIZE_BYTES = int(os.getenv("MAX_PHOTO_SIZE_BYTES", str(5 * 1024 * 1024)))
ALLOWED_PHOTO_TYPES = ("image/jpeg", "image/png", "image/webp")

REQUIRED_BASIC_FIELDS = (
    "facility_name_en",
    "facility_name_ar",
    "facility_description_en",
    "facility_description_ar",
    "country_id",
    "city_id",
    "address_en",
    "address_ar",
    "phone",
    "email",
)


def validate_basic_info(basic_info: BasicInfo) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    for field in REQUIRED_BASIC_FIELDS:
        value = getattr(basic_info, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[field] = "This field is required"

    if basic_info.email and not EMAIL_PATTERN.match(basic_info.email):
        errors["email"] = "Please enter a valid email address"

    if basic_info.phone and not PHONE_PATTERN.match(basic_info.phone):
        errors["phone"] = "Please enter a valid phone number"

    return errors


def validate_sport_types(sport_types: List[SportType]) -> Dict[str, str]:
    """
    Details gate: at least one sport type, bilingual names, and every
    configured window with a start, an end after it, a positive price and
    no overlap with the other windows of the same day.
    """
    errors: Dict[str, str] = {}

    if not sport_types:
        errors["sport_types"] = "At least one sport type is required"
        return errors

    for index, sport in enumerate(sport_types):
        if not sport.name_en.strip():
            errors[f"sport_{index}_name_en"] = "Sport name in English is required"
        if not sport.name_ar.strip():
            errors[f"sport_{index}_name_ar"] = "Sport name in Arabic is required"

        for weekday, day_pricing in sport.pricing.days():
            ranges = []
            for slot_index, window in enumerate(day_pricing.time_slots):
                key = f"sport_{index}_{weekday.value}_{slot_index}"

                if not window.price:
                    errors[f"{key}_price"] = "Price is required"
                elif window.price < 0:
                    errors[f"{key}_price"] = "Price must be greater than zero"

                if not window.start or not window.end:
                    errors[f"{key}_time"] = "Time slot is required"
                    continue

                start = parse_time_to_minutes(window.start)
                end = parse_time_to_minutes(window.end)
                if start == -1 or end == -1:
                    errors[f"{key}_time"] = "Time must use the HH:MM format"
                elif end <= start:
                    errors[f"{key}_time"] = "End time must be after start time"
                elif any(start < other_end and other_start < end for other_start, other_end in ranges):
                    errors[f"{key}_time"] = "Time slot overlaps another slot on the same day"
                else:
                    ranges.append((start, end))

    names = [sport.name_en.strip().lower() for sport in sport_types if sport.name_en.strip()]
    if len(names) != len(set(names)):
        errors["sport_types"] = "Each sport type can only be added once"

    return errors


def validate_photos(photos: List[PhotoUpload]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not photos:
        errors["photos"] = "At least one photo is required"
        return errors

    for index, photo in enumerate(photos):
        if photo.size_bytes > MAX_PHOTO_SIZE_BYTES:
            errors[f"photo_{index}_size"] = "Image size must be less than 5MB"
        if photo.content_type not in ALLOWED_PHOTO_TYPES:
            errors[f"photo_{index}_type"] = "Only JPG, PNG and WebP images are allowed"

    return errors


def validate_step(step: RegistrationStep, registration: FacilityRegistration) -> Dict[str, str]:
    if step == RegistrationStep.BASIC:
        return validate_basic_info(registration.basic_info)
    if step == RegistrationStep.DETAILS:
        return validate_sport_types(registration.sport_types)
    if step == RegistrationStep.MEDIA:
        return validate_photos(registration.photos)
    return {}


def validate_registration(registration: FacilityRegistration) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for step in RegistrationStep:
        errors.update(validate_step(step, registration))

    if not registration.accepted_terms:
        errors["terms"] = "Please accept the terms and conditions"

    return errors


def validate_facility_update(facility: Facility, update: FacilityUpdate) -> Dict[str, str]:
    """
    Basic-info gate for the edit flow, run on the stored values merged with
    the patch. An explicit null on a required field counts as missing.
    """
    patch = update.model_dump(exclude_unset=True)
    merged = {}
    for field in REQUIRED_BASIC_FIELDS:
        if field in patch:
            merged[field] = patch[field] if patch[field] is not None else ""
        else:
            merged[field] = getattr(facility, field)

    errors = validate_basic_info(BasicInfo(**merged))

    if "is_active" in patch and patch["is_active"] is None:
        errors["is_active"] = "This field is required"

    return errors


def main_photo_index(photos: List[PhotoUpload], chosen: Optional[int] = None) -> int:
    """Index of the single main photo: explicit choice, then a flagged photo, then 0."""
    if chosen is not None and 0 <= chosen < len(photos):
        return chosen
    for index, photo in enumerate(photos):
        if photo.is_main:
            return index
    return 0


def build_facility(
    registration: FacilityRegistration, owner_id: int, currency: str
) -> Facility:
    """Builds the (unsaved) facility row from a validated registration."""
    basic = registration.basic_info
    policy = registration.cancellation_policy

    return Facility(
        owner_id=owner_id,
        facility_type="sports_facility",
        facility_name_en=basic.facility_name_en.strip(),
        facility_name_ar=basic.facility_name_ar.strip(),
        facility_description_en=basic.facility_description_en.strip(),
        facility_description_ar=basic.facility_description_ar.strip(),
        address_en=basic.address_en.strip(),
        address_ar=basic.address_ar.strip(),
        country_id=basic.country_id,
        city_id=basic.city_id,
        latitude=basic.latitude,
        longitude=basic.longitude,
        phone=basic.phone.strip(),
        email=basic.email.strip(),
        website=basic.website,
        social_media=basic.social_media,
        sport_types=[sport.model_dump(mode="json", by_alias=True) for sport in registration.sport_types],
        amenities_en=[item.name_en for item in registration.amenities],
        amenities_ar=[item.name_ar for item in registration.amenities],
        rules_en=[item.name_en for item in registration.rules],
        rules_ar=[item.name_ar for item in registration.rules],
        currency=currency,
        cancellation_hours=policy.hours,
        cancellation_refund_percentage=policy.refund_percentage,
        verification_status=VerificationStatus.PENDING,
        is_active=True,
    )


def submit_registration(
    db: Session, registration: FacilityRegistration, owner: User
) -> Facility:
    """
    Validates every gate, then persists the facility and its photos.

    The facility is committed before the photos; a failure while storing the
    photos leaves the facility pending with whatever photos were written.

    Raises:
        RegistrationValidationError: with the combined field -> message map
    """
    errors = validate_registration(registration)

    basic = registration.basic_info
    country = None
    if basic.country_id is not None:
        country = country_crud.get_country(db, basic.country_id)
        if country is None:
            errors["country_id"] = "Invalid country selected"
        elif basic.city_id is not None:
            city = country_crud.get_city(db, basic.city_id)
            if city is None or city.country_id != country.id:
                errors["city_id"] = "Invalid city selected"

    if errors:
        logger.info(f"Registration by user {owner.id} rejected with {len(errors)} errors")
        raise RegistrationValidationError(errors)

    facility = build_facility(registration, owner.id, country.currency_code)
    facility = facility_crud.create_facility(db, facility)

    main_index = main_photo_index(registration.photos, registration.main_photo_index)
    facility_crud.add_photos(db, facility.id, registration.photos, main_index)

    if owner.role == UserRole.USER:
        owner.role = UserRole.FACILITY_OWNER
        db.commit()

    db.refresh(facility)
    logger.info(f"Facility {facility.id} registered by user {owner.id}, pending review")
    return facility

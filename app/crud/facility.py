from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.enums.facility import VerificationStatus
from app.models.facility import Facility
from app.models.photo import Photo
from app.schemas.facility import FacilityUpdate, PhotoUpload

logger = logging.getLogger(__name__)


def get_facility(db: Session, facility_id: int) -> Optional[Facility]:
    return db.query(Facility).filter(Facility.id == facility_id).first()


def get_bookable_facility(db: Session, facility_id: int) -> Optional[Facility]:
    return (
        db.query(Facility)
        .filter(
            Facility.id == facility_id,
            Facility.verification_status == VerificationStatus.APPROVED,
            Facility.is_active == True,
        )
        .first()
    )


def get_bookable_facilities(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    country_id: Optional[int] = None,
    city_id: Optional[int] = None,
) -> List[Facility]:
    query = db.query(Facility).filter(
        Facility.verification_status == VerificationStatus.APPROVED,
        Facility.is_active == True,
    )

    if country_id:
        query = query.filter(Facility.country_id == country_id)
    if city_id:
        query = query.filter(Facility.city_id == city_id)

    return query.order_by(Facility.created_at.desc()).offset(skip).limit(limit).all()


def get_facilities_by_owner(db: Session, owner_id: int) -> List[Facility]:
    return (
        db.query(Facility)
        .filter(Facility.owner_id == owner_id)
        .order_by(Facility.created_at.desc())
        .all()
    )


def get_facilities_by_status(
    db: Session,
    verification_status: Optional[VerificationStatus] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Facility]:
    query = db.query(Facility)

    if verification_status:
        query = query.filter(Facility.verification_status == verification_status)

    return query.order_by(Facility.created_at.desc()).offset(skip).limit(limit).all()


def create_facility(db: Session, facility: Facility) -> Facility:
    db.add(facility)
    db.commit()
    db.refresh(facility)
    return facility


def add_photos(
    db: Session, facility_id: int, photos: List[PhotoUpload], main_index: int = 0
) -> List[Photo]:
    db_photos = []
    for index, photo in enumerate(photos):
        db_photo = Photo(
            facility_id=facility_id,
            url=photo.url,
            filename=photo.filename,
            content_type=photo.content_type,
            size_bytes=photo.size_bytes,
            is_main=index == main_index,
        )
        db.add(db_photo)
        db_photos.append(db_photo)

    db.commit()
    logger.info(f"Stored {len(db_photos)} photos for facility {facility_id}")
    return db_photos


def update_facility(
    db: Session, facility_id: int, facility: FacilityUpdate
) -> Optional[Facility]:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return None

    update_data = facility.model_dump(
        exclude_unset=True, exclude={"amenities", "rules", "cancellation_policy"}
    )

    # Nested models are read as objects so their defaults apply
    if facility.amenities is not None:
        db_facility.amenities_en = [item.name_en for item in facility.amenities]
        db_facility.amenities_ar = [item.name_ar for item in facility.amenities]

    if facility.rules is not None:
        db_facility.rules_en = [item.name_en for item in facility.rules]
        db_facility.rules_ar = [item.name_ar for item in facility.rules]

    policy = facility.cancellation_policy
    if policy is not None:
        db_facility.cancellation_hours = policy.hours
        db_facility.cancellation_refund_percentage = policy.refund_percentage

    for field, value in update_data.items():
        setattr(db_facility, field, value)

    db.commit()
    db.refresh(db_facility)
    return db_facility


def update_sport_types(
    db: Session, facility_id: int, sport_types: List[dict]
) -> Optional[Facility]:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return None

    db_facility.sport_types = sport_types
    db.commit()
    db.refresh(db_facility)
    return db_facility


def update_verification_status(
    db: Session,
    facility_id: int,
    verification_status: VerificationStatus,
    rejection_reason: Optional[str] = None,
) -> Optional[Facility]:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return None

    db_facility.verification_status = verification_status
    db_facility.rejection_reason = (
        rejection_reason if verification_status == VerificationStatus.REJECTED else None
    )
    db.commit()
    db.refresh(db_facility)
    return db_facility


def delete_facility(db: Session, facility_id: int) -> bool:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return False

    db.delete(db_facility)
    db.commit()
    return True

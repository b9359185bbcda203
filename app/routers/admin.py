from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.database import get_db
from app.crud import facility as facility_crud
from app.enums.facility import VerificationStatus
from app.models.user import User
from app.schemas.facility import FacilityResponse, VerificationUpdate
from app.services.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/facilities", response_model=List[FacilityResponse])
def read_facilities_for_review(
    verification_status: Optional[VerificationStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return facility_crud.get_facilities_by_status(
        db, verification_status=verification_status, skip=skip, limit=limit
    )


@router.put("/facilities/{facility_id}/verification", response_model=FacilityResponse)
def update_facility_verification(
    facility_id: int,
    update: VerificationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    facility = facility_crud.update_verification_status(
        db,
        facility_id,
        update.verification_status,
        rejection_reason=update.rejection_reason,
    )
    if facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")

    logger.info(
        f"Admin {current_user.id} set facility {facility_id} to {update.verification_status.value}"
    )
    return facility

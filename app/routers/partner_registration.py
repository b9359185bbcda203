from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.enums.facility import RegistrationStep
from app.exceptions import SportifyError
from app.models.user import User
from app.schemas.facility import (
    FacilityRegistration,
    FacilityResponse,
    StepValidationResult,
)
from app.services import registration
from app.services.auth import get_current_user
from app.utils.http_errors import to_http_exception

router = APIRouter()


@router.post("/validate/{step}", response_model=StepValidationResult)
def validate_registration_step(
    step: RegistrationStep,
    payload: FacilityRegistration,
    current_user: User = Depends(get_current_user),
):
    """Checks one wizard step; the client only moves on when is_valid is true."""
    errors = registration.validate_step(step, payload)
    return StepValidationResult(step=step.value, is_valid=not errors, errors=errors)


@router.post("/", response_model=FacilityResponse, status_code=201)
def submit_registration(
    payload: FacilityRegistration,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return registration.submit_registration(db, payload, current_user)
    except SportifyError as e:
        raise to_http_exception(e)

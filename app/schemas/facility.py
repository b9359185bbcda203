from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List, Optional

from app.enums.facility import VerificationStatus
from app.schemas.pricing import SportType


class BasicInfo(BaseModel):
    """First wizard step. Fields are checked by the basic-info gate, not here."""

    facility_name_en: str = ""
    facility_name_ar: str = ""
    facility_description_en: str = ""
    facility_description_ar: str = ""
    country_id: Optional[int] = None
    city_id: Optional[int] = None
    address_en: str = ""
    address_ar: str = ""
    phone: str = ""
    email: str = ""
    website: Optional[str] = None
    social_media: Dict[str, str] = Field(default_factory=dict)
    latitude: float = 0
    longitude: float = 0


class BilingualItem(BaseModel):
    name_en: str
    name_ar: str = ""


class CancellationPolicy(BaseModel):
    hours: int = Field(default=24, ge=0)
    refund_percentage: int = Field(default=100, ge=0, le=100)


class PhotoUpload(BaseModel):
    """Metadata of an already uploaded image"""

    url: str
    filename: Optional[str] = None
    content_type: str
    size_bytes: int = Field(ge=0)
    is_main: bool = False


class FacilityRegistration(BaseModel):
    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    sport_types: List[SportType] = Field(default_factory=list)
    amenities: List[BilingualItem] = Field(default_factory=list)
    rules: List[BilingualItem] = Field(default_factory=list)
    cancellation_policy: CancellationPolicy = Field(default_factory=CancellationPolicy)
    photos: List[PhotoUpload] = Field(default_factory=list)
    main_photo_index: Optional[int] = None
    accepted_terms: bool = False


class StepValidationResult(BaseModel):
    step: str
    is_valid: bool
    errors: Dict[str, str]


class FacilityUpdate(BaseModel):
    facility_name_en: Optional[str] = None
    facility_name_ar: Optional[str] = None
    facility_description_en: Optional[str] = None
    facility_description_ar: Optional[str] = None
    address_en: Optional[str] = None
    address_ar: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    amenities: Optional[List[BilingualItem]] = None
    rules: Optional[List[BilingualItem]] = None
    cancellation_policy: Optional[CancellationPolicy] = None
    is_active: Optional[bool] = None


class SportTypesUpdate(BaseModel):
    sport_types: List[SportType]


class VerificationUpdate(BaseModel):
    verification_status: VerificationStatus
    rejection_reason: Optional[str] = None


class PhotoResponse(BaseModel):
    id: int
    url: str
    is_main: bool

    class Config:
        from_attributes = True


class FacilityResponse(BaseModel):
    id: int
    owner_id: int
    facility_name_en: str
    facility_name_ar: str
    facility_description_en: str
    facility_description_ar: str
    address_en: str
    address_ar: str
    country_id: int
    city_id: int
    latitude: float
    longitude: float
    phone: str
    email: str
    website: Optional[str] = None
    social_media: Optional[Dict[str, str]] = None
    sport_types: List[SportType]
    amenities_en: List[str] = []
    amenities_ar: List[str] = []
    rules_en: List[str] = []
    rules_ar: List[str] = []
    currency: str
    cancellation_policy: CancellationPolicy
    verification_status: VerificationStatus
    rejection_reason: Optional[str] = None
    is_active: bool
    photos: List[PhotoResponse] = []
    created_at: datetime

    class Config:
        from_attributes = True


class FacilitySummary(BaseModel):
    """Localized listing card"""

    id: int
    name: str
    description: str
    address: str
    country_id: int
    city_id: int
    currency: str
    sport_types: List[str]
    main_photo_url: Optional[str] = None

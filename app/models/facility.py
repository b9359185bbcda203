from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    ForeignKey,
    DateTime,
    Enum,
    Boolean,
    JSON,
)
from sqlalchemy.orm import relationship
from app.database import Base
from app.enums.facility import VerificationStatus
from app.models.photo import Photo
from datetime import datetime


class Facility(Base):
    __tablename__ = "facilities"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    facility_type = Column(String, default="sports_facility")

    facility_name_en = Column(String, nullable=False)
    facility_name_ar = Column(String, nullable=False)
    facility_description_en = Column(String, nullable=False)
    facility_description_ar = Column(String, nullable=False)
    address_en = Column(String, nullable=False)
    address_ar = Column(String, nullable=False)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    latitude = Column(Float, default=0)
    longitude = Column(Float, default=0)

    # Contact info lives on the facility itself
    phone = Column(String, nullable=False)
    email = Column(String, nullable=False)
    website = Column(String, nullable=True)
    social_media = Column(JSON, default=dict)

    # List of SportType structures (name, pricing schedule, facility details)
    sport_types = Column(JSON, nullable=False, default=list)
    amenities_en = Column(JSON, default=list)
    amenities_ar = Column(JSON, default=list)
    rules_en = Column(JSON, default=list)
    rules_ar = Column(JSON, default=list)

    currency = Column(String(3), nullable=False)
    cancellation_hours = Column(Integer, default=24)
    cancellation_refund_percentage = Column(Integer, default=100)

    verification_status = Column(
        Enum(VerificationStatus), default=VerificationStatus.PENDING, nullable=False
    )
    rejection_reason = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("app.models.user.User", back_populates="facilities")
    country = relationship("app.models.country.Country")
    city = relationship("app.models.country.City")
    photos = relationship(
        Photo,
        back_populates="facility",
        cascade="all, delete-orphan",
        order_by=[Photo.is_main.desc(), Photo.id],
    )
    bookings = relationship("app.models.booking.Booking", back_populates="facility")

    @property
    def is_bookable(self) -> bool:
        return bool(
            self.verification_status == VerificationStatus.APPROVED and self.is_active
        )

    @property
    def cancellation_policy(self) -> dict:
        return {
            "hours": self.cancellation_hours,
            "refund_percentage": self.cancellation_refund_percentage,
        }

    @property
    def main_photo(self):
        return next((photo for photo in self.photos if photo.is_main), None)

"""
Shared pytest configuration
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.enums.booking import BookingStatus, PaymentStatus
from app.enums.facility import VerificationStatus
from app.enums.user_role import UserRole

# Import every model so SQLAlchemy can resolve the relationships
from app.models.user import User
from app.models.country import Country, City
from app.models.facility import Facility
from app.models.photo import Photo
from app.models.booking import Booking
from app.schemas.pricing import (
    DayPricing,
    PricingSchedule,
    SportFacilityDetails,
    SportType,
    TimeWindow,
)
from app.services.clock import FixedClock


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday 2026-10-19, 10:30
NOW = datetime(2026, 10, 19, 10, 30)
TODAY = NOW.date()
TOMORROW = date(2026, 10, 20)  # Tuesday
IN_TWO_DAYS = date(2026, 10, 21)  # Wednesday


def make_day(*windows):
    """windows: (start, end, price) tuples"""
    return DayPricing(
        time_slots=[
            TimeWindow(start=start, end=end, price=Decimal(str(price)))
            for start, end, price in windows
        ]
    )


def make_sport(name_en="Football", name_ar="كرة القدم", max_capacity=10, **days):
    return SportType(
        name_en=name_en,
        name_ar=name_ar,
        pricing=PricingSchedule(**days),
        facility=SportFacilityDetails(max_capacity=max_capacity),
    )


def football_schedule():
    """Mornings at 50, plus a late window on Tuesdays"""
    morning = ("09:00", "12:00", 50)
    return {
        "monday": make_day(morning),
        "tuesday": make_day(morning, ("22:00", "24:00", 60)),
        "wednesday": make_day(morning),
    }


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FixedClock(NOW)


def _create_user(db, user_id, name, email, role):
    user = User(
        id=user_id,
        name=name,
        email=email,
        hashed_password="hashed",
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def booker(db):
    """Regular user making reservations"""
    return _create_user(db, 1, "Booker", "booker@example.com", UserRole.USER)


@pytest.fixture
def owner(db):
    """Owner of the sample facility"""
    return _create_user(db, 2, "Owner", "owner@example.com", UserRole.FACILITY_OWNER)


@pytest.fixture
def admin(db):
    return _create_user(db, 3, "Admin", "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def stranger(db):
    """User unrelated to the sample facility and bookings"""
    return _create_user(db, 4, "Stranger", "stranger@example.com", UserRole.USER)


@pytest.fixture
def country(db):
    country = Country(
        id=1,
        code="SA",
        name_en="Saudi Arabia",
        name_ar="السعودية",
        currency_code="SAR",
        is_active=True,
    )
    db.add(country)
    db.commit()
    db.refresh(country)
    return country


@pytest.fixture
def city(db, country):
    city = City(id=1, country_id=country.id, name_en="Riyadh", name_ar="الرياض")
    db.add(city)
    db.commit()
    db.refresh(city)
    return city


@pytest.fixture
def other_city(db):
    """City in a second country"""
    other_country = Country(
        id=2,
        code="AE",
        name_en="United Arab Emirates",
        name_ar="الإمارات",
        currency_code="AED",
    )
    db.add(other_country)
    db.flush()
    city = City(id=2, country_id=other_country.id, name_en="Dubai", name_ar="دبي")
    db.add(city)
    db.commit()
    db.refresh(city)
    return city


def _create_facility(db, owner, country, city, status, **overrides):
    data = dict(
        owner_id=owner.id,
        facility_name_en="Green Field",
        facility_name_ar="الملعب الأخضر",
        facility_description_en="Five-a-side pitches",
        facility_description_ar="ملاعب خماسية",
        address_en="King Fahd Road",
        address_ar="طريق الملك فهد",
        country_id=country.id,
        city_id=city.id,
        phone="+966 11 000 0000",
        email="field@example.com",
        sport_types=[
            make_sport(**football_schedule()).model_dump(mode="json", by_alias=True)
        ],
        currency="SAR",
        cancellation_hours=24,
        cancellation_refund_percentage=50,
        verification_status=status,
        is_active=True,
    )
    data.update(overrides)
    facility = Facility(**data)
    db.add(facility)
    db.commit()
    db.refresh(facility)
    return facility


@pytest.fixture
def facility(db, owner, country, city):
    """Approved facility offering Football"""
    return _create_facility(db, owner, country, city, VerificationStatus.APPROVED)


@pytest.fixture
def pending_facility(db, owner, country, city):
    return _create_facility(
        db,
        owner,
        country,
        city,
        VerificationStatus.PENDING,
        facility_name_en="Pending Field",
    )


def create_booking_row(
    db,
    user,
    facility,
    booking_date,
    start_time="09:00",
    end_time="10:00",
    status=BookingStatus.PENDING,
    payment_status=PaymentStatus.PENDING,
    total_price=Decimal("50"),
):
    """Inserts a booking directly, bypassing the creation checks"""
    start_hour = int(start_time.split(":")[0])
    end_hour = int(end_time.split(":")[0])
    booking = Booking(
        user_id=user.id,
        facility_id=facility.id,
        sport_type="Football",
        booking_date=booking_date,
        start_time=start_time,
        end_time=end_time,
        duration_minutes=(end_hour - start_hour) * 60,
        number_of_players=4,
        base_price=Decimal("50"),
        total_price=total_price,
        currency="SAR",
        status=status,
        payment_status=payment_status,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def pending_booking(db, booker, facility):
    """Pending booking two days ahead, outside the cancellation window"""
    return create_booking_row(db, booker, facility, IN_TWO_DAYS)

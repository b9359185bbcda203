from sqlalchemy import Column, Integer, String, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from app.database import Base


class Country(Base):
    __tablename__ = "countries"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(2), unique=True, nullable=False, index=True)  # ISO alpha-2
    name_en = Column(String, nullable=False)
    name_ar = Column(String, nullable=False)
    currency_code = Column(String(3), nullable=False)
    currency_symbol_en = Column(String, nullable=True)
    currency_symbol_ar = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)

    # Relationships
    cities = relationship(
        "app.models.country.City", back_populates="country", cascade="all, delete-orphan"
    )


class City(Base):
    __tablename__ = "cities"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False)
    name_en = Column(String, nullable=False)
    name_ar = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)

    country = relationship("app.models.country.Country", back_populates="cities")

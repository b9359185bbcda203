from sqlalchemy.orm import Session
from typing import List, Optional

from app.models.country import Country, City
from app.schemas.country import CountryCreate, CityCreate


def get_country(db: Session, country_id: int) -> Optional[Country]:
    return db.query(Country).filter(Country.id == country_id).first()


def get_country_by_code(db: Session, code: str) -> Optional[Country]:
    return db.query(Country).filter(Country.code == code.upper()).first()


def get_countries(db: Session, active_only: bool = True) -> List[Country]:
    query = db.query(Country)
    if active_only:
        query = query.filter(Country.is_active == True)
    return query.order_by(Country.name_en).all()


def create_country(db: Session, country: CountryCreate) -> Country:
    data = country.model_dump()
    data["code"] = data["code"].upper()
    data["currency_code"] = data["currency_code"].upper()
    db_country = Country(**data)
    db.add(db_country)
    db.commit()
    db.refresh(db_country)
    return db_country


def get_city(db: Session, city_id: int) -> Optional[City]:
    return db.query(City).filter(City.id == city_id).first()


def get_cities(db: Session, country_id: int, active_only: bool = True) -> List[City]:
    query = db.query(City).filter(City.country_id == country_id)
    if active_only:
        query = query.filter(City.is_active == True)
    return query.order_by(City.name_en).all()


def create_city(db: Session, country_id: int, city: CityCreate) -> City:
    db_city = City(country_id=country_id, **city.model_dump())
    db.add(db_city)
    db.commit()
    db.refresh(db_city)
    return db_city

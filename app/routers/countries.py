from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.crud import country as crud
from app.schemas.country import CountryCreate, CountryResponse, CityCreate, CityResponse
from app.services.auth import require_admin
from app.models.user import User

router = APIRouter()


@router.get("/", response_model=List[CountryResponse])
def read_countries(db: Session = Depends(get_db)):
    return crud.get_countries(db)


@router.post("/", response_model=CountryResponse)
def create_country(
    country: CountryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if crud.get_country_by_code(db, country.code):
        raise HTTPException(status_code=400, detail="Country code already exists")
    return crud.create_country(db, country)


@router.get("/{country_id}/cities", response_model=List[CityResponse])
def read_cities(country_id: int, db: Session = Depends(get_db)):
    if crud.get_country(db, country_id) is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return crud.get_cities(db, country_id)


@router.post("/{country_id}/cities", response_model=CityResponse)
def create_city(
    country_id: int,
    city: CityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    if crud.get_country(db, country_id) is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return crud.create_city(db, country_id, city)

from pydantic import BaseModel, Field
from typing import Optional


class CountryBase(BaseModel):
    code: str = Field(min_length=2, max_length=2)
    name_en: str
    name_ar: str
    currency_code: str = Field(min_length=3, max_length=3)
    currency_symbol_en: Optional[str] = None
    currency_symbol_ar: Optional[str] = None
    is_active: bool = True


class CountryCreate(CountryBase):
    pass


class CountryResponse(CountryBase):
    id: int

    class Config:
        from_attributes = True


class CityBase(BaseModel):
    name_en: str
    name_ar: str
    is_active: bool = True


class CityCreate(CityBase):
    pass


class CityResponse(CityBase):
    id: int
    country_id: int

    class Config:
        from_attributes = True

"""Schemi Veicolo / Car schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rentsync.models.car import CarCategory, CarCondition, CarStatus, FuelType, Transmission


class RentalRates(BaseModel):
    """Listino mensile per durata / Monthly rate ladder by duration."""
    monthly1: float | None = None
    monthly3: float | None = None
    monthly6: float | None = None
    monthly12: float | None = None
    monthly24: float | None = None
    monthly48: float | None = None


class CarBase(BaseModel):
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    plate: str = Field(min_length=1)
    category: CarCategory
    price_per_day: float = Field(ge=0)
    year: int
    mileage: int = 0
    condition: CarCondition = CarCondition.USATO
    fuel_type: FuelType
    transmission: Transmission
    image: str = ""
    description: str | None = None
    features: list[str] = []
    accessories: list[str] = []
    rental_rates: RentalRates | None = None
    is_promo: bool = False
    promo_description: str | None = None


class CarCreate(CarBase):
    status: CarStatus = CarStatus.AVAILABLE


class CarUpdate(BaseModel):
    brand: str | None = None
    model: str | None = None
    plate: str | None = None
    category: CarCategory | None = None
    price_per_day: float | None = Field(None, ge=0)
    year: int | None = None
    mileage: int | None = None
    condition: CarCondition | None = None
    fuel_type: FuelType | None = None
    transmission: Transmission | None = None
    status: CarStatus | None = None
    image: str | None = None
    description: str | None = None
    features: list[str] | None = None
    accessories: list[str] | None = None
    rental_rates: RentalRates | None = None
    is_promo: bool | None = None
    promo_description: str | None = None

    @field_validator(
        "brand", "model", "plate", "category", "price_per_day", "year", "mileage", "condition",
        "fuel_type", "transmission", "status", "image", "features", "accessories", "is_promo",
    )
    @classmethod
    def _not_null(cls, value):
        # null esplicito solo sui campi opzionali / Explicit null only on optional fields
        if value is None:
            raise ValueError("must not be null")
        return value


class CarRead(CarBase):
    model_config = ConfigDict(from_attributes=True)
    id: str
    status: CarStatus


class CarStatusUpdate(BaseModel):
    status: CarStatus


class CarImportError(BaseModel):
    row: int
    error: str


class CarImportReport(BaseModel):
    """Esito import listino / Price-list import outcome."""
    created: list[CarRead] = []
    errors: list[CarImportError] = []

"""Modello Veicolo della flotta / Fleet car model."""

import enum

from sqlalchemy import JSON, Boolean, Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base


class CarStatus(str, enum.Enum):
    """Stato del veicolo / Car status."""
    AVAILABLE = "Disponibile"
    RENTED = "Noleggiata"
    MAINTENANCE = "Manutenzione"


# Ordine del ciclo manuale / Manual cycling order
STATUS_CYCLE = [CarStatus.AVAILABLE, CarStatus.RENTED, CarStatus.MAINTENANCE]


class CarCategory(str, enum.Enum):
    """Categoria commerciale / Commercial category."""
    ECONOMY = "Economy"
    SUV = "SUV"
    LUXURY = "Luxury"
    VAN = "Van"


class FuelType(str, enum.Enum):
    """Alimentazione / Fuel type."""
    BENZINA = "Benzina"
    DIESEL = "Diesel"
    IBRIDO = "Ibrido"
    ELETTRICO = "Elettrico"
    GPL_METANO = "GPL/Metano"


class Transmission(str, enum.Enum):
    """Cambio / Transmission."""
    MANUALE = "Manuale"
    AUTOMATICO = "Automatico"


class CarCondition(str, enum.Enum):
    NUOVO = "Nuovo"
    USATO = "Usato"


class Car(Base):
    """Veicolo a noleggio / Rental car."""
    __tablename__ = "cars"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)

    # --- Identificazione / Identification ---
    brand: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(80), nullable=False)
    # Unicita non imposta dal DB / Uniqueness not enforced by the DB
    plate: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    category: Mapped[CarCategory] = mapped_column(Enum(CarCategory), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, default=0)
    condition: Mapped[CarCondition] = mapped_column(Enum(CarCondition), default=CarCondition.USATO)
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)
    transmission: Mapped[Transmission] = mapped_column(Enum(Transmission), nullable=False)

    # --- Commerciale / Commercial ---
    price_per_day: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[CarStatus] = mapped_column(Enum(CarStatus), default=CarStatus.AVAILABLE)
    image: Mapped[str] = mapped_column(String(500), default="")
    description: Mapped[str | None] = mapped_column(Text)
    features: Mapped[list] = mapped_column(JSON, default=list)
    accessories: Mapped[list] = mapped_column(JSON, default=list)
    rental_rates: Mapped[dict | None] = mapped_column(JSON)  # monthly1 ... monthly48
    is_promo: Mapped[bool] = mapped_column(Boolean, default=False)
    promo_description: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Car {self.brand} {self.model} ({self.plate})>"

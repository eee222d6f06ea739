"""Schemi AI (input profilo, output del modello) / AI schemas (profile input, model output).

I campi accettano sia camelCase (risposta del modello) sia snake_case.
Fields accept both camelCase (model response) and snake_case.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from rentsync.models.car import CarCategory, FuelType, Transmission


class TextResponse(BaseModel):
    text: str


class DriverProfile(BaseModel):
    """Profilo guidatore (transitorio) / Driver profile (transient)."""
    job: str = ""
    annual_income: str = ""
    annual_km: str = ""
    family_size: str = ""
    trip_type: Literal["Urbano", "Extraurbano", "Autostrada", "Misto"] = "Misto"
    transmission: Literal["Manuale", "Automatico", "Indifferente"] = "Indifferente"
    driving_style: Literal["Rilassato", "Sportivo", "Ecologico"] = "Rilassato"
    load_needs: Literal["Standard", "Bagagli Voluminosi", "Attrezzatura Sportiva", "Animali Domestici"] = "Standard"
    priority: Literal["Risparmio", "Comfort", "Tecnologia", "Immagine/Status"] = "Comfort"


class RiskAnalysisRequest(BaseModel):
    financial_notes: str = ""


class RiskAnalysisResult(BaseModel):
    risk_score: int = Field(ge=0, le=100, validation_alias=AliasChoices("riskScore", "risk_score"))
    risk_level: Literal["Basso", "Medio", "Alto"] = Field(validation_alias=AliasChoices("riskLevel", "risk_level"))
    max_credit_limit: float = Field(validation_alias=AliasChoices("maxCreditLimit", "max_credit_limit"))
    reasoning: str
    recommendation: str


class AIRecommendation(BaseModel):
    car_id: str = Field(validation_alias=AliasChoices("carId", "car_id"))
    match_score: int = Field(ge=0, le=100, validation_alias=AliasChoices("matchScore", "match_score"))
    reasoning: str = ""
    suggested_monthly_rate: float = Field(
        0, validation_alias=AliasChoices("suggestedMonthlyRate", "suggested_monthly_rate")
    )
    suggested_duration_months: int = Field(
        0, validation_alias=AliasChoices("suggestedDurationMonths", "suggested_duration_months")
    )


class RecommendationRequest(BaseModel):
    profile: DriverProfile


class SuggestedRates(BaseModel):
    monthly1: float | None = None
    monthly3: float | None = None
    monthly6: float | None = None
    monthly12: float | None = None
    monthly24: float | None = None
    monthly48: float | None = None


class CarDetailsSuggestion(BaseModel):
    """Pre-compilazione AI della scheda auto (parziale) / AI prefill for the car form (partial)."""
    category: CarCategory | None = None
    features: list[str] = []
    accessories: list[str] = []
    description: str | None = None
    price_per_day: float | None = Field(None, validation_alias=AliasChoices("pricePerDay", "price_per_day"))
    rental_rates: SuggestedRates | None = Field(None, validation_alias=AliasChoices("rentalRates", "rental_rates"))
    fuel_type: FuelType | None = Field(None, validation_alias=AliasChoices("fuelType", "fuel_type"))
    transmission: Transmission | None = None


class CarDetailsRequest(BaseModel):
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int | None = None


class FoundLead(BaseModel):
    """Lead proposto dalla ricerca AI / Lead proposed by the AI search."""
    name: str | None = None
    company: str | None = None
    interest: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None


class GroundingSource(BaseModel):
    title: str | None = None
    uri: str | None = None


class LeadSearchResult(BaseModel):
    leads: list[FoundLead] = []
    sources: list[GroundingSource] = []
    error: str | None = None


class StrategicStats(BaseModel):
    """Metriche per il report strategico / Metrics for the strategic report."""
    period: str
    revenue: float
    top_cars: list[str] = []
    unused_cars: list[str] = []
    top_agents: list[str] = []

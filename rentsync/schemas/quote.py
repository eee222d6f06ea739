"""Schemi Preventivo / Quote schemas."""

from pydantic import BaseModel, Field

from rentsync.models.client import ClientType


class QuotePreviewRequest(BaseModel):
    car_id: str
    start_date: str | None = None  # YYYY-MM-DD
    end_date: str | None = None
    dynamic_discount: bool = False
    manual_discount: float = Field(0, ge=0)


class QuotePreview(BaseModel):
    car_id: str
    days: int
    base_total: float
    discount: float
    final_total: float
    vat: float
    grand_total: float


class QuoteDescriptionRequest(BaseModel):
    car_id: str
    days: int = Field(1, ge=1)
    client_type: ClientType = ClientType.PRIVATO

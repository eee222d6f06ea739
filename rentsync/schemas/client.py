"""Schemi Cliente / Client schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rentsync.models.client import ClientStatus, ClientType


class ClientAddress(BaseModel):
    street: str = ""
    city: str = ""
    zip: str = ""
    province: str = ""


class ClientDocument(BaseModel):
    id: str
    name: str
    type: Literal["pdf", "doc", "docx", "txt", "jpg", "png", "other"] = "other"
    upload_date: str
    url: str
    status: Literal["Valido", "Scaduto", "In Revisione"] = "In Revisione"


class RentalHistoryItem(BaseModel):
    id: str
    car_model: str
    plate: str
    start_date: str
    end_date: str
    total_amount: float
    status: Literal["Concluso", "Attivo", "Annullato"]


class ClientBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    type: ClientType = ClientType.PRIVATO
    vat_number: str | None = None
    fiscal_code: str | None = None
    birth_date: str | None = None
    address: ClientAddress | None = None
    notes: str | None = None
    subagent_id: str | None = None


class ClientCreate(ClientBase):
    risk_score: int | None = Field(None, ge=0, le=100)
    status: ClientStatus = ClientStatus.ATTIVO


class ClientUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    type: ClientType | None = None
    vat_number: str | None = None
    fiscal_code: str | None = None
    birth_date: str | None = None
    address: ClientAddress | None = None
    notes: str | None = None
    subagent_id: str | None = None
    risk_score: int | None = Field(None, ge=0, le=100)
    status: ClientStatus | None = None

    @field_validator("name", "email", "phone", "type", "risk_score", "status")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class ClientRead(ClientBase):
    model_config = ConfigDict(from_attributes=True)
    id: str
    risk_score: int
    status: ClientStatus
    documents: list[ClientDocument] = []
    rental_history: list[RentalHistoryItem] = []


class RentalRequest(BaseModel):
    """Noleggio diretto dalla scheda cliente / Direct rental from the client card."""
    car_id: str
    start_date: str
    end_date: str

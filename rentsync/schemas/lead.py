"""Schemi Lead marketing / Marketing lead schemas."""

from pydantic import BaseModel, ConfigDict, Field

from rentsync.models.lead import LeadSource, LeadStatus
from rentsync.schemas.ai import FoundLead


class LeadCreate(BaseModel):
    name: str = Field(min_length=1)
    company: str | None = None
    interest: str = ""
    location: str | None = None
    email: str | None = None
    phone: str | None = None


class LeadRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    company: str
    interest: str
    status: LeadStatus
    source: LeadSource
    location: str | None = None
    email: str | None = None
    phone: str | None = None


class LeadImportRequest(BaseModel):
    """Righe "Nome, Azienda, Interesse, Localita" / Lines "Name, Company, Interest, Location"."""
    text: str


class LeadImportResult(BaseModel):
    imported: int
    leads: list[LeadRead]


class LeadSearchRequest(BaseModel):
    target: str = Field(min_length=1)
    location: str = Field(min_length=1)
    simulate: bool = False


class LeadSearchImport(BaseModel):
    lead: FoundLead
    simulated: bool = False


class MarketingCopyRequest(BaseModel):
    tone: str = "Professionale e Persuasivo"
    car_ids: list[str] = []

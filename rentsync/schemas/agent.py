"""Schemi Agente / Agent schemas."""

from pydantic import BaseModel, ConfigDict, Field

from rentsync.models.agent import AgentStatus
from rentsync.schemas.contract import ContractRead


class AgentBilling(BaseModel):
    vat_number: str = ""
    billing_address: str = ""
    iban: str = ""
    bank_name: str = ""
    payment_terms: str = "30gg d.f."


class AgentCreate(BaseModel):
    """Attivazione mandato / Mandate activation."""
    name: str = Field(min_length=1)
    nickname: str = Field(min_length=1)
    region: str = Field(min_length=1)
    commission_rate: float | None = Field(None, ge=0, le=100)
    billing: AgentBilling | None = None


class AgentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    nickname: str
    region: str
    mandate_start: str
    commission_rate: float
    active_clients: int
    status: AgentStatus
    billing: AgentBilling | None = None


class AgentStatusUpdate(BaseModel):
    status: AgentStatus


class MagicLinkRead(BaseModel):
    url: str
    qr_url: str


class AgentReport(BaseModel):
    """Riepilogo provvigioni / Commission summary."""
    agent: AgentRead
    contracts: list[ContractRead]
    total_sales: float
    total_commission: float
    share_text: str

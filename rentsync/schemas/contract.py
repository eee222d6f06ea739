"""Schemi Contratto / Contract schemas."""

from pydantic import BaseModel, ConfigDict, Field

from rentsync.models.contract import DIRECT_OFFICE, ContractStatus


class ContractCreate(BaseModel):
    agent_id: str = DIRECT_OFFICE
    client_id: str
    car_id: str
    start_date: str  # YYYY-MM-DD
    end_date: str
    total_amount: float = Field(ge=0)
    notes: str | None = None


class ContractRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    agent_id: str
    client_id: str
    car_id: str
    start_date: str
    end_date: str
    total_amount: float
    commission_amount: float
    status: ContractStatus
    signed_date: str
    check_in_photos: list[str] = []
    check_out_photos: list[str] = []
    notes: str | None = None


class ContractPhotosUpdate(BaseModel):
    photos: list[str]

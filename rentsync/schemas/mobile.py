"""Schemi app mobile agenti / Agent mobile app schemas."""

from pydantic import BaseModel, Field

from rentsync.schemas.agent import AgentRead


class MobileProfile(BaseModel):
    agent: AgentRead
    total_commission: float
    magic_link: str
    qr_url: str


class MobileClientCreate(BaseModel):
    """Cliente privato registrato sul campo / Private client registered in the field."""
    name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""


class MobileContractCreate(BaseModel):
    client_id: str
    car_id: str
    start_date: str
    end_date: str

"""Contratto con riferimenti risolti / Contract with resolved references."""

from pydantic import BaseModel

from rentsync.schemas.agent import AgentRead
from rentsync.schemas.car import CarRead
from rentsync.schemas.client import ClientRead
from rentsync.schemas.contract import ContractRead


class ContractDetail(BaseModel):
    contract: ContractRead
    car: CarRead | None = None
    client: ClientRead | None = None
    agent: AgentRead | None = None

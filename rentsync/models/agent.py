"""Modello Subagente (mandato) / Sub-agent (mandate) model."""

import enum

from sqlalchemy import JSON, Enum, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base


class AgentStatus(str, enum.Enum):
    ATTIVO = "Attivo"
    SOSPESO = "Sospeso"


class Agent(Base):
    """Subagente con mandato attivo / Sub-agent holding a mandate."""
    __tablename__ = "agents"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    # Handle di login (anche nel magic link) / Login handle (also used in the magic link)
    nickname: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(80), nullable=False)
    mandate_start: Mapped[str] = mapped_column(String(10))  # YYYY-MM-DD
    commission_rate: Mapped[float] = mapped_column(Float, default=10.0)  # %
    active_clients: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[AgentStatus] = mapped_column(Enum(AgentStatus), default=AgentStatus.ATTIVO)
    # iban, bank_name, vat_number, billing_address, payment_terms
    billing: Mapped[dict | None] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<Agent {self.nickname}>"

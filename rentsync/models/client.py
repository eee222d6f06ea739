"""Modello Cliente / Client model."""

import enum

from sqlalchemy import JSON, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base


class ClientType(str, enum.Enum):
    PRIVATO = "Privato"
    AZIENDA = "Azienda"


class ClientStatus(str, enum.Enum):
    """Stato del cliente / Client status."""
    ATTIVO = "Attivo"
    IN_REVISIONE = "In Revisione"
    BLOCCATO = "Bloccato"


class Client(Base):
    """Cliente privato o aziendale / Private or business client."""
    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(150), default="")
    phone: Mapped[str] = mapped_column(String(50), default="")
    type: Mapped[ClientType] = mapped_column(Enum(ClientType), default=ClientType.PRIVATO)
    vat_number: Mapped[str | None] = mapped_column(String(30))
    fiscal_code: Mapped[str | None] = mapped_column(String(30))
    birth_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    address: Mapped[dict | None] = mapped_column(JSON)  # street, city, zip, province
    risk_score: Mapped[int] = mapped_column(Integer, default=50)
    status: Mapped[ClientStatus] = mapped_column(Enum(ClientStatus), default=ClientStatus.ATTIVO)
    documents: Mapped[list] = mapped_column(JSON, default=list)
    rental_history: Mapped[list] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text)
    # Riferimento debole all'agente / Weak reference to the managing agent
    subagent_id: Mapped[str | None] = mapped_column(String(40))

    def __repr__(self) -> str:
        return f"<Client {self.name}>"

"""Modello Contratto di noleggio / Rental contract model."""

import enum

from sqlalchemy import JSON, Enum, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base

# Agente fittizio per i noleggi diretti in sede / Pseudo-agent for direct office rentals
DIRECT_OFFICE = "DIRECT_OFFICE"


class ContractStatus(str, enum.Enum):
    ATTIVO = "Attivo"
    CONCLUSO = "Concluso"


class PhotoKind(str, enum.Enum):
    """Tipo di foto ispezione / Inspection photo kind."""
    CHECK_IN = "checkIn"
    CHECK_OUT = "checkOut"


class Contract(Base):
    """Contratto agente / cliente / auto / Agent-client-car contract.

    agent_id, client_id e car_id sono riferimenti deboli (nessuna FK).
    agent_id, client_id and car_id are weak references (no FK).
    """
    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    agent_id: Mapped[str] = mapped_column(String(40), index=True)
    client_id: Mapped[str] = mapped_column(String(40), index=True)
    car_id: Mapped[str] = mapped_column(String(40), index=True)
    start_date: Mapped[str] = mapped_column(String(10))  # YYYY-MM-DD
    end_date: Mapped[str] = mapped_column(String(10))
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    commission_amount: Mapped[float] = mapped_column(Float, default=0.0)
    status: Mapped[ContractStatus] = mapped_column(Enum(ContractStatus), default=ContractStatus.ATTIVO)
    signed_date: Mapped[str] = mapped_column(String(32))  # ISO timestamp
    check_in_photos: Mapped[list] = mapped_column(JSON, default=list)
    check_out_photos: Mapped[list] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Contract {self.id}>"

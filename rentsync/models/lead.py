"""Modello Lead marketing / Marketing lead model."""

import enum

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base


class LeadStatus(str, enum.Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    CONVERTED = "Converted"


class LeadSource(str, enum.Enum):
    """Origine del lead / Lead origin."""
    MANUAL = "Manual"
    AI_SEARCH = "AI_Search"
    EXTERNAL = "External"


class MarketingLead(Base):
    __tablename__ = "marketing_leads"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    interest: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[LeadStatus] = mapped_column(Enum(LeadStatus), default=LeadStatus.NEW)
    source: Mapped[LeadSource] = mapped_column(Enum(LeadSource), default=LeadSource.MANUAL)
    location: Mapped[str | None] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(150))
    phone: Mapped[str | None] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"<MarketingLead {self.name}>"

"""Profilo aziendale (singleton) / Company profile (singleton)."""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rentsync.database import Base

# Unica riga della tabella / The table's single row
COMPANY_PROFILE_ID = 1


class CompanyProfile(Base):
    __tablename__ = "company_profile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=COMPANY_PROFILE_ID)
    name: Mapped[str] = mapped_column(String(150), default="")
    slogan: Mapped[str] = mapped_column(String(255), default="")
    vat_number: Mapped[str] = mapped_column(String(30), default="")
    address: Mapped[str] = mapped_column(String(255), default="")
    city: Mapped[str] = mapped_column(String(100), default="")
    email: Mapped[str] = mapped_column(String(150), default="")
    phone: Mapped[str] = mapped_column(String(50), default="")
    website: Mapped[str] = mapped_column(String(150), default="")
    bio: Mapped[str] = mapped_column(Text, default="")
    logo_url: Mapped[str | None] = mapped_column(String(500))
    social: Mapped[dict] = mapped_column(JSON, default=dict)  # linkedin, facebook, instagram
    bank_info: Mapped[dict] = mapped_column(JSON, default=dict)  # iban, bank_name
    # Credenziali centrale rischi (CRIF) / Credit-bureau credentials
    credit_bureau: Mapped[dict | None] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<CompanyProfile {self.name}>"

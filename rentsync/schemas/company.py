"""Schemi Profilo aziendale / Company profile schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


class SocialLinks(BaseModel):
    linkedin: str | None = None
    facebook: str | None = None
    instagram: str | None = None


class BankInfo(BaseModel):
    iban: str = ""
    bank_name: str = ""


class CreditBureauCredentials(BaseModel):
    """Credenziali CRIF (password in sola scrittura) / CRIF credentials (write-only password)."""
    username: str | None = None
    password: str | None = None
    circuit: Literal["S", "P"] | None = None
    certificate: str | None = None


class CreditBureauRead(BaseModel):
    username: str | None = None
    circuit: Literal["S", "P"] | None = None
    has_password: bool = False
    has_certificate: bool = False


class CompanyProfileBase(BaseModel):
    name: str = ""
    slogan: str = ""
    vat_number: str = ""
    address: str = ""
    city: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    bio: str = ""
    logo_url: str | None = None
    social: SocialLinks = SocialLinks()
    bank_info: BankInfo = BankInfo()


class CompanyProfileUpdate(CompanyProfileBase):
    credit_bureau: CreditBureauCredentials | None = None


class CompanyProfileRead(CompanyProfileBase):
    model_config = ConfigDict(from_attributes=True)
    credit_bureau: CreditBureauRead | None = None

    @field_validator("credit_bureau", mode="before")
    @classmethod
    def _mask_credentials(cls, value):
        # Mai esporre password/certificato / Never expose password/certificate
        if isinstance(value, dict):
            return {
                "username": value.get("username"),
                "circuit": value.get("circuit"),
                "has_password": bool(value.get("password")),
                "has_certificate": bool(value.get("certificate")),
            }
        return value

    @field_validator("social", "bank_info", mode="before")
    @classmethod
    def _empty_json(cls, value):
        return value or {}

"""
Schemi di autenticazione / Authentication schemas.
Login agenzia, login agente, sessione.
"""

from typing import Literal

from pydantic import BaseModel, Field


class AgencyLoginRequest(BaseModel):
    """Password agenzia (vuota ammessa se configurato) / Agency password (empty allowed when configured)."""
    password: str = Field("", max_length=200)


class AgentLoginRequest(BaseModel):
    nickname: str = Field(min_length=1, max_length=50)


class UserSession(BaseModel):
    role: Literal["agency", "agent"]
    user_id: str | None = None
    name: str


class TokenResponse(BaseModel):
    """Risposta con token di sessione / Session token response."""
    access_token: str
    token_type: str = "bearer"
    session: UserSession


class LogoutRequest(BaseModel):
    current_url: str = "/"


class LogoutResponse(BaseModel):
    redirect_to: str

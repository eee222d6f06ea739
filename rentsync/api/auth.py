"""
Route di autenticazione / Authentication routes.
Login agenzia, login agente, magic link, logout.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from rentsync.api.deps import get_current_session, get_store
from rentsync.config import settings
from rentsync.rate_limit import limiter
from rentsync.schemas.auth import (
    AgencyLoginRequest,
    AgentLoginRequest,
    LogoutRequest,
    LogoutResponse,
    TokenResponse,
    UserSession,
)
from rentsync.services import session as session_service
from rentsync.services.session import LoginError
from rentsync.services.store import DomainStore
from rentsync.utils.auth import create_session_token

router = APIRouter()


def _issue(session: UserSession) -> TokenResponse:
    return TokenResponse(
        access_token=create_session_token(session.role, session.user_id, session.name),
        session=session,
    )


@router.post("/login/agency", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login_agency(request: Request, data: AgencyLoginRequest):
    """Accesso agenzia con password / Agency login with password."""
    try:
        return _issue(session_service.login_agency(data.password))
    except LoginError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login/demo", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login_demo(request: Request):
    """Accesso rapido dimostrativo / Demo quick login."""
    try:
        return _issue(session_service.login_demo())
    except LoginError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login/agent", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login_agent(request: Request, data: AgentLoginRequest, store: DomainStore = Depends(get_store)):
    """Accesso agente con nickname / Agent login with nickname."""
    try:
        return _issue(await session_service.login_agent(store, data.nickname))
    except LoginError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/magic-link", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def magic_link(request: Request, agent_ref: str | None = None, store: DomainStore = Depends(get_store)):
    """Auto-login da ?agent_ref=<nickname> / Auto-login from ?agent_ref=<nickname>."""
    try:
        return _issue(await session_service.resolve_magic_link(store, agent_ref))
    except LoginError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/logout", response_model=LogoutResponse)
async def logout(data: LogoutRequest):
    """Il token JWT viene scartato dal client / The client discards its JWT."""
    return LogoutResponse(redirect_to=session_service.logout_redirect(data.current_url))


@router.get("/me", response_model=UserSession)
async def me(session: UserSession = Depends(get_current_session)):
    return session

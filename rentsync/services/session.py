"""
Accesso agenzia / agente e magic link / Agency and agent access, magic links.

L'agente si autentica con il solo nickname (anche via ?agent_ref=...):
non e un confine di sicurezza, solo un filtro per ruolo.
Agents authenticate by nickname alone (also via ?agent_ref=...):
not a security boundary, only a role gate.
"""

import logging
from urllib.parse import urlencode, urlsplit, urlunsplit

from rentsync.config import settings
from rentsync.models.agent import AgentStatus
from rentsync.schemas.auth import UserSession
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY, ROLE_AGENT

log = logging.getLogger(__name__)

AGENCY_NAME = "Amministratore"
DEMO_NAME = "Demo User"

MSG_WRONG_PASSWORD = "Password errata."
MSG_DEMO_DISABLED = "Accesso demo disabilitato."
MSG_AGENT_NOT_FOUND = "Nickname non trovato nel database agenti."
MSG_AGENT_SUSPENDED = "Utenza sospesa o revocata. Contatta l'amministrazione."


class LoginError(Exception):
    """Accesso negato con codice HTTP e messaggio per l'utente / Access denied with HTTP code and user message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def login_agency(password: str) -> UserSession:
    if password == settings.AGENCY_PASSWORD or (settings.ALLOW_EMPTY_AGENCY_PASSWORD and password == ""):
        return UserSession(role=ROLE_AGENCY, name=AGENCY_NAME)
    raise LoginError(401, MSG_WRONG_PASSWORD)


def login_demo() -> UserSession:
    if not settings.DEMO_LOGIN_ENABLED:
        raise LoginError(403, MSG_DEMO_DISABLED)
    return UserSession(role=ROLE_AGENCY, name=DEMO_NAME)


async def login_agent(store: DomainStore, nickname: str) -> UserSession:
    """Nickname case-insensitive, solo agenti attivi / Case-insensitive nickname, active agents only."""
    agent = await store.find_agent_by_nickname(nickname)
    if agent is None:
        raise LoginError(401, MSG_AGENT_NOT_FOUND)
    if agent.status != AgentStatus.ATTIVO:
        log.info("Login refused for suspended agent %s", agent.id)
        raise LoginError(403, MSG_AGENT_SUSPENDED)
    return UserSession(role=ROLE_AGENT, user_id=agent.id, name=agent.name)


async def resolve_magic_link(store: DomainStore, agent_ref: str | None) -> UserSession:
    """Stessa verifica del login agente / Same lookup as the agent login."""
    if not agent_ref:
        raise LoginError(401, MSG_AGENT_NOT_FOUND)
    return await login_agent(store, agent_ref)


def build_magic_link(nickname: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/?{urlencode({'agent_ref': nickname})}"


def build_qr_url(link: str) -> str:
    return f"{settings.QR_SERVICE_URL}?{urlencode({'text': link, 'size': 300, 'margin': 2})}"


def logout_redirect(current_url: str) -> str:
    """URL corrente senza query string / Current URL without its query string."""
    parts = urlsplit(current_url or "/")
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", "", ""))

"""
Dipendenze di autenticazione e servizi / Authentication and service dependencies.
Iniettate nelle route via Depends().
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from rentsync.database import get_db
from rentsync.models.agent import AgentStatus
from rentsync.schemas.auth import UserSession
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENT, decode_token

security = HTTPBearer(auto_error=False)

_gateway = AIGateway()


async def get_store(db: AsyncSession = Depends(get_db)) -> DomainStore:
    return DomainStore(db)


def get_gateway() -> AIGateway:
    return _gateway


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    store: DomainStore = Depends(get_store),
) -> UserSession:
    """Estrarre e validare la sessione dal JWT / Extract and validate the session from the JWT.

    Le sessioni agente decadono se l'agente viene sospeso o eliminato.
    Agent sessions lapse when the agent is suspended or deleted.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "session":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    session = UserSession(
        role=payload["role"],
        user_id=payload["sub"] if payload["role"] == ROLE_AGENT else None,
        name=payload.get("name", ""),
    )
    if session.role == ROLE_AGENT:
        agent = await store.get_agent(session.user_id)
        if agent is None or agent.status != AgentStatus.ATTIVO:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Agent not found or inactive")
    return session


def require_role(*roles: str):
    """Factory di dipendenza che verifica il ruolo / Dependency factory that checks the role."""

    async def _check(session: UserSession = Depends(get_current_session)) -> UserSession:
        if session.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role required: {'|'.join(roles)}",
            )
        return session

    return _check

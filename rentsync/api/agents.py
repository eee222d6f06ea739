"""Route Subagenti / Sub-agent API routes."""

from fastapi import APIRouter, Depends, HTTPException, Response

from rentsync.api.deps import get_store, require_role
from rentsync.schemas.agent import AgentCreate, AgentRead, AgentReport, AgentStatusUpdate, MagicLinkRead
from rentsync.schemas.auth import UserSession
from rentsync.schemas.contract import ContractRead
from rentsync.services.session import build_magic_link, build_qr_url
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()

MSG_NICKNAME_TAKEN = "Nickname già in uso."


@router.get("/", response_model=list[AgentRead])
async def list_agents(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    return await store.list_agents()


@router.get("/{agent_id}", response_model=AgentRead)
async def get_agent(
    agent_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    agent = await store.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


@router.post("/", response_model=AgentRead, status_code=201)
async def activate_mandate(
    data: AgentCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Attivazione mandato / Mandate activation."""
    # Il nickname e la credenziale di accesso / The nickname is the login credential
    if await store.find_agent_by_nickname(data.nickname) is not None:
        raise HTTPException(status_code=409, detail=MSG_NICKNAME_TAKEN)
    return await store.add_agent(data.model_dump())


@router.put("/{agent_id}/status", response_model=AgentRead)
async def set_agent_status(
    agent_id: str,
    data: AgentStatusUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Sospendere / riattivare / Suspend or reactivate."""
    agent = await store.set_agent_status(agent_id, data.status)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


@router.delete("/{agent_id}", status_code=204)
async def delete_agent(
    agent_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    if not await store.delete_agent(agent_id):
        raise HTTPException(status_code=404, detail="Agent not found")
    return Response(status_code=204)


@router.get("/{agent_id}/report", response_model=AgentReport)
async def agent_report(
    agent_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Contratti e provvigioni maturate / Contracts and accrued commission."""
    agent = await store.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    contracts = await store.list_contracts(agent_id=agent_id)
    total_commission = await store.agent_total_commission(agent_id)
    return AgentReport(
        agent=AgentRead.model_validate(agent),
        contracts=[ContractRead.model_validate(c) for c in contracts],
        total_sales=sum(c.total_amount for c in contracts),
        total_commission=total_commission,
        share_text=f"Dati Agente: {agent.name}\nTotale Provvigioni: €{total_commission:.2f}",
    )


@router.get("/{agent_id}/magic-link", response_model=MagicLinkRead)
async def agent_magic_link(
    agent_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Link di accesso e QR stampabile / Access link and printable QR."""
    agent = await store.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    url = build_magic_link(agent.nickname)
    return MagicLinkRead(url=url, qr_url=build_qr_url(url))

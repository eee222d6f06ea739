"""Route Contratti / Contract API routes."""

from fastapi import APIRouter, Depends, HTTPException

from rentsync.api.deps import get_store, require_role
from rentsync.models.contract import PhotoKind
from rentsync.schemas.agent import AgentRead
from rentsync.schemas.auth import UserSession
from rentsync.schemas.car import CarRead
from rentsync.schemas.client import ClientRead
from rentsync.schemas.contract import ContractCreate, ContractPhotosUpdate, ContractRead
from rentsync.schemas.contract_detail import ContractDetail
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY, ROLE_AGENT

router = APIRouter()


def _check_owner(contract, session: UserSession) -> None:
    """Un agente vede solo i propri contratti / An agent sees only its own contracts."""
    if session.role == ROLE_AGENT and contract.agent_id != session.user_id:
        raise HTTPException(status_code=403, detail="Contract belongs to another agent")


@router.get("/", response_model=list[ContractRead])
async def list_contracts(
    agent_id: str | None = None,
    client_id: str | None = None,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY, ROLE_AGENT)),
):
    if session.role == ROLE_AGENT:
        agent_id = session.user_id
    return await store.list_contracts(agent_id=agent_id, client_id=client_id)


@router.get("/{contract_id}", response_model=ContractDetail)
async def get_contract(
    contract_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY, ROLE_AGENT)),
):
    """Contratto con auto, cliente e agente (None se eliminati).

    Contract with car, client and agent (None when deleted).
    """
    detail = await store.contract_detail(contract_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    _check_owner(detail["contract"], session)
    return ContractDetail(
        contract=ContractRead.model_validate(detail["contract"]),
        car=CarRead.model_validate(detail["car"]) if detail["car"] else None,
        client=ClientRead.model_validate(detail["client"]) if detail["client"] else None,
        agent=AgentRead.model_validate(detail["agent"]) if detail["agent"] else None,
    )


@router.post("/", response_model=ContractRead, status_code=201)
async def create_contract(
    data: ContractCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Nuovo contratto: provvigione calcolata, auto noleggiata.

    New contract: commission computed, car marked as rented.
    """
    if await store.get_client(data.client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    if await store.get_car(data.car_id) is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return await store.create_contract(data.model_dump())


@router.put("/{contract_id}/photos/{kind}", response_model=ContractRead)
async def update_photos(
    contract_id: str,
    kind: PhotoKind,
    data: ContractPhotosUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY, ROLE_AGENT)),
):
    """Sostituisce le foto check-in o check-out / Replace check-in or check-out photos."""
    contract = await store.get_contract(contract_id)
    if contract is None:
        raise HTTPException(status_code=404, detail="Contract not found")
    _check_owner(contract, session)
    return await store.update_contract_photos(contract_id, kind, data.photos)

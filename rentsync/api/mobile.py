"""
Route app mobile agenti / Agent mobile app routes.
Stessi dati della dashboard, filtrati sull'agente collegato.
Same data as the dashboard, scoped to the signed-in agent.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.models.car import CarStatus
from rentsync.models.client import ClientStatus, ClientType
from rentsync.rate_limit import limiter
from rentsync.schemas.agent import AgentRead
from rentsync.schemas.ai import AIRecommendation, RecommendationRequest
from rentsync.schemas.auth import UserSession
from rentsync.schemas.car import CarRead
from rentsync.schemas.client import ClientRead
from rentsync.schemas.contract import ContractRead
from rentsync.schemas.mobile import MobileClientCreate, MobileContractCreate, MobileProfile
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.quote_service import QuoteService
from rentsync.services.session import build_magic_link, build_qr_url
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENT

router = APIRouter()

MSG_PROFILE_INCOMPLETE = "Inserisci almeno professione e reddito."


@router.get("/me", response_model=MobileProfile)
async def mobile_me(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    """Profilo, guadagni e magic link dell'agente / Agent profile, earnings and magic link."""
    agent = await store.get_agent(session.user_id)
    link = build_magic_link(agent.nickname)
    return MobileProfile(
        agent=AgentRead.model_validate(agent),
        total_commission=await store.agent_total_commission(agent.id),
        magic_link=link,
        qr_url=build_qr_url(link),
    )


@router.get("/fleet", response_model=list[CarRead])
async def mobile_fleet(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    return await store.list_cars(status=CarStatus.AVAILABLE)


@router.get("/clients", response_model=list[ClientRead])
async def mobile_clients(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    return await store.list_clients()


@router.post("/clients", response_model=ClientRead, status_code=201)
async def mobile_add_client(
    data: MobileClientCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    """Nuovo cliente privato, sincronizzato con la dashboard / New private client, shared with the dashboard."""
    return await store.add_client({
        **data.model_dump(),
        "type": ClientType.PRIVATO,
        "status": ClientStatus.ATTIVO,
        "subagent_id": session.user_id,
    })


@router.get("/contracts", response_model=list[ContractRead])
async def mobile_contracts(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    contracts = await store.list_contracts(agent_id=session.user_id)
    return sorted(contracts, key=lambda c: c.signed_date, reverse=True)


@router.post("/contracts", response_model=ContractRead, status_code=201)
async def mobile_create_contract(
    data: MobileContractCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    """Contratto firmato dall'agente; la provvigione segue la sua aliquota.

    Contract signed by the agent; commission follows the agent's rate.
    """
    if await store.get_client(data.client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    car = await store.get_car(data.car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    try:
        total = QuoteService.rental_total(car.price_per_day, data.start_date, data.end_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid dates (expected YYYY-MM-DD)")

    return await store.create_contract({
        "agent_id": session.user_id,
        "client_id": data.client_id,
        "car_id": car.id,
        "start_date": data.start_date,
        "end_date": data.end_date,
        "total_amount": total,
    })


@router.post("/recommendations", response_model=list[AIRecommendation])
@limiter.limit(settings.RATE_LIMIT_AI)
async def mobile_recommendations(
    request: Request,
    data: RecommendationRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENT)),
):
    """Consulente AI sul campo / AI advisor in the field."""
    if not data.profile.job or not data.profile.annual_income:
        raise HTTPException(status_code=400, detail=MSG_PROFILE_INCOMPLETE)
    return await gateway.recommend_car(await store.list_cars(), data.profile)

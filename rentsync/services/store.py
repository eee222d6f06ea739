"""
Store di dominio / Domain store.
Unica fonte di verita per flotta, clienti, agenti, contratti e lead della sessione.
Single source of truth for fleet, clients, agents, contracts and leads of the session.

Gli id assenti non sollevano eccezioni: update/delete restituiscono None/False.
Absent ids never raise: update/delete return None/False.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import delete as sa_delete
from sqlalchemy import exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentsync.config import settings
from rentsync.models.agent import Agent, AgentStatus
from rentsync.models.car import STATUS_CYCLE, Car, CarCategory, CarStatus
from rentsync.models.client import Client, ClientStatus
from rentsync.models.company import COMPANY_PROFILE_ID, CompanyProfile
from rentsync.models.contract import DIRECT_OFFICE, Contract, ContractStatus, PhotoKind
from rentsync.models.lead import LeadSource, LeadStatus, MarketingLead
from rentsync.utils.ids import new_id

log = logging.getLogger(__name__)

CASCADE = "cascade"
ORPHAN = "orphan"
DELETE_POLICIES = {CASCADE, ORPHAN}

DEFAULT_PAYMENT_TERMS = "30gg d.f."


def _check_policy(policy: str) -> str:
    if policy not in DELETE_POLICIES:
        raise ValueError(f"Unknown delete policy: {policy!r} (allowed: {sorted(DELETE_POLICIES)})")
    return policy


class DomainStore:
    """Operazioni CRUD e derivate sullo stato / CRUD and derived operations on the state."""

    def __init__(
        self,
        db: AsyncSession,
        client_delete_policy: str | None = None,
        car_delete_policy: str | None = None,
        agent_delete_policy: str | None = None,
    ):
        self.db = db
        self.client_delete_policy = _check_policy(client_delete_policy or settings.CLIENT_DELETE_POLICY)
        self.car_delete_policy = _check_policy(car_delete_policy or settings.CAR_DELETE_POLICY)
        self.agent_delete_policy = _check_policy(agent_delete_policy or settings.AGENT_DELETE_POLICY)

    # ------------------------------------------------------------------
    # Flotta / Fleet
    # ------------------------------------------------------------------

    async def list_cars(
        self, status: CarStatus | None = None, category: CarCategory | None = None
    ) -> list[Car]:
        query = select(Car)
        if status is not None:
            query = query.where(Car.status == status)
        if category is not None:
            query = query.where(Car.category == category)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_car(self, car_id: str) -> Car | None:
        return await self.db.get(Car, car_id)

    async def add_car(self, data: dict[str, Any]) -> Car:
        """Aggiungere un'auto senza deduplica / Append a car, no dedup."""
        data = dict(data)
        data.setdefault("status", CarStatus.AVAILABLE)
        data["features"] = list(data.get("features") or [])
        data["accessories"] = list(data.get("accessories") or [])
        duplicate = await self.db.execute(select(Car.id).where(Car.plate == data["plate"]).limit(1))
        if duplicate.scalar_one_or_none() is not None:
            log.warning("Duplicate plate %s added to the fleet", data["plate"])
        car = Car(id=data.pop("id", None) or new_id(), **data)
        self.db.add(car)
        await self.db.flush()
        return car

    async def update_car(self, car_id: str, data: dict[str, Any]) -> Car | None:
        car = await self.db.get(Car, car_id)
        if car is None:
            return None
        for key, value in data.items():
            setattr(car, key, value)
        await self.db.flush()
        return car

    async def update_car_status(self, car_id: str, status: CarStatus) -> Car | None:
        """Sovrascrittura diretta dello stato / Direct status overwrite."""
        car = await self.db.get(Car, car_id)
        if car is None:
            return None
        car.status = CarStatus(status)
        await self.db.flush()
        return car

    async def cycle_car_status(self, car_id: str) -> Car | None:
        """Disponibile -> Noleggiata -> Manutenzione -> Disponibile."""
        car = await self.db.get(Car, car_id)
        if car is None:
            return None
        current = STATUS_CYCLE.index(CarStatus(car.status))
        return await self.update_car_status(car_id, STATUS_CYCLE[(current + 1) % len(STATUS_CYCLE)])

    async def delete_car(self, car_id: str) -> bool:
        car = await self.db.get(Car, car_id)
        if car is None:
            return False
        if self.car_delete_policy == CASCADE:
            await self.db.execute(sa_delete(Contract).where(Contract.car_id == car_id))
        await self.db.delete(car)
        await self.db.flush()
        return True

    # ------------------------------------------------------------------
    # Clienti / Clients
    # ------------------------------------------------------------------

    async def list_clients(self, search: str | None = None, only_active: bool = False) -> list[Client]:
        """Ricerca su nome/email, opzionalmente solo clienti con contratto attivo.

        Search on name/email, optionally only clients with an active contract.
        """
        query = select(Client)
        if search:
            term = f"%{search.lower()}%"
            query = query.where(or_(func.lower(Client.name).like(term), func.lower(Client.email).like(term)))
        if only_active:
            query = query.where(
                exists().where(Contract.client_id == Client.id, Contract.status == ContractStatus.ATTIVO)
            )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_client(self, client_id: str) -> Client | None:
        return await self.db.get(Client, client_id)

    async def add_client(self, data: dict[str, Any]) -> Client:
        data = dict(data)
        if data.get("risk_score") is None:
            data["risk_score"] = settings.DEFAULT_RISK_SCORE
        data.setdefault("status", ClientStatus.ATTIVO)
        data["documents"] = list(data.get("documents") or [])
        data["rental_history"] = list(data.get("rental_history") or [])
        client = Client(id=data.pop("id", None) or new_id(), **data)
        self.db.add(client)
        await self.db.flush()
        return client

    async def update_client(self, client_id: str, data: dict[str, Any]) -> Client | None:
        client = await self.db.get(Client, client_id)
        if client is None:
            return None
        for key, value in data.items():
            setattr(client, key, value)
        await self.db.flush()
        return client

    async def update_client_risk(self, client_id: str, risk_score: int) -> Client | None:
        """Scrive il punteggio AI sul cliente (0-100) / Store the AI score on the client (0-100)."""
        return await self.update_client(client_id, {"risk_score": max(0, min(100, int(risk_score)))})

    async def add_client_document(self, client_id: str, document: dict[str, Any]) -> Client | None:
        client = await self.db.get(Client, client_id)
        if client is None:
            return None
        client.documents = [*(client.documents or []), document]
        await self.db.flush()
        return client

    async def delete_client(self, client_id: str) -> bool:
        """Elimina il cliente; in cascata i suoi contratti / Delete client; cascade to its contracts."""
        client = await self.db.get(Client, client_id)
        if client is None:
            return False
        if self.client_delete_policy == CASCADE:
            await self.db.execute(sa_delete(Contract).where(Contract.client_id == client_id))
        await self.db.delete(client)
        await self.db.flush()
        return True

    # ------------------------------------------------------------------
    # Agenti / Agents
    # ------------------------------------------------------------------

    async def list_agents(self) -> list[Agent]:
        result = await self.db.execute(select(Agent))
        return list(result.scalars().all())

    async def get_agent(self, agent_id: str) -> Agent | None:
        return await self.db.get(Agent, agent_id)

    async def find_agent_by_nickname(self, nickname: str) -> Agent | None:
        """Ricerca case-insensitive / Case-insensitive lookup."""
        needle = (nickname or "").strip().lower()
        if not needle:
            return None
        result = await self.db.execute(select(Agent).where(func.lower(Agent.nickname) == needle).limit(1))
        return result.scalars().first()

    async def add_agent(self, data: dict[str, Any]) -> Agent:
        """Attivazione mandato / Mandate activation."""
        data = dict(data)
        data["nickname"] = data["nickname"].lower().strip()
        if not data.get("commission_rate"):
            data["commission_rate"] = settings.DEFAULT_COMMISSION_RATE
        data.setdefault("status", AgentStatus.ATTIVO)
        data["mandate_start"] = data.get("mandate_start") or date.today().isoformat()
        billing = dict(data.get("billing") or {})
        data["billing"] = {
            "iban": billing.get("iban") or "",
            "bank_name": billing.get("bank_name") or "",
            "vat_number": billing.get("vat_number") or "",
            "billing_address": billing.get("billing_address") or "",
            "payment_terms": billing.get("payment_terms") or DEFAULT_PAYMENT_TERMS,
        }
        agent = Agent(id=data.pop("id", None) or new_id(), **data)
        self.db.add(agent)
        await self.db.flush()
        return agent

    async def set_agent_status(self, agent_id: str, status: AgentStatus) -> Agent | None:
        """Sospendere / riattivare il mandato / Suspend or reactivate the mandate."""
        agent = await self.db.get(Agent, agent_id)
        if agent is None:
            return None
        agent.status = AgentStatus(status)
        await self.db.flush()
        return agent

    async def delete_agent(self, agent_id: str) -> bool:
        agent = await self.db.get(Agent, agent_id)
        if agent is None:
            return False
        if self.agent_delete_policy == CASCADE:
            await self.db.execute(sa_delete(Contract).where(Contract.agent_id == agent_id))
        await self.db.delete(agent)
        await self.db.flush()
        return True

    # ------------------------------------------------------------------
    # Contratti / Contracts
    # ------------------------------------------------------------------

    async def list_contracts(self, agent_id: str | None = None, client_id: str | None = None) -> list[Contract]:
        query = select(Contract)
        if agent_id is not None:
            query = query.where(Contract.agent_id == agent_id)
        if client_id is not None:
            query = query.where(Contract.client_id == client_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_contract(self, contract_id: str) -> Contract | None:
        return await self.db.get(Contract, contract_id)

    async def create_contract(self, data: dict[str, Any]) -> Contract:
        """Crea il contratto, calcola la provvigione e segna l'auto come noleggiata.

        Create the contract, compute the commission and mark the car as rented.
        """
        data = dict(data)
        agent_id = data.get("agent_id") or DIRECT_OFFICE
        total = float(data.get("total_amount") or 0.0)

        agent = await self.db.get(Agent, agent_id)
        commission = total * agent.commission_rate / 100 if agent is not None else 0.0

        contract = Contract(
            id=data.get("id") or new_id("CNT"),
            agent_id=agent_id,
            client_id=data["client_id"],
            car_id=data["car_id"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            total_amount=total,
            commission_amount=commission,
            status=data.get("status") or ContractStatus.ATTIVO,
            signed_date=data.get("signed_date") or datetime.now(timezone.utc).isoformat(timespec="seconds"),
            check_in_photos=[],
            check_out_photos=[],
            notes=data.get("notes"),
        )
        self.db.add(contract)

        car = await self.db.get(Car, contract.car_id)
        if car is not None:
            car.status = CarStatus.RENTED
        else:
            log.warning("Contract %s references unknown car %s", contract.id, contract.car_id)

        await self.db.flush()
        return contract

    async def update_contract_photos(self, contract_id: str, kind: PhotoKind, photos: list[str]) -> Contract | None:
        contract = await self.db.get(Contract, contract_id)
        if contract is None:
            return None
        if PhotoKind(kind) == PhotoKind.CHECK_IN:
            contract.check_in_photos = list(photos)
        else:
            contract.check_out_photos = list(photos)
        await self.db.flush()
        return contract

    async def agent_total_commission(self, agent_id: str) -> float:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Contract.commission_amount), 0.0)).where(Contract.agent_id == agent_id)
        )
        return float(result.scalar() or 0.0)

    async def contract_detail(self, contract_id: str) -> dict[str, Any] | None:
        """Contratto con riferimenti risolti (None se pendenti) / Contract with resolved refs (None if dangling)."""
        contract = await self.db.get(Contract, contract_id)
        if contract is None:
            return None
        return {
            "contract": contract,
            "car": await self.db.get(Car, contract.car_id),
            "client": await self.db.get(Client, contract.client_id),
            "agent": await self.db.get(Agent, contract.agent_id),
        }

    # ------------------------------------------------------------------
    # Lead marketing / Marketing leads
    # ------------------------------------------------------------------

    async def list_leads(self) -> list[MarketingLead]:
        result = await self.db.execute(select(MarketingLead))
        return list(result.scalars().all())

    async def get_lead(self, lead_id: str) -> MarketingLead | None:
        return await self.db.get(MarketingLead, lead_id)

    async def add_lead(self, data: dict[str, Any]) -> MarketingLead:
        data = dict(data)
        data.setdefault("status", LeadStatus.NEW)
        data.setdefault("source", LeadSource.MANUAL)
        lead = MarketingLead(id=data.pop("id", None) or new_id(), **data)
        self.db.add(lead)
        await self.db.flush()
        return lead

    async def add_leads(self, items: list[dict[str, Any]]) -> list[MarketingLead]:
        return [await self.add_lead(item) for item in items]

    async def delete_lead(self, lead_id: str) -> bool:
        lead = await self.db.get(MarketingLead, lead_id)
        if lead is None:
            return False
        await self.db.delete(lead)
        await self.db.flush()
        return True

    # ------------------------------------------------------------------
    # Profilo aziendale / Company profile
    # ------------------------------------------------------------------

    async def get_company_profile(self) -> CompanyProfile:
        profile = await self.db.get(CompanyProfile, COMPANY_PROFILE_ID)
        if profile is None:
            profile = CompanyProfile(id=COMPANY_PROFILE_ID, social={}, bank_info={})
            self.db.add(profile)
            await self.db.flush()
        return profile

    async def update_company_profile(self, data: dict[str, Any]) -> CompanyProfile:
        """Sostituzione completa del profilo / Wholesale profile replacement.

        La password della centrale rischi, se omessa, resta quella salvata.
        The credit-bureau password, when omitted, keeps its stored value.
        """
        profile = await self.get_company_profile()
        data = dict(data)
        bureau = data.get("credit_bureau")
        if bureau is not None and not bureau.get("password") and profile.credit_bureau:
            bureau = {**bureau, "password": profile.credit_bureau.get("password")}
            data["credit_bureau"] = bureau
        for key, value in data.items():
            setattr(profile, key, value)
        await self.db.flush()
        return profile

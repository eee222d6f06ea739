"""Route Clienti / Client API routes."""

import base64
import logging
from datetime import datetime, timezone
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.models.client import ClientType
from rentsync.models.contract import DIRECT_OFFICE
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import RiskAnalysisRequest, RiskAnalysisResult
from rentsync.schemas.auth import UserSession
from rentsync.schemas.client import ClientCreate, ClientRead, ClientUpdate, RentalRequest
from rentsync.schemas.contract import ContractRead
from rentsync.services.ai_gateway import AIGateway, AIServiceError
from rentsync.services.quote_service import QuoteService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY
from rentsync.utils.ids import new_id

router = APIRouter()
log = logging.getLogger(__name__)

MSG_VAT_REQUIRED = "La Partita IVA è obbligatoria per le aziende."
MAX_DOCUMENT_SIZE = 5 * 1024 * 1024
_DOCUMENT_TYPES = {"pdf", "doc", "docx", "txt", "jpg", "png"}


@router.get("/", response_model=list[ClientRead])
async def list_clients(
    search: str | None = None,
    only_active: bool = False,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Ricerca clienti / Search clients."""
    return await store.list_clients(search=search, only_active=only_active)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    client = await store.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.post("/", response_model=ClientRead, status_code=201)
async def create_client(
    data: ClientCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    if data.type == ClientType.AZIENDA and not data.vat_number:
        raise HTTPException(status_code=400, detail=MSG_VAT_REQUIRED)
    return await store.add_client(data.model_dump())


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    client = await store.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    changes = data.model_dump(exclude_unset=True)
    # Regola P.IVA sul cliente risultante / VAT rule on the resulting client
    merged_type = changes.get("type", client.type)
    merged_vat = changes.get("vat_number", client.vat_number)
    if merged_type == ClientType.AZIENDA and not merged_vat:
        raise HTTPException(status_code=400, detail=MSG_VAT_REQUIRED)
    return await store.update_client(client_id, changes)


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Elimina il cliente e, in cascata, i suoi contratti / Delete client, cascading to its contracts."""
    if not await store.delete_client(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return Response(status_code=204)


@router.get("/{client_id}/contracts", response_model=list[ContractRead])
async def client_contracts(
    client_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Storico contratti, dal piu recente / Contract history, newest first."""
    if await store.get_client(client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    contracts = await store.list_contracts(client_id=client_id)
    return sorted(contracts, key=lambda c: c.signed_date, reverse=True)


@router.post("/{client_id}/rentals", response_model=ContractRead, status_code=201)
async def create_rental(
    client_id: str,
    data: RentalRequest,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Noleggio diretto in sede (nessuna provvigione) / Direct office rental (no commission)."""
    if await store.get_client(client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    car = await store.get_car(data.car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    try:
        total = QuoteService.rental_total(car.price_per_day, data.start_date, data.end_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid dates (expected YYYY-MM-DD)")

    return await store.create_contract({
        "agent_id": DIRECT_OFFICE,
        "client_id": client_id,
        "car_id": car.id,
        "start_date": data.start_date,
        "end_date": data.end_date,
        "total_amount": total,
    })


@router.post("/{client_id}/risk-analysis", response_model=RiskAnalysisResult)
@limiter.limit(settings.RATE_LIMIT_AI)
async def risk_analysis(
    request: Request,
    client_id: str,
    data: RiskAnalysisRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Analisi rischio AI; il punteggio viene salvato sul cliente.

    AI risk analysis; the score is written back to the client.
    """
    client = await store.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")

    summary = ClientRead.model_validate(client).model_dump(
        mode="json", exclude={"documents", "rental_history"}
    )
    try:
        result = await gateway.analyze_risk(summary, data.financial_notes)
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=f"Analisi rischio non disponibile: {e}")

    await store.update_client_risk(client_id, result.risk_score)
    return result


@router.post("/{client_id}/documents", response_model=ClientRead)
async def upload_document(
    client_id: str,
    file: UploadFile = File(...),
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Documento salvato come data URL sul cliente / Document stored on the client as a data URL."""
    if await store.get_client(client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    content = await file.read()
    if len(content) > MAX_DOCUMENT_SIZE:
        raise HTTPException(status_code=413, detail="File too large (max 5 MB)")

    name = file.filename or "documento"
    extension = PurePath(name).suffix.lstrip(".").lower()
    media_type = file.content_type or "application/octet-stream"
    document = {
        "id": new_id("DOC"),
        "name": name,
        "type": extension if extension in _DOCUMENT_TYPES else "other",
        "upload_date": datetime.now(timezone.utc).date().isoformat(),
        "url": f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}",
        "status": "In Revisione",
    }
    log.info("Document %s attached to client %s", document["id"], client_id)
    return await store.add_client_document(client_id, document)

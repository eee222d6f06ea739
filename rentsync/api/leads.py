"""Route Lead marketing / Marketing lead API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.models.lead import LeadSource
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import LeadSearchResult, TextResponse
from rentsync.schemas.auth import UserSession
from rentsync.schemas.lead import (
    LeadCreate,
    LeadImportRequest,
    LeadImportResult,
    LeadRead,
    LeadSearchImport,
    LeadSearchRequest,
    MarketingCopyRequest,
)
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.lead_import import ImportService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()


@router.get("/", response_model=list[LeadRead])
async def list_leads(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    return await store.list_leads()


@router.post("/", response_model=LeadRead, status_code=201)
async def create_lead(
    data: LeadCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    dump = data.model_dump()
    dump["company"] = dump["company"] or dump["name"]
    return await store.add_lead(dump)


@router.post("/import", response_model=LeadImportResult)
async def import_leads(
    data: LeadImportRequest,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Import da testo incollato, una riga per lead / Import from pasted text, one line per lead."""
    leads = await store.add_leads(ImportService.parse_lead_lines(data.text))
    return LeadImportResult(imported=len(leads), leads=[LeadRead.model_validate(lead) for lead in leads])


@router.post("/search", response_model=LeadSearchResult)
@limiter.limit(settings.RATE_LIMIT_AI)
async def search_leads(
    request: Request,
    data: LeadSearchRequest,
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Ricerca lead con Google Search o simulazione / Lead search with Google Search or simulation.

    Gli errori (QUOTA_EXCEEDED, PERMISSION_DENIED) arrivano nel campo error.
    Errors (QUOTA_EXCEEDED, PERMISSION_DENIED) come back in the error field.
    """
    return await gateway.find_leads(data.target, data.location, simulate=data.simulate)


@router.post("/search/import", response_model=LeadRead, status_code=201)
async def import_found_lead(
    data: LeadSearchImport,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Salvare un lead trovato dalla ricerca / Save a lead found by the search."""
    found = data.lead
    if not found.name:
        raise HTTPException(status_code=400, detail="Lead name is required")
    return await store.add_lead({
        "name": found.name,
        "company": found.company or found.name,
        "interest": found.interest or "",
        "location": found.location,
        "email": found.email,
        "phone": found.phone,
        "source": LeadSource.MANUAL if data.simulated else LeadSource.AI_SEARCH,
    })


@router.delete("/{lead_id}", status_code=204)
async def delete_lead(
    lead_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    if not await store.delete_lead(lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")
    return Response(status_code=204)


@router.post("/{lead_id}/marketing-copy", response_model=TextResponse)
@limiter.limit(settings.RATE_LIMIT_AI)
async def marketing_copy(
    request: Request,
    lead_id: str,
    data: MarketingCopyRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Email commerciale AI con le auto proposte / AI sales email with the offered cars."""
    lead = await store.get_lead(lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    offers = [car for car in [await store.get_car(car_id) for car_id in data.car_ids] if car is not None]
    company = await store.get_company_profile()
    text = await gateway.generate_marketing_copy(lead.name, lead.interest, data.tone, offers, company)
    return TextResponse(text=text)

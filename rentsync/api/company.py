"""Route Profilo aziendale / Company profile API routes."""

from fastapi import APIRouter, Depends, Request

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import TextResponse
from rentsync.schemas.auth import UserSession
from rentsync.schemas.company import CompanyProfileRead, CompanyProfileUpdate
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()


@router.get("/", response_model=CompanyProfileRead)
async def get_company(
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    return await store.get_company_profile()


@router.put("/", response_model=CompanyProfileRead)
async def update_company(
    data: CompanyProfileUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Sostituzione completa del profilo / Wholesale profile replacement.

    Senza credit_bureau le credenziali salvate restano invariate.
    Without credit_bureau the stored credentials are left untouched.
    """
    dump = data.model_dump()
    if "credit_bureau" not in data.model_fields_set:
        dump.pop("credit_bureau")
    return await store.update_company_profile(dump)


@router.post("/bio", response_model=TextResponse)
@limiter.limit(settings.RATE_LIMIT_AI)
async def generate_bio(
    request: Request,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Bio aziendale AI (non salvata) / AI company bio (not saved)."""
    profile = await store.get_company_profile()
    return TextResponse(text=await gateway.generate_company_bio(profile))

"""Route Preventivi / Quote API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.models.car import CarStatus
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import AIRecommendation, RecommendationRequest, TextResponse
from rentsync.schemas.auth import UserSession
from rentsync.schemas.quote import QuoteDescriptionRequest, QuotePreview, QuotePreviewRequest
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.quote_service import QuoteService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()


@router.post("/preview", response_model=QuotePreview)
async def preview_quote(
    data: QuotePreviewRequest,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Giorni, sconto, IVA e totale / Days, discount, VAT and total."""
    car = await store.get_car(data.car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    try:
        figures = QuoteService.preview(
            car.price_per_day,
            data.start_date,
            data.end_date,
            dynamic_discount=data.dynamic_discount,
            manual_discount=data.manual_discount,
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid dates (expected YYYY-MM-DD)")
    return QuotePreview(car_id=car.id, **figures)


@router.post("/description", response_model=TextResponse)
@limiter.limit(settings.RATE_LIMIT_AI)
async def quote_description(
    request: Request,
    data: QuoteDescriptionRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Nota di accompagnamento AI / AI cover note."""
    car = await store.get_car(data.car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    text = await gateway.generate_quote_details(f"{car.brand} {car.model}", data.days, data.client_type.value)
    return TextResponse(text=text)


@router.post("/recommendations", response_model=list[AIRecommendation])
@limiter.limit(settings.RATE_LIMIT_AI)
async def recommend_cars(
    request: Request,
    data: RecommendationRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Consulente AI sulle sole auto disponibili / AI advisor over available cars only."""
    fleet = await store.list_cars(status=CarStatus.AVAILABLE)
    return await gateway.recommend_car(fleet, data.profile)

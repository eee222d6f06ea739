"""Route Flotta / Fleet API routes."""

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.models.car import CarCategory, CarStatus
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import CarDetailsRequest, CarDetailsSuggestion
from rentsync.schemas.auth import UserSession
from rentsync.schemas.car import CarCreate, CarImportReport, CarRead, CarStatusUpdate, CarUpdate
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.lead_import import ImportService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()

MAX_IMPORT_SIZE = 5 * 1024 * 1024


@router.get("/", response_model=list[CarRead])
async def list_cars(
    status: CarStatus | None = None,
    category: CarCategory | None = None,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Lista flotta / List the fleet."""
    return await store.list_cars(status=status, category=category)


@router.post("/ai-details", response_model=CarDetailsSuggestion)
@limiter.limit(settings.RATE_LIMIT_AI)
async def ai_car_details(
    request: Request,
    data: CarDetailsRequest,
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Pre-compilazione AI della scheda / AI prefill of the car form."""
    return await gateway.generate_car_details(data.brand, data.model, data.year)


@router.post("/import", response_model=CarImportReport)
async def import_price_list(
    file: UploadFile = File(...),
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Import listino CSV/XLSX / CSV/XLSX price-list import."""
    content = await file.read()
    if len(content) > MAX_IMPORT_SIZE:
        raise HTTPException(status_code=413, detail="File too large (max 5 MB)")
    try:
        rows = ImportService.parse_price_list(file.filename or "", content)
    except (UnicodeDecodeError, ValueError, KeyError) as e:
        raise HTTPException(status_code=400, detail=f"Unreadable file: {e}")

    cars, errors = ImportService.cars_from_rows(rows)
    created = [await store.add_car(car.model_dump()) for car in cars]
    return CarImportReport(created=[CarRead.model_validate(car) for car in created], errors=errors)


@router.get("/{car_id}", response_model=CarRead)
async def get_car(
    car_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    car = await store.get_car(car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.post("/", response_model=CarRead, status_code=201)
async def create_car(
    data: CarCreate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Aggiungere un'auto / Add a car."""
    return await store.add_car(data.model_dump())


@router.put("/{car_id}", response_model=CarRead)
async def update_car(
    car_id: str,
    data: CarUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    car = await store.update_car(car_id, data.model_dump(exclude_unset=True))
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.put("/{car_id}/status", response_model=CarRead)
async def update_car_status(
    car_id: str,
    data: CarStatusUpdate,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    car = await store.update_car_status(car_id, data.status)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.post("/{car_id}/cycle-status", response_model=CarRead)
async def cycle_car_status(
    car_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Stato successivo nel ciclo / Next status in the cycle."""
    car = await store.cycle_car_status(car_id)
    if car is None:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.delete("/{car_id}", status_code=204)
async def delete_car(
    car_id: str,
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    if not await store.delete_car(car_id):
        raise HTTPException(status_code=404, detail="Car not found")
    return Response(status_code=204)

"""Route Dashboard / Dashboard API routes."""

from fastapi import APIRouter, Depends, Request

from rentsync.api.deps import get_gateway, get_store, require_role
from rentsync.config import settings
from rentsync.rate_limit import limiter
from rentsync.schemas.ai import StrategicStats
from rentsync.schemas.auth import UserSession
from rentsync.schemas.dashboard import DashboardStats, Period, StrategicReport, StrategicReportRequest
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.kpi_service import KpiService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()


async def _dashboard(store: DomainStore, period: str) -> dict:
    return KpiService.dashboard(
        fleet=await store.list_cars(),
        contracts=await store.list_contracts(),
        agents=await store.list_agents(),
        period=period,
    )


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    period: Period = "30d",
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Fatturato, occupazione e classifiche del periodo / Period revenue, occupancy and rankings."""
    return await _dashboard(store, period)


@router.post("/report", response_model=StrategicReport)
@limiter.limit(settings.RATE_LIMIT_AI)
async def strategic_report(
    request: Request,
    data: StrategicReportRequest,
    store: DomainStore = Depends(get_store),
    gateway: AIGateway = Depends(get_gateway),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Report strategico AI in Markdown / AI strategic report in Markdown."""
    stats = StrategicStats(**KpiService.strategic_stats(await _dashboard(store, data.period)))
    report = await gateway.generate_strategic_report(stats)
    return StrategicReport(period_label=stats.period, report=report)

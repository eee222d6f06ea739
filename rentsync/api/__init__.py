"""Route API / API routes."""

from fastapi import APIRouter

from rentsync.api import (
    auth,
    cars,
    clients,
    agents,
    contracts,
    leads,
    company,
    quotes,
    dashboard,
    mobile,
    exports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(agents.router, prefix="/agents", tags=["agents"])
api_router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(company.router, prefix="/company", tags=["company"])
api_router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(mobile.router, prefix="/mobile", tags=["mobile"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])

"""Route Export CSV/Excel / Export API routes."""

import io

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from rentsync.api.deps import get_store, require_role
from rentsync.schemas.auth import UserSession
from rentsync.services.export_service import ENTITY_FIELDS, ExportService
from rentsync.services.store import DomainStore
from rentsync.utils.auth import ROLE_AGENCY

router = APIRouter()

# Entita -> lettura dallo store / Entity -> store reader
ENTITY_READERS = {
    "cars": DomainStore.list_cars,
    "clients": DomainStore.list_clients,
    "agents": DomainStore.list_agents,
    "contracts": DomainStore.list_contracts,
    "leads": DomainStore.list_leads,
}


@router.get("/{entity_type}")
async def export_data(
    entity_type: str,
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    store: DomainStore = Depends(get_store),
    session: UserSession = Depends(require_role(ROLE_AGENCY)),
):
    """Esportare i dati di un'entita / Export entity data to CSV or XLSX."""
    if entity_type not in ENTITY_READERS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid entity type. Allowed: {list(ENTITY_READERS.keys())}",
        )

    fields = ENTITY_FIELDS[entity_type]
    objects = await ENTITY_READERS[entity_type](store)
    rows = [ExportService.model_to_dict(obj, fields) for obj in objects]

    if format == "csv":
        content = ExportService.to_csv(rows, fields)
        media_type = "text/csv; charset=utf-8"
        filename = f"{entity_type}.csv"
    else:
        content = ExportService.to_xlsx(rows, fields, sheet_name=entity_type.capitalize())
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename = f"{entity_type}.xlsx"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

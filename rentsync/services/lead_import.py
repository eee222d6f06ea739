"""
Import lead e listini / Lead and price-list import.
Trasforma testo, CSV o Excel in dizionari pronti per lo store.
Turns text, CSV or Excel into dicts ready for the store.
"""

import csv
import io
import logging
from typing import Any

from openpyxl import load_workbook
from pydantic import ValidationError

from rentsync.models.lead import LeadSource, LeadStatus
from rentsync.schemas.car import CarCreate

log = logging.getLogger(__name__)

IMPORTED_INTEREST = "Importato"

# Intestazioni italiane accettate / Accepted Italian headers
_CAR_COLUMN_ALIASES = {
    "marca": "brand",
    "modello": "model",
    "targa": "plate",
    "categoria": "category",
    "prezzo": "price_per_day",
    "prezzo_giornaliero": "price_per_day",
    "prezzo_al_giorno": "price_per_day",
    "anno": "year",
    "km": "mileage",
    "chilometraggio": "mileage",
    "alimentazione": "fuel_type",
    "carburante": "fuel_type",
    "cambio": "transmission",
    "descrizione": "description",
    "condizione": "condition",
}


def _clean_header(header: Any, index: int) -> str:
    if not header:
        return f"col_{index}"
    key = str(header).strip().lower().replace(" ", "_")
    return _CAR_COLUMN_ALIASES.get(key, key)


class ImportService:
    """Import di dati da testo e file / Data import from text and files."""

    @staticmethod
    def parse_lead_lines(text: str) -> list[dict[str, Any]]:
        """Una riga "Nome, Azienda, Interesse, Localita" per lead.

        One "Name, Company, Interest, Location" line per lead; short rows get fallbacks.
        """
        leads = []
        for line in (text or "").splitlines():
            if not line.strip():
                continue
            parts = [p.strip() for p in line.split(",")]
            parts += [""] * (4 - len(parts))
            name, company, interest, location = parts[:4]
            if not name:
                continue
            leads.append({
                "name": name,
                "company": company or name,
                "interest": interest or IMPORTED_INTEREST,
                "location": location,
                "status": LeadStatus.NEW,
                "source": LeadSource.EXTERNAL,
            })
        return leads

    @staticmethod
    def parse_csv(content: bytes) -> list[dict[str, Any]]:
        """Parser CSV (';' poi ',') / Parse CSV (';' then ',')."""
        text = content.decode("utf-8-sig")  # BOM-safe
        rows = list(csv.DictReader(io.StringIO(text), delimiter=";"))
        if not rows or len(rows[0]) <= 1:
            rows = list(csv.DictReader(io.StringIO(text), delimiter=","))
        return [
            {_clean_header(k, i): v for i, (k, v) in enumerate(row.items())}
            for row in rows
        ]

    @staticmethod
    def parse_excel(content: bytes) -> list[dict[str, Any]]:
        """Parser Excel (prima riga = intestazioni) / Parse Excel (first row = headers)."""
        wb = load_workbook(filename=io.BytesIO(content), read_only=True)
        ws = wb.active
        if ws is None:
            wb.close()
            return []

        rows_iter = ws.iter_rows(values_only=True)
        headers = next(rows_iter, None)
        if not headers:
            wb.close()
            return []
        clean_headers = [_clean_header(h, i) for i, h in enumerate(headers)]

        result = []
        for row in rows_iter:
            record = dict(zip(clean_headers, row))
            if any(v is not None for v in record.values()):
                result.append(record)
        wb.close()
        return result

    @staticmethod
    def parse_price_list(filename: str, content: bytes) -> list[dict[str, Any]]:
        if (filename or "").lower().endswith((".xlsx", ".xlsm")):
            return ImportService.parse_excel(content)
        return ImportService.parse_csv(content)

    @staticmethod
    def cars_from_rows(rows: list[dict[str, Any]]) -> tuple[list[CarCreate], list[dict[str, Any]]]:
        """Righe -> auto valide + errori per riga (riga 2 = prima riga dati).

        Rows -> valid cars + per-row errors (row 2 = first data row).
        """
        cars: list[CarCreate] = []
        errors: list[dict[str, Any]] = []
        for row_num, row in enumerate(rows, start=2):
            data = {k: v for k, v in row.items() if v not in (None, "")}
            try:
                cars.append(CarCreate.model_validate(data))
            except ValidationError as e:
                first = e.errors()[0]
                field = ".".join(str(p) for p in first["loc"])
                errors.append({"row": row_num, "error": f"{field}: {first['msg']}"})
        if errors:
            log.info("Price list import: %d rows rejected", len(errors))
        return cars, errors

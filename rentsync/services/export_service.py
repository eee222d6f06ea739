"""
Export CSV/Excel / CSV/Excel export.
Genera file CSV e XLSX da liste di dizionari.
"""

import csv
import enum
import io
import json
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

ENTITY_FIELDS: dict[str, list[str]] = {
    "cars": [
        "id", "brand", "model", "plate", "category", "year", "mileage", "fuel_type",
        "transmission", "price_per_day", "status", "is_promo",
    ],
    "clients": ["id", "name", "email", "phone", "type", "vat_number", "fiscal_code", "risk_score", "status"],
    "agents": ["id", "name", "nickname", "region", "mandate_start", "commission_rate", "status"],
    "contracts": [
        "id", "agent_id", "client_id", "car_id", "start_date", "end_date",
        "total_amount", "commission_amount", "status", "signed_date",
    ],
    "leads": ["id", "name", "company", "interest", "status", "source", "location", "email", "phone"],
}


class ExportService:
    """Export dati verso CSV/XLSX / Data export to CSV/XLSX."""

    @staticmethod
    def model_to_dict(obj: Any, fields: list[str]) -> dict[str, Any]:
        """Attributi di un modello SQLAlchemy / SQLAlchemy model attributes to dict."""
        result = {}
        for f in fields:
            val = getattr(obj, f, None)
            if isinstance(val, enum.Enum):
                val = val.value
            elif val is True:
                val = "true"
            elif val is False:
                val = "false"
            elif isinstance(val, (list, dict)):
                val = json.dumps(val, ensure_ascii=False)
            result[f] = val
        return result

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """CSV UTF-8 BOM con separatore ';' / UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=fields, delimiter=";", extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({f: row.get(f, "") for f in fields})
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Data") -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        bold = Font(bold=True)
        for col_idx, field in enumerate(fields, 1):
            ws.cell(row=1, column=col_idx, value=field).font = bold

        for row_idx, row in enumerate(rows, 2):
            for col_idx, field in enumerate(fields, 1):
                ws.cell(row=row_idx, column=col_idx, value=row.get(field))

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()

"""Test dei servizi / Service tests."""

import io
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from openpyxl import Workbook, load_workbook

from rentsync.models import CarStatus, LeadSource, LeadStatus
from rentsync.services.export_service import ExportService
from rentsync.services.kpi_service import KpiService
from rentsync.services.lead_import import IMPORTED_INTEREST, ImportService
from rentsync.services.quote_service import QuoteService
from rentsync.services.session import build_magic_link, build_qr_url, logout_redirect


# --- Import lead / Lead import ----------------------------------------------

def test_parse_lead_lines_full_row():
    leads = ImportService.parse_lead_lines("Edil Rossi, Rossi Srl, Furgoni, Milano")
    assert leads == [{
        "name": "Edil Rossi",
        "company": "Rossi Srl",
        "interest": "Furgoni",
        "location": "Milano",
        "status": LeadStatus.NEW,
        "source": LeadSource.EXTERNAL,
    }]


def test_parse_lead_lines_short_rows_and_blanks():
    leads = ImportService.parse_lead_lines("Studio Bianchi\n\n   \nDa Luigi, , Furgone Frigo\n")
    assert len(leads) == 2
    assert leads[0]["company"] == "Studio Bianchi"
    assert leads[0]["interest"] == IMPORTED_INTEREST
    assert leads[0]["location"] == ""
    assert leads[1]["company"] == "Da Luigi"
    assert leads[1]["interest"] == "Furgone Frigo"


# --- Import listino / Price-list import -------------------------------------

def test_price_list_csv_with_italian_headers():
    content = (
        "Marca;Modello;Targa;Categoria;Prezzo;Anno;Alimentazione;Cambio\n"
        "Fiat;Panda;AB-123-CD;Economy;35;2022;Benzina;Manuale\n"
        "Audi;Q5;;SUV;110;2023;Diesel;Automatico\n"
    ).encode("utf-8-sig")
    rows = ImportService.parse_price_list("listino.csv", content)
    cars, errors = ImportService.cars_from_rows(rows)
    assert [c.plate for c in cars] == ["AB-123-CD"]
    assert cars[0].price_per_day == 35
    assert errors[0]["row"] == 3
    assert "plate" in errors[0]["error"]


def test_price_list_xlsx():
    wb = Workbook()
    ws = wb.active
    ws.append(["brand", "model", "plate", "category", "price_per_day", "year", "fuel_type", "transmission"])
    ws.append(["Tesla", "Model Y", "TT-001-EV", "Luxury", 140, 2024, "Elettrico", "Automatico"])
    buf = io.BytesIO()
    wb.save(buf)

    cars, errors = ImportService.cars_from_rows(ImportService.parse_price_list("listino.xlsx", buf.getvalue()))
    assert errors == []
    assert cars[0].brand == "Tesla"
    assert cars[0].fuel_type.value == "Elettrico"


# --- Preventivi / Quotes ----------------------------------------------------

def test_rental_days():
    assert QuoteService.rental_days("2025-03-01", "2025-03-08") == 7
    assert QuoteService.rental_days("2025-03-01", "2025-03-01") == 1
    assert QuoteService.rental_days("2025-03-08", "2025-03-01") == 1
    assert QuoteService.rental_days(None, "2025-03-01") == 1


def test_dynamic_discount_tiers():
    assert QuoteService.dynamic_discount_rate(6) == 0
    assert QuoteService.dynamic_discount_rate(7) == 0.10
    assert QuoteService.dynamic_discount_rate(14) == 0.15
    assert QuoteService.dynamic_discount_rate(30) == 0.25


def test_quote_preview_dynamic():
    quote = QuoteService.preview(45.0, "2025-03-01", "2025-03-15", dynamic_discount=True)
    assert quote["days"] == 14
    assert quote["base_total"] == 630.0
    assert quote["discount"] == 95.0  # 94.5 arrotondato / rounded
    assert quote["final_total"] == 535.0
    assert quote["vat"] == 117.7
    assert quote["grand_total"] == 652.7


def test_quote_preview_manual_discount_never_negative():
    quote = QuoteService.preview(50.0, None, None, manual_discount=80)
    assert quote["final_total"] == 0
    assert quote["grand_total"] == 0


def test_rental_total():
    assert QuoteService.rental_total(80.0, "2025-03-01", "2025-03-04") == 240.0


# --- KPI ----------------------------------------------------------------------

def _contract(car_id, agent_id, total, days_ago, now):
    signed = (now - timedelta(days=days_ago)).isoformat()
    return SimpleNamespace(car_id=car_id, agent_id=agent_id, total_amount=total, signed_date=signed)


def test_dashboard_metrics():
    now = datetime(2025, 6, 30, tzinfo=timezone.utc)
    fleet = [
        SimpleNamespace(id="1", brand="BMW", model="X5", status=CarStatus.RENTED),
        SimpleNamespace(id="2", brand="Fiat", model="500e", status=CarStatus.AVAILABLE),
        SimpleNamespace(id="3", brand="Jeep", model="Renegade", status=CarStatus.AVAILABLE),
    ]
    agents = [SimpleNamespace(id="a1", name="Alessandro Verdi"), SimpleNamespace(id="a2", name="Marco Neri")]
    contracts = [
        _contract("1", "a1", 1000, 2, now),
        _contract("1", "a2", 3000, 10, now),
        _contract("2", "a1", 500, 20, now),
        _contract("3", "a1", 9999, 60, now),  # fuori dai 30 giorni / outside 30 days
    ]

    stats = KpiService.dashboard(fleet, contracts, agents, "30d", now=now)
    assert stats["period_label"] == "Ultimi 30 Giorni"
    assert stats["revenue"] == 4500
    assert stats["signed_contracts"] == 3
    assert stats["occupancy_rate"] == 33
    assert [c["car_id"] for c in stats["top_cars"]] == ["1", "2"]
    assert stats["unused_cars"] == ["Jeep Renegade"]
    assert [a["agent_id"] for a in stats["top_agents"]] == ["a2", "a1"]

    yearly = KpiService.dashboard(fleet, contracts, agents, "year", now=now)
    assert yearly["signed_contracts"] == 4
    assert yearly["unused_cars"] == []


def test_strategic_stats():
    now = datetime(2025, 6, 30, tzinfo=timezone.utc)
    fleet = [SimpleNamespace(id="1", brand="BMW", model="X5", status=CarStatus.RENTED)]
    agents = [SimpleNamespace(id="a1", name="Alessandro Verdi")]
    stats = KpiService.strategic_stats(
        KpiService.dashboard(fleet, [_contract("1", "a1", 1200, 5, now)], agents, "90d", now=now)
    )
    assert stats["period"] == "Ultimo Trimestre"
    assert stats["top_cars"] == ["BMW X5 (1 noleggi)"]
    assert stats["top_agents"] == ["Alessandro Verdi (€1200)"]


def test_occupancy_empty_fleet():
    assert KpiService.occupancy_rate([]) == 0


# --- Export -------------------------------------------------------------------

def test_export_csv_bom_and_enum_values():
    lead = SimpleNamespace(id="1", name="Da Luigi", status=LeadStatus.CONTACTED)
    row = ExportService.model_to_dict(lead, ["id", "name", "status"])
    content = ExportService.to_csv([row], ["id", "name", "status"])
    assert content.startswith("\ufeff".encode("utf-8"))
    assert "1;Da Luigi;Contacted" in content.decode("utf-8-sig")


def test_export_xlsx_bold_headers():
    content = ExportService.to_xlsx([{"id": "1", "name": "BMW"}], ["id", "name"], sheet_name="Cars")
    ws = load_workbook(io.BytesIO(content)).active
    assert ws.title == "Cars"
    assert ws["A1"].font.bold
    assert ws["B2"].value == "BMW"


# --- Magic link -----------------------------------------------------------------

def test_magic_link_and_qr():
    link = build_magic_link("ale_verdi")
    assert link.endswith("/?agent_ref=ale_verdi")
    qr = build_qr_url(link)
    assert "size=300" in qr and "margin=2" in qr
    assert "agent_ref%3Dale_verdi" in qr


def test_logout_strips_query():
    assert logout_redirect("http://localhost:5173/?agent_ref=demo") == "http://localhost:5173/"
    assert logout_redirect("/mobile?x=1#top") == "/mobile"

"""Test delle route API / API route tests."""

import io
import json

import pytest
from openpyxl import load_workbook

from rentsync.api.clients import MSG_VAT_REQUIRED
from rentsync.api.mobile import MSG_PROFILE_INCOMPLETE

NEW_CAR = {
    "brand": "Toyota",
    "model": "Yaris",
    "plate": "GH-123-YY",
    "category": "Economy",
    "price_per_day": 40,
    "year": 2024,
    "fuel_type": "Ibrido",
    "transmission": "Automatico",
}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


# --- Flotta / Fleet -----------------------------------------------------------

@pytest.mark.asyncio
async def test_car_crud_and_cycle(client, agency_headers):
    response = await client.post("/api/cars/", json=NEW_CAR, headers=agency_headers)
    assert response.status_code == 201
    car = response.json()
    assert car["status"] == "Disponibile"
    assert car["features"] == []

    response = await client.put(f"/api/cars/{car['id']}", json={"price_per_day": 42.5}, headers=agency_headers)
    assert response.json()["price_per_day"] == 42.5
    assert response.json()["brand"] == "Toyota"

    response = await client.post(f"/api/cars/{car['id']}/cycle-status", headers=agency_headers)
    assert response.json()["status"] == "Noleggiata"

    response = await client.put(f"/api/cars/{car['id']}/status", json={"status": "Disponibile"},
                                headers=agency_headers)
    assert response.json()["status"] == "Disponibile"

    assert (await client.delete(f"/api/cars/{car['id']}", headers=agency_headers)).status_code == 204
    assert (await client.get(f"/api/cars/{car['id']}", headers=agency_headers)).status_code == 404


@pytest.mark.asyncio
async def test_car_update_rejects_null_on_required_fields(seeded, client, agency_headers):
    response = await client.put("/api/cars/1", json={"status": None}, headers=agency_headers)
    assert response.status_code == 422
    assert (await client.get("/api/cars/1", headers=agency_headers)).json()["status"] == "Disponibile"

    response = await client.put("/api/cars/1", json={"description": None}, headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["description"] is None

@pytest.mark.asyncio
async def test_car_filters(seeded, client, agency_headers):
    response = await client.get("/api/cars/", params={"status": "Disponibile"}, headers=agency_headers)
    assert sorted(c["id"] for c in response.json()) == ["1", "4"]
    response = await client.get("/api/cars/", params={"category": "SUV"}, headers=agency_headers)
    assert sorted(c["id"] for c in response.json()) == ["1", "5"]


@pytest.mark.asyncio
async def test_unknown_car_is_404(client, agency_headers):
    assert (await client.put("/api/cars/ghost", json={"brand": "X"}, headers=agency_headers)).status_code == 404
    assert (await client.post("/api/cars/ghost/cycle-status", headers=agency_headers)).status_code == 404
    assert (await client.delete("/api/cars/ghost", headers=agency_headers)).status_code == 404


@pytest.mark.asyncio
async def test_price_list_import(client, agency_headers):
    content = (
        "marca;modello;targa;categoria;prezzo;anno;alimentazione;cambio\n"
        "Fiat;Panda;AB-123-CD;Economy;35;2022;Benzina;Manuale\n"
        "Fiat;Tipo;;Economy;abc;2022;Benzina;Manuale\n"
    ).encode("utf-8")
    response = await client.post(
        "/api/cars/import",
        files={"file": ("listino.csv", content, "text/csv")},
        headers=agency_headers,
    )
    assert response.status_code == 200
    report = response.json()
    assert [c["plate"] for c in report["created"]] == ["AB-123-CD"]
    assert report["errors"][0]["row"] == 3


@pytest.mark.asyncio
async def test_ai_car_details(client, agency_headers, fake_genai):
    fake_genai.reply(json.dumps({"category": "SUV", "features": ["4x4"], "pricePerDay": 95}))
    response = await client.post("/api/cars/ai-details", json={"brand": "Jeep", "model": "Compass"},
                                 headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["category"] == "SUV"
    assert response.json()["price_per_day"] == 95


# --- Clienti / Clients ----------------------------------------------------------

@pytest.mark.asyncio
async def test_company_client_requires_vat(client, agency_headers):
    response = await client.post("/api/clients/", json={"name": "Nuova Srl", "type": "Azienda"},
                                 headers=agency_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == MSG_VAT_REQUIRED

    response = await client.post("/api/clients/", json={"name": "Nuova Srl", "type": "Azienda",
                                                        "vat_number": "IT01234567890"}, headers=agency_headers)
    assert response.status_code == 201
    assert response.json()["risk_score"] == 50


@pytest.mark.asyncio
async def test_client_update_rejects_null_and_enforces_vat(seeded, client, agency_headers):
    response = await client.put("/api/clients/1", json={"risk_score": None}, headers=agency_headers)
    assert response.status_code == 422

    response = await client.put("/api/clients/1", json={"type": "Azienda"}, headers=agency_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == MSG_VAT_REQUIRED
    assert (await client.get("/api/clients/1", headers=agency_headers)).json()["type"] == "Privato"

    response = await client.put("/api/clients/2", json={"vat_number": None}, headers=agency_headers)
    assert response.status_code == 400

    response = await client.put("/api/clients/1", json={"type": "Azienda", "vat_number": "IT09876543210"},
                                headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["type"] == "Azienda"

@pytest.mark.asyncio
async def test_direct_rental(seeded, client, agency_headers):
    response = await client.post(
        "/api/clients/1/rentals",
        json={"car_id": "4", "start_date": "2025-03-01", "end_date": "2025-03-08"},
        headers=agency_headers,
    )
    assert response.status_code == 201
    contract = response.json()
    assert contract["agent_id"] == "DIRECT_OFFICE"
    assert contract["total_amount"] == 910
    assert contract["commission_amount"] == 0

    car = (await client.get("/api/cars/4", headers=agency_headers)).json()
    assert car["status"] == "Noleggiata"

    history = (await client.get("/api/clients/1/contracts", headers=agency_headers)).json()
    assert [c["id"] for c in history] == [contract["id"]]


@pytest.mark.asyncio
async def test_direct_rental_bad_dates(seeded, client, agency_headers):
    response = await client.post(
        "/api/clients/1/rentals",
        json={"car_id": "4", "start_date": "01/03/2025", "end_date": "2025-03-08"},
        headers=agency_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_risk_analysis_writes_score(seeded, client, agency_headers, fake_genai):
    fake_genai.reply(json.dumps({
        "riskScore": 30, "riskLevel": "Alto", "maxCreditLimit": 1000,
        "reasoning": "Reddito instabile", "recommendation": "Richiedere garanzie",
    }))
    response = await client.post("/api/clients/1/risk-analysis", json={"financial_notes": "Partita IVA recente"},
                                 headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["risk_level"] == "Alto"
    assert (await client.get("/api/clients/1", headers=agency_headers)).json()["risk_score"] == 30


@pytest.mark.asyncio
async def test_risk_analysis_failure_is_502(seeded, client, agency_headers, fake_genai):
    fake_genai.fail(RuntimeError("unavailable"))
    response = await client.post("/api/clients/1/risk-analysis", json={}, headers=agency_headers)
    assert response.status_code == 502
    assert (await client.get("/api/clients/1", headers=agency_headers)).json()["risk_score"] == 85


@pytest.mark.asyncio
async def test_client_document_upload(seeded, client, agency_headers):
    response = await client.post(
        "/api/clients/2/documents",
        files={"file": ("visura.pdf", b"%PDF-1.4", "application/pdf")},
        headers=agency_headers,
    )
    assert response.status_code == 200
    document = response.json()["documents"][0]
    assert document["id"].startswith("DOC-")
    assert document["type"] == "pdf"
    assert document["url"].startswith("data:application/pdf;base64,")


@pytest.mark.asyncio
async def test_delete_client_cascades(seeded, client, agency_headers):
    await client.post("/api/clients/2/rentals", json={"car_id": "1", "start_date": "2025-03-01",
                                                      "end_date": "2025-03-02"}, headers=agency_headers)
    assert (await client.delete("/api/clients/2", headers=agency_headers)).status_code == 204
    contracts = (await client.get("/api/contracts/", headers=agency_headers)).json()
    assert all(c["client_id"] != "2" for c in contracts)


# --- Agenti e contratti / Agents and contracts --------------------------------

@pytest.mark.asyncio
async def test_activate_mandate_and_duplicate_nickname(seeded, client, agency_headers):
    response = await client.post("/api/agents/", json={"name": "Luca Blu", "nickname": "Luca_B",
                                                       "region": "Veneto"}, headers=agency_headers)
    assert response.status_code == 201
    assert response.json()["nickname"] == "luca_b"
    assert response.json()["commission_rate"] == 10

    response = await client.post("/api/agents/", json={"name": "Altro", "nickname": "LUCA_B",
                                                       "region": "Veneto"}, headers=agency_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_agent_report_and_magic_link(seeded, client, agency_headers):
    await client.post("/api/contracts/", json={
        "agent_id": "1", "client_id": "1", "car_id": "1",
        "start_date": "2025-03-01", "end_date": "2025-03-11", "total_amount": 1200,
    }, headers=agency_headers)

    report = (await client.get("/api/agents/1/report", headers=agency_headers)).json()
    assert report["total_sales"] == 1200
    assert report["total_commission"] == 180
    assert "€180.00" in report["share_text"]

    link = (await client.get("/api/agents/1/magic-link", headers=agency_headers)).json()
    assert link["url"].endswith("?agent_ref=ale_verdi")
    assert link["qr_url"].startswith("https://quickchart.io/qr?")


@pytest.mark.asyncio
async def test_contract_detail_after_car_delete(seeded, client, agency_headers):
    contract = (await client.post("/api/contracts/", json={
        "client_id": "1", "car_id": "4", "start_date": "2025-03-01", "end_date": "2025-03-03",
        "total_amount": 260,
    }, headers=agency_headers)).json()
    await client.delete("/api/cars/4", headers=agency_headers)

    detail = (await client.get(f"/api/contracts/{contract['id']}", headers=agency_headers)).json()
    assert detail["car"] is None
    assert detail["client"]["name"] == "Mario Rossi"
    assert detail["agent"] is None


@pytest.mark.asyncio
async def test_contract_requires_known_client(seeded, client, agency_headers):
    response = await client.post("/api/contracts/", json={
        "client_id": "ghost", "car_id": "1", "start_date": "2025-03-01", "end_date": "2025-03-03",
        "total_amount": 10,
    }, headers=agency_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_contract_photos_owner_check(seeded, client, agency_headers, agent_headers):
    contract = (await client.post("/api/contracts/", json={
        "agent_id": "1", "client_id": "1", "car_id": "1", "start_date": "2025-03-01",
        "end_date": "2025-03-03", "total_amount": 240,
    }, headers=agency_headers)).json()
    url = f"/api/contracts/{contract['id']}/photos/checkIn"

    assert (await client.put(url, json={"photos": ["a.jpg"]}, headers=agent_headers)).status_code == 403
    response = await client.put(url, json={"photos": ["a.jpg", "b.jpg"]}, headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["check_in_photos"] == ["a.jpg", "b.jpg"]
    assert response.json()["check_out_photos"] == []


# --- Lead / Leads -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_lead_import(client, agency_headers):
    response = await client.post("/api/leads/import", json={
        "text": "Edil Rossi, Rossi Srl, Furgoni, Milano\n\nStudio Verdi",
    }, headers=agency_headers)
    assert response.status_code == 200
    result = response.json()
    assert result["imported"] == 2
    assert result["leads"][1]["company"] == "Studio Verdi"
    assert all(lead["source"] == "External" for lead in result["leads"])


@pytest.mark.asyncio
async def test_simulated_lead_search_and_import(client, agency_headers, fake_genai):
    response = await client.post("/api/leads/search", json={
        "target": "ristoranti", "location": "Torino", "simulate": True,
    }, headers=agency_headers)
    assert response.status_code == 200
    found = response.json()["leads"]
    assert len(found) == 3
    assert fake_genai.models.calls == []

    response = await client.post("/api/leads/search/import", json={"lead": found[0], "simulated": True},
                                 headers=agency_headers)
    assert response.status_code == 201
    assert response.json()["source"] == "Manual"
    assert response.json()["company"] == found[0]["name"]


@pytest.mark.asyncio
async def test_lead_search_quota_error(client, agency_headers, fake_genai):
    fake_genai.fail(RuntimeError("429 RESOURCE_EXHAUSTED"))
    response = await client.post("/api/leads/search", json={"target": "hotel", "location": "Roma"},
                                 headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["error"] == "QUOTA_EXCEEDED"
    assert response.json()["leads"] == []


@pytest.mark.asyncio
async def test_marketing_copy(seeded, client, agency_headers, fake_genai):
    fake_genai.reply("Gentile Studio Legale Bianchi, ...")
    response = await client.post("/api/leads/1/marketing-copy", json={"car_ids": ["1", "ghost"]},
                                 headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["text"].startswith("Gentile")
    assert "BMW X5" in fake_genai.models.calls[0]["contents"]


# --- Profilo, preventivi, dashboard / Profile, quotes, dashboard ------------------

@pytest.mark.asyncio
async def test_company_credentials_masked(seeded, client, agency_headers):
    profile = (await client.get("/api/company/", headers=agency_headers)).json()
    assert profile["name"] == "RentSync AI"
    assert profile["credit_bureau"] is None

    profile["credit_bureau"] = {"username": "crif_user", "password": "s3cret", "circuit": "S"}
    response = await client.put("/api/company/", json=profile, headers=agency_headers)
    assert response.status_code == 200
    bureau = response.json()["credit_bureau"]
    assert bureau == {"username": "crif_user", "circuit": "S", "has_password": True, "has_certificate": False}
    assert "s3cret" not in response.text


@pytest.mark.asyncio
async def test_quote_preview(seeded, client, agency_headers):
    response = await client.post("/api/quotes/preview", json={
        "car_id": "2", "start_date": "2025-03-01", "end_date": "2025-03-15", "dynamic_discount": True,
    }, headers=agency_headers)
    assert response.status_code == 200
    quote = response.json()
    assert quote["days"] == 14
    assert quote["discount"] == 95
    assert quote["grand_total"] == 652.7


@pytest.mark.asyncio
async def test_quote_recommendations_only_available(seeded, client, agency_headers, fake_genai):
    fake_genai.reply(json.dumps([
        {"carId": "2", "matchScore": 99, "reasoning": "noleggiata"},
        {"carId": "4", "matchScore": 90, "reasoning": "elettrica"},
    ]))
    response = await client.post("/api/quotes/recommendations", json={"profile": {"job": "Medico"}},
                                 headers=agency_headers)
    assert [r["car_id"] for r in response.json()] == ["4"]


@pytest.mark.asyncio
async def test_dashboard_stats(seeded, client, agency_headers):
    await client.post("/api/clients/1/rentals", json={"car_id": "1", "start_date": "2025-03-01",
                                                      "end_date": "2025-03-03"}, headers=agency_headers)
    stats = (await client.get("/api/dashboard/stats", params={"period": "30d"}, headers=agency_headers)).json()
    assert stats["revenue"] == 240
    assert stats["signed_contracts"] == 1
    assert stats["fleet_size"] == 5
    assert stats["occupancy_rate"] == 60
    assert stats["top_cars"][0]["label"] == "BMW X5"
    assert len(stats["unused_cars"]) == 4

    assert (await client.get("/api/dashboard/stats", params={"period": "7d"},
                             headers=agency_headers)).status_code == 422


@pytest.mark.asyncio
async def test_strategic_report_fallback(seeded, client, agency_headers, fake_genai):
    fake_genai.fail(RuntimeError("down"))
    response = await client.post("/api/dashboard/report", json={"period": "90d"}, headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["period_label"] == "Ultimo Trimestre"
    assert response.json()["report"]


# --- Export -----------------------------------------------------------------------

@pytest.mark.asyncio
async def test_export_csv(seeded, client, agency_headers):
    response = await client.get("/api/exports/cars", params={"format": "csv"}, headers=agency_headers)
    assert response.status_code == 200
    assert response.content.startswith("\ufeff".encode("utf-8"))
    text = response.content.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("id;brand;model;plate")
    assert "GF-992-AZ" in text


@pytest.mark.asyncio
async def test_export_xlsx_and_invalid_entity(seeded, client, agency_headers):
    response = await client.get("/api/exports/agents", headers=agency_headers)
    ws = load_workbook(io.BytesIO(response.content)).active
    assert ws.title == "Agents"
    assert ws.max_row == 4

    assert (await client.get("/api/exports/invoices", headers=agency_headers)).status_code == 400


# --- App mobile / Mobile app ---------------------------------------------------------

@pytest.mark.asyncio
async def test_mobile_profile_and_fleet(seeded, client, agent_headers):
    me = (await client.get("/api/mobile/me", headers=agent_headers)).json()
    assert me["agent"]["nickname"] == "demo"
    assert me["total_commission"] == 0
    assert me["magic_link"].endswith("?agent_ref=demo")

    fleet = (await client.get("/api/mobile/fleet", headers=agent_headers)).json()
    assert all(car["status"] == "Disponibile" for car in fleet)


@pytest.mark.asyncio
async def test_mobile_client_and_contract(seeded, client, agent_headers, agency_headers):
    new_client = (await client.post("/api/mobile/clients", json={"name": "Giulia Bianchi"},
                                    headers=agent_headers)).json()
    assert new_client["type"] == "Privato"
    assert new_client["subagent_id"] == "999"

    response = await client.post("/api/mobile/contracts", json={
        "client_id": new_client["id"], "car_id": "1", "start_date": "2025-03-01", "end_date": "2025-03-04",
    }, headers=agent_headers)
    assert response.status_code == 201
    assert response.json()["total_amount"] == 360
    assert response.json()["commission_amount"] == 72

    mine = (await client.get("/api/mobile/contracts", headers=agent_headers)).json()
    assert [c["id"] for c in mine] == [response.json()["id"]]
    all_clients = (await client.get("/api/clients/", headers=agency_headers)).json()
    assert "Giulia Bianchi" in [c["name"] for c in all_clients]


@pytest.mark.asyncio
async def test_mobile_recommendations_need_profile(seeded, client, agent_headers):
    response = await client.post("/api/mobile/recommendations", json={"profile": {"job": "Medico"}},
                                 headers=agent_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == MSG_PROFILE_INCOMPLETE

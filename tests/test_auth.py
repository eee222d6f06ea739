"""Test di autenticazione / Authentication tests."""

import pytest

from rentsync.services.session import MSG_AGENT_NOT_FOUND, MSG_AGENT_SUSPENDED, MSG_WRONG_PASSWORD
from rentsync.utils.auth import create_session_token, decode_token


@pytest.mark.asyncio
async def test_agency_login(client):
    response = await client.post("/api/auth/login/agency", json={"password": "admin123"})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["session"] == {"role": "agency", "user_id": None, "name": "Amministratore"}
    assert decode_token(data["access_token"])["role"] == "agency"


@pytest.mark.asyncio
async def test_agency_login_empty_password_allowed(client):
    response = await client.post("/api/auth/login/agency", json={})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_agency_login_wrong_password(client):
    response = await client.post("/api/auth/login/agency", json={"password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == MSG_WRONG_PASSWORD


@pytest.mark.asyncio
async def test_demo_login(client):
    response = await client.post("/api/auth/login/demo")
    assert response.status_code == 200
    assert response.json()["session"]["name"] == "Demo User"


@pytest.mark.asyncio
async def test_agent_login_case_insensitive(seeded, client):
    response = await client.post("/api/auth/login/agent", json={"nickname": "DEMO"})
    assert response.status_code == 200
    assert response.json()["session"] == {"role": "agent", "user_id": "999", "name": "Agente Demo"}


@pytest.mark.asyncio
async def test_agent_login_unknown(seeded, client):
    response = await client.post("/api/auth/login/agent", json={"nickname": "ghost"})
    assert response.status_code == 401
    assert response.json()["detail"] == MSG_AGENT_NOT_FOUND


@pytest.mark.asyncio
async def test_suspended_agent_cannot_login(seeded, client, agency_headers):
    await client.put("/api/agents/1/status", json={"status": "Sospeso"}, headers=agency_headers)
    response = await client.post("/api/auth/login/agent", json={"nickname": "ale_verdi"})
    assert response.status_code == 403
    assert response.json()["detail"] == MSG_AGENT_SUSPENDED


@pytest.mark.asyncio
async def test_suspension_revokes_open_session(seeded, client, agency_headers):
    token = create_session_token("agent", "1", "Alessandro Verdi")
    headers = {"Authorization": f"Bearer {token}"}
    assert (await client.get("/api/mobile/me", headers=headers)).status_code == 200

    await client.put("/api/agents/1/status", json={"status": "Sospeso"}, headers=agency_headers)
    assert (await client.get("/api/mobile/me", headers=headers)).status_code == 401


@pytest.mark.asyncio
async def test_magic_link(seeded, client):
    response = await client.get("/api/auth/magic-link", params={"agent_ref": "marco_n"})
    assert response.status_code == 200
    assert response.json()["session"]["user_id"] == "2"

    assert (await client.get("/api/auth/magic-link", params={"agent_ref": "nobody"})).status_code == 401
    assert (await client.get("/api/auth/magic-link")).status_code == 401


@pytest.mark.asyncio
async def test_magic_link_any_case(seeded, client):
    response = await client.get("/api/auth/magic-link", params={"agent_ref": "Demo"})
    assert response.status_code == 200
    assert response.json()["session"] == {"role": "agent", "user_id": "999", "name": "Agente Demo"}


@pytest.mark.asyncio
async def test_magic_link_suspended_agent(seeded, client, agency_headers):
    await client.put("/api/agents/2/status", json={"status": "Sospeso"}, headers=agency_headers)
    response = await client.get("/api/auth/magic-link", params={"agent_ref": "Marco_N"})
    assert response.status_code == 403
    assert response.json()["detail"] == MSG_AGENT_SUSPENDED
    assert "access_token" not in response.json()

@pytest.mark.asyncio
async def test_logout_strips_query(client):
    response = await client.post("/api/auth/logout", json={"current_url": "http://localhost:5173/?agent_ref=demo"})
    assert response.status_code == 200
    assert response.json()["redirect_to"] == "http://localhost:5173/"


@pytest.mark.asyncio
async def test_me(client, agency_headers):
    response = await client.get("/api/auth/me", headers=agency_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "agency"


@pytest.mark.asyncio
async def test_missing_or_bad_token(client):
    assert (await client.get("/api/cars/")).status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert (await client.get("/api/cars/", headers=bad)).status_code == 401


@pytest.mark.asyncio
async def test_role_separation(seeded, client, agency_headers, agent_headers):
    assert (await client.get("/api/cars/", headers=agent_headers)).status_code == 403
    assert (await client.get("/api/mobile/fleet", headers=agency_headers)).status_code == 403
    assert (await client.get("/api/contracts/", headers=agent_headers)).status_code == 200

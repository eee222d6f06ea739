"""Fixture condivise / Shared fixtures."""

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rentsync.api.deps import get_gateway
from rentsync.database import get_db, init_db, make_engine
from rentsync.main import app
from rentsync.rate_limit import limiter
from rentsync.services.ai_gateway import AIGateway
from rentsync.services.store import DomainStore
from rentsync.utils.auth import create_session_token
from rentsync.utils.seed import seed_demo_data


class FakeModels:
    """Sostituto di client.models / Stand-in for client.models."""

    def __init__(self):
        self.calls = []
        self.text = ""
        self.candidates = []
        self.error = None

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text, candidates=self.candidates)


class FakeGenAI:
    def __init__(self):
        self.models = FakeModels()

    def reply(self, text, candidates=None):
        self.models.text = text
        self.models.candidates = candidates or []
        self.models.error = None

    def fail(self, error):
        self.models.error = error


@pytest.fixture
async def engine():
    eng = make_engine("sqlite+aiosqlite://")
    await init_db(bind=eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db):
    return DomainStore(db)


@pytest.fixture
def fake_genai():
    return FakeGenAI()


@pytest.fixture
def gateway(fake_genai):
    return AIGateway(client=fake_genai, model="test-model")


@pytest.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        await seed_demo_data(session)


@pytest.fixture
async def client(session_factory, gateway):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def agency_headers():
    token = create_session_token("agency", None, "Amministratore")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def agent_headers():
    """Token per l'agente demo del seed (id 999) / Token for the seeded demo agent (id 999)."""
    token = create_session_token("agent", "999", "Agente Demo")
    return {"Authorization": f"Bearer {token}"}

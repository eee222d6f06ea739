"""
Connessione al database / Database connection.
SQLite in memoria (default), file SQLite o PostgreSQL via SQLAlchemy 2.0 async.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from rentsync.config import settings


def _engine_kwargs(url: str) -> dict:
    """Opzioni motore per URL / Engine options for a URL."""
    kwargs: dict = {"echo": False}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In memoria : una sola connessione condivisa / In-memory: one shared connection
        if url.rstrip("/").endswith(("sqlite+aiosqlite:", ":memory:")):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        })
    return kwargs


def make_engine(url: str):
    return create_async_engine(url, **_engine_kwargs(url))


engine = make_engine(settings.DATABASE_URL)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """Dipendenza FastAPI per una sessione DB / FastAPI dependency for DB session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind=None):
    """Creare le tabelle all'avvio / Create tables on startup."""
    # Registrare i modelli sul metadata / Register models on the metadata
    import rentsync.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

"""
Configuración de base de datos con SQLAlchemy 2.0 async.
Si DATABASE_URL está vacía no se crea engine: el record store
opera en modo "no configurado".
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from hubinfecto.config import get_settings

settings = get_settings()


# ── Base declarativa ─────────────────────────────────
class Base(DeclarativeBase):
    pass


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine | None:
    """Crea el engine async, o None si no hay URL configurada."""
    if not url or not url.strip():
        return None
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(
    engine: AsyncEngine | None,
) -> async_sessionmaker[AsyncSession] | None:
    if engine is None:
        return None
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Engine y session factory de la app ──────────────
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
async_session_factory = build_session_factory(engine)

"""Conexión asíncrona a la base de datos con SQLAlchemy 2.0.

PostgreSQL (asyncpg) en producción; SQLite (aiosqlite) en desarrollo y tests
cuando `DATABASE_URL` apunta a un archivo local.
"""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from edugrade.core.config import settings


def _engine_args(url: str) -> dict:
    # SQLite no admite pool_size ni max_overflow
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_async_engine(
    settings.database_url_async,
    echo=settings.debug,
    **_engine_args(settings.database_url_async),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base de los modelos: cuentas, profesores, estudiantes y sesiones."""


async def get_db():
    """Una sesión por request. Los repositorios confirman sus escrituras;
    aquí se confirma lo pendiente y se revierte ante cualquier error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Crea las tablas que falten."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Elimina todas las tablas (tests y mantenimiento)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

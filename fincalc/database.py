"""Optional PostgreSQL audit trail for served calculations.

Nothing in the calculation engine depends on this module. When persistence
is disabled (``AUDIT_ENABLED=false``) or PostgreSQL is unreachable, the API
keeps serving and ``get_session()`` yields ``None``.
"""

from __future__ import annotations
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Mapping

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fincalc.config import settings
from fincalc.models.db_models import Base, CalculationAudit

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_db_available: bool = False


async def init_db() -> None:
    """Create the engine and session factory, then the tables."""
    global _engine, _session_factory, _db_available

    if not settings.AUDIT_ENABLED:
        logger.info("Calculation audit disabled; running without persistence.")
        return

    try:
        _engine = create_async_engine(
            settings.DATABASE_URL,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
        _session_factory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        _db_available = True
        logger.info("PostgreSQL connection established successfully.")
    except Exception as exc:
        _db_available = False
        logger.warning(
            "PostgreSQL unavailable — running without persistence. Error: %s",
            exc,
        )


async def close_db() -> None:
    """Dispose of the connection pool."""
    global _engine, _db_available
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _db_available = False
        logger.info("PostgreSQL connection pool closed.")


def is_db_available() -> bool:
    return _db_available


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession | None, None]:
    """Yield an async session if the DB is available, otherwise yield None."""
    if not _db_available or _session_factory is None:
        yield None
        return

    session = _session_factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def record_calculation(
    product: str,
    inputs: Mapping[str, Any],
    summary: Mapping[str, Any],
) -> None:
    """Store one audit row; a no-op without a database."""
    async with get_session() as session:
        if session is None:
            return
        session.add(
            CalculationAudit(
                product=product,
                inputs=json.dumps(dict(inputs), default=str),
                summary=json.dumps(dict(summary), default=str),
            )
        )

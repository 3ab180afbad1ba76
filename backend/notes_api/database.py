"""
Notes API — Persistence Gateway
=================================

What:  Async SQLAlchemy engine wrapper, scoped connection acquisition, and the
       FastAPI dependency that hands the process-wide gateway to routes.
Why:   Centralizes all database connection logic in one place. Routes and
       services never touch the engine directly.
How:   PersistenceGateway owns a pooled async engine. Callers acquire a
       connection with `async with gateway.acquire() as conn:` and run one
       statement at a time through `conn.query(...)`, which returns a
       QueryResult (rows | affected_rows | insert_id).
Who:   Created once by the application lifespan (or injected by tests),
       stored on app.state, resolved per request via get_gateway().

Connection Pooling Strategy:
    pool_size=5:       Small fixed limit of simultaneous store connections
    max_overflow=0:    No burst connections by default
    pool_timeout=10s:  A request waiting longer for a free connection fails
                       with ServiceUnavailableError (→ 503)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

Transactions:
    None at the application level. Each statement is committed on its own,
    so atomicity is whatever the store gives a single statement.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql.expression import Executable

from notes_api.config import Settings, settings
from notes_api.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers tables with a shared metadata object, used by Alembic for
    migrations and by the test suite to create the schema.
    """
    pass


@dataclass
class QueryResult:
    """Outcome of a single statement."""

    rows: List[Dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    insert_id: Optional[int] = None


class GatewayConnection:
    """
    One pooled connection, valid only inside `PersistenceGateway.acquire()`.
    """

    def __init__(self, conn: AsyncConnection):
        self._conn = conn

    async def query(self, statement: Executable) -> QueryResult:
        """
        Execute one parameterized statement and commit it.

        SELECT statements return their rows as plain dicts keyed by column
        name. INSERT/UPDATE/DELETE return the affected row count, and INSERT
        also returns the store-assigned primary key.
        """
        result = await self._conn.execute(statement)

        if statement.is_select:
            rows = [dict(row) for row in result.mappings().all()]
            await self._conn.commit()
            return QueryResult(rows=rows, affected_rows=len(rows))

        insert_id: Optional[int] = None
        if statement.is_insert:
            primary_key = result.inserted_primary_key
            insert_id = primary_key[0] if primary_key else None

        affected_rows = result.rowcount
        await self._conn.commit()
        return QueryResult(affected_rows=affected_rows, insert_id=insert_id)


class PersistenceGateway:
    """
    Process-wide handle on the connection pool.

    Usage:
        async with gateway.acquire() as conn:
            result = await conn.query(select(Note))
    """

    def __init__(self, engine: AsyncEngine, pool_timeout: float = 10.0):
        self.engine = engine
        self.pool_timeout = pool_timeout

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[GatewayConnection]:
        """
        Check a connection out of the pool for the duration of the block.

        The connection goes back to the pool on every exit path, including
        exceptions raised by the statement or by the caller.

        Raises:
            ServiceUnavailableError: No connection freed up within pool_timeout.
        """
        try:
            conn = await self.engine.connect()
        except PoolTimeoutError as e:
            logger.warning(
                "Connection pool exhausted after waiting %.1fs: %s",
                self.pool_timeout,
                str(e),
            )
            raise ServiceUnavailableError(
                retry_after=max(1, int(self.pool_timeout)),
                context={"pool_timeout": self.pool_timeout},
            ) from e

        try:
            yield GatewayConnection(conn)
        finally:
            await conn.close()

    async def ping(self) -> bool:
        """Run SELECT 1 on a pooled connection. Used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection. Called at shutdown."""
        await self.engine.dispose()


def create_gateway(config: Settings = settings) -> PersistenceGateway:
    """
    Build a gateway with a pooled async engine from the given settings.

    Echoes SQL when LOG_LEVEL is DEBUG.
    """
    engine = create_async_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        echo=config.log_level == "DEBUG",
    )
    logger.info(
        "Persistence gateway created (pool_size=%d, max_overflow=%d, pool_timeout=%.1fs)",
        config.db_pool_size,
        config.db_max_overflow,
        config.db_pool_timeout,
    )
    return PersistenceGateway(engine, pool_timeout=config.db_pool_timeout)


# ── Gateway Dependency ────────────────────────────────────────────────────
def get_gateway(request: Request) -> PersistenceGateway:
    """
    FastAPI dependency returning the process-wide gateway.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(gateway: PersistenceGateway = Depends(get_gateway)):
            return await note_service.list_notes(gateway)
    """
    return request.app.state.gateway

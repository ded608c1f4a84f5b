"""Account store handle.

Owns the async engine (and with it the connection pool) for the
lifetime of the process. Created once at startup and passed explicitly
to whoever needs it; sessions are acquired per unit of work and always
returned to the pool.

Examples
--------
>>> store = AccountStore.from_url("sqlite+aiosqlite:///./sesame.db")
>>> await store.connect()
>>> async with store.session() as session:
...     repo = store.repository(session)
...     account = await repo.find_by_username("alice")
>>> await store.dispose()
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import MetaData, Table
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sesame_auth.exceptions import ErrorCode, StoreError
from sesame_auth.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)
from sesame_auth.persistence.sqlalchemy.tables import (
    DEFAULT_COLLECTION,
    build_accounts_table,
)

logger = logging.getLogger(__name__)


class AccountStore:
    """Lifecycle owner for the accounts store connection."""

    DEFAULT_OPERATION_TIMEOUT = 5.0
    DEFAULT_CONNECT_TIMEOUT = 10.0

    def __init__(
        self,
        engine: AsyncEngine,
        collection: str = DEFAULT_COLLECTION,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        self._engine = engine
        self._metadata = MetaData()
        self._table = build_accounts_table(self._metadata, collection)
        self._operation_timeout = operation_timeout
        self._connect_timeout = connect_timeout
        self._session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        url: str | URL,
        collection: str = DEFAULT_COLLECTION,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        **engine_kwargs: Any,
    ) -> "AccountStore":
        """Create a store with its own engine for the given database URL."""
        engine_kwargs.setdefault("pool_pre_ping", True)
        engine = create_async_engine(url, echo=False, **engine_kwargs)
        return cls(
            engine,
            collection=collection,
            operation_timeout=operation_timeout,
            connect_timeout=connect_timeout,
        )

    @property
    def table(self) -> Table:
        return self._table

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def connect(self) -> None:
        """Verify connectivity and create the accounts table if missing.

        Raises
        ------
        StoreError
            If the store cannot be reached within the connect timeout
        """
        logger.info("Connecting to account store (collection: %s)", self._table.name)
        try:
            await asyncio.wait_for(self._create_schema(), timeout=self._connect_timeout)
        except asyncio.TimeoutError as e:
            msg = "store connection timed out"
            raise StoreError(msg, code=ErrorCode.STORE_TIMEOUT) from e
        except (SQLAlchemyError, OSError) as e:
            msg = "could not connect to store"
            raise StoreError(msg, code=ErrorCode.STORE_UNAVAILABLE) from e
        logger.info("Account store ready")

    async def _create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(self._metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Acquire a session for one unit of work.

        The session (and its connection) is released when the block
        exits, whether it succeeds or raises.
        """
        async with self._session_maker() as session:
            yield session

    def repository(self, session: AsyncSession) -> AccountRepositorySQLAlchemy:
        """Build an account repository bound to the given session."""
        return AccountRepositorySQLAlchemy(
            session,
            self._table,
            timeout=self._operation_timeout,
        )

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self._engine.dispose()
        logger.info("Account store connections closed")

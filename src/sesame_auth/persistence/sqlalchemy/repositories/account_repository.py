"""SQLAlchemy implementation of AccountRepository.

Every store call is bounded by a timeout; timeouts and driver failures
surface as StoreError instead of hanging or aborting the process.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import UUID, uuid4

from sqlalchemy import Table, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sesame_auth.exceptions import ConflictError, ErrorCode, StoreError
from sesame_auth.persistence.sqlalchemy.tables import (
    email_constraint_name,
    username_constraint_name,
)
from sesame_auth.repositories import AccountData, AccountRecord, AccountRepository
from sesame_auth.schemas import PreparedRegistration
from sesame_auth.time import ensure_tz_aware, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    DEFAULT_TIMEOUT_SECONDS = 5.0

    def __init__(
        self,
        session: AsyncSession,
        table: Table,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize repository with a database session.

        Parameters
        ----------
        session
            SQLAlchemy async session scoped to the current request
        table
            The accounts table (see build_accounts_table)
        timeout
            Seconds each store operation may take
        """
        self._session = session
        self._table = table
        self._timeout = timeout

    async def find_by_username(self, username: str) -> AccountData | None:
        record = await self._find_one("username", username)
        return record.to_public() if record else None

    async def find_by_email(self, email: str) -> AccountData | None:
        record = await self._find_one("email", email)
        return record.to_public() if record else None

    async def find_by_id(self, account_id: UUID) -> AccountData | None:
        record = await self._find_one("id", account_id)
        return record.to_public() if record else None

    async def find_full_record_by_email(self, email: str) -> AccountRecord | None:
        return await self._find_one("email", email)

    async def create(self, registration: PreparedRegistration) -> AccountData:
        # Early exit only; the unique constraints are authoritative
        if await self.find_by_username(registration.username) is not None:
            raise ConflictError("username taken", code=ErrorCode.USERNAME_TAKEN)
        if await self.find_by_email(registration.email) is not None:
            raise ConflictError("email taken", code=ErrorCode.EMAIL_TAKEN)

        values = {
            "id": uuid4(),
            "first_name": registration.first_name,
            "last_name": registration.last_name,
            "email": registration.email,
            "username": registration.username,
            "password_hash": registration.password_hash,
            "created_at": utc_now(),
        }

        try:
            await self._bounded("insert", self._insert(values))
        except IntegrityError as e:
            await self._session.rollback()
            raise self._conflict_from(e) from e

        logger.info(
            "Created account: %s (username: %s)",
            values["id"],
            registration.username,
        )
        return AccountData(
            id=values["id"],
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            username=registration.username,
            created_at=values["created_at"],
        )

    async def _insert(self, values: dict[str, Any]) -> None:
        await self._session.execute(insert(self._table).values(**values))
        await self._session.commit()

    async def _find_one(self, column: str, value: Any) -> AccountRecord | None:
        stmt = select(self._table).where(self._table.c[column] == value)
        result = await self._bounded("find", self._session.execute(stmt))
        row = result.mappings().one_or_none()

        if row is None:
            return None

        return self._map_to_record(row)

    async def _bounded(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Await a store call under the operation timeout."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Store %s timed out after %.1fs", operation, self._timeout)
            msg = f"store {operation} timed out"
            raise StoreError(msg, code=ErrorCode.STORE_TIMEOUT) from e
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error("Store %s failed: %s", operation, e)
            msg = f"store {operation} failed"
            raise StoreError(msg, code=ErrorCode.STORE_UNAVAILABLE) from e

    def _conflict_from(self, error: IntegrityError) -> ConflictError:
        # Only the first line names the violated constraint; PostgreSQL's
        # DETAIL line echoes the offending value.
        lines = str(error.orig).lower().splitlines()
        headline = lines[0] if lines else ""
        if self._violates(headline, "username", username_constraint_name):
            return ConflictError("username taken", code=ErrorCode.USERNAME_TAKEN)
        if self._violates(headline, "email", email_constraint_name):
            return ConflictError("email taken", code=ErrorCode.EMAIL_TAKEN)
        return ConflictError("account already exists")

    def _violates(
        self,
        headline: str,
        column: str,
        constraint_name: Callable[[str], str],
    ) -> bool:
        """Check a driver message against one of this table's constraints.

        PostgreSQL quotes the constraint name; SQLite reports
        ``<table>.<column>``.
        """
        table = self._table.name.lower()
        return (
            f'"{constraint_name(self._table.name).lower()}"' in headline
            or f"{table}.{column}" in headline
        )

    def _map_to_record(self, row: Any) -> AccountRecord:
        return AccountRecord(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            username=row["username"],
            created_at=ensure_tz_aware(row["created_at"]),
            password_hash=row["password_hash"],
        )

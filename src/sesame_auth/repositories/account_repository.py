"""Abstract repository interface for accounts.

This interface defines the contract for account persistence.
Implementations can use SQLAlchemy or any other storage that offers
atomic single-record inserts and lookups by username and email.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sesame_auth.schemas import PreparedRegistration


@dataclass(frozen=True)
class AccountData:
    """Public view of an account. Never carries the password hash."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    username: str
    created_at: datetime


@dataclass(frozen=True)
class AccountRecord(AccountData):
    """Full account record including the password hash.

    Only the authentication flow reads this; it must not cross the
    session service boundary.
    """

    password_hash: str

    def to_public(self) -> AccountData:
        return AccountData(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            username=self.username,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"AccountRecord(id={self.id}, username={self.username!r})"


class AccountRepository(ABC):
    """
    Abstract repository interface for accounts.

    Implementations must bound every store call by a timeout and raise
    StoreError on timeouts or driver failures.
    """

    @abstractmethod
    async def find_by_username(self, username: str) -> AccountData | None:
        """
        Find an account by username.

        Returns
        -------
        Account data if found, None otherwise
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> AccountData | None:
        """
        Find an account by email.

        Returns
        -------
        Account data if found, None otherwise
        """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> AccountData | None:
        """Find an account by its identifier."""

    @abstractmethod
    async def find_full_record_by_email(self, email: str) -> AccountRecord | None:
        """
        Find an account by email, including its password hash.

        Returns
        -------
        Full account record if found, None otherwise
        """

    @abstractmethod
    async def create(self, registration: PreparedRegistration) -> AccountData:
        """
        Persist a new account.

        Parameters
        ----------
        registration
            Validated registration with hashed passwords

        Returns
        -------
        The created account with its freshly generated identifier

        Raises
        ------
        ConflictError
            If the username or email is already registered
        StoreError
            If the store fails or times out
        """

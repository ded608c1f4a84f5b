"""Auth schemas and data structures.

These are simple data classes used for transferring registration,
credential and token data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


@dataclass(frozen=True)
class RegisterInput:
    """Registration request as received from the caller.

    Holds plaintext passwords; it must never reach the store. The
    credential validator turns it into a PreparedRegistration.
    """

    first_name: str
    last_name: str
    email: str
    username: str
    password: str
    confirm_password: str

    def __repr__(self) -> str:
        return (
            f"RegisterInput(username={self.username!r}, email={self.email!r}, "
            "password=***, confirm_password=***)"
        )


@dataclass(frozen=True)
class PreparedRegistration:
    """Validated, normalized registration with both passwords hashed.

    The two hashes are salted independently and therefore differ even
    though the plaintexts matched.
    """

    first_name: str
    last_name: str
    email: str
    username: str
    password_hash: str
    confirm_password_hash: str


@dataclass(frozen=True)
class Credentials:
    """Email and plaintext password for a single authenticate call."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password=***)"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded and verified token payload.

    Attributes
    ----------
    subject_id
        The unique identifier of the account
    username
        The account's username
    expires_at
        Token expiration timestamp
    issued_at
        Token issue timestamp, if present
    """

    subject_id: UUID
    username: str
    expires_at: datetime
    issued_at: datetime | None = None


@dataclass(frozen=True)
class SessionToken:
    """A signed token handed to the caller, plus its expiry."""

    jwt: str
    expires_at: datetime
    token_type: str = "bearer"


class RefreshPolicy(str, Enum):
    """How much a refresh trusts the presented token."""

    # A valid signature is proof of continued identity
    STATELESS = "stateless"
    # The subject must still exist in the store
    VERIFY_SUBJECT = "verify_subject"

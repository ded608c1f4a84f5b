"""SQLAlchemy table definition for the accounts collection.

The table name is configurable (the "collection" setting), so the
table is built per store instance instead of being a fixed
declarative model.
"""

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    Uuid,
)

from sesame_auth.services.credential_validator import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
)
from sesame_auth.time import utc_now

DEFAULT_COLLECTION = "accounts"


def username_constraint_name(collection: str) -> str:
    return f"uq_{collection}_username"


def email_constraint_name(collection: str) -> str:
    return f"uq_{collection}_email"


def build_accounts_table(
    metadata: MetaData,
    collection: str = DEFAULT_COLLECTION,
) -> Table:
    """Define the accounts table on the given metadata.

    Username and email carry unique constraints; they are the
    authoritative guard against duplicate registrations.
    """
    return Table(
        collection,
        metadata,
        Column("id", Uuid, primary_key=True),
        Column("first_name", String(NAME_MAX_LENGTH), nullable=False),
        Column("last_name", String(NAME_MAX_LENGTH), nullable=False),
        Column("email", String(EMAIL_MAX_LENGTH), nullable=False, index=True),
        Column("username", String(USERNAME_MAX_LENGTH), nullable=False, index=True),
        # bcrypt hash (~60 chars), never plaintext
        Column("password_hash", String(255), nullable=False),
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
        ),
        UniqueConstraint("username", name=username_constraint_name(collection)),
        UniqueConstraint("email", name=email_constraint_name(collection)),
    )

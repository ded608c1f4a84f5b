"""SQLAlchemy implementation for sesame_auth persistence.

Provides:
- build_accounts_table: Table definition for the accounts collection
- AccountRepositorySQLAlchemy: Repository implementation
- AccountStore: Engine/session lifecycle owner

The store creates its table on connect(); no separate migration step is
needed for a fresh database.
"""

from sesame_auth.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)
from sesame_auth.persistence.sqlalchemy.store import AccountStore
from sesame_auth.persistence.sqlalchemy.tables import (
    DEFAULT_COLLECTION,
    build_accounts_table,
)

__all__ = [
    "DEFAULT_COLLECTION",
    "AccountRepositorySQLAlchemy",
    "AccountStore",
    "build_accounts_table",
]

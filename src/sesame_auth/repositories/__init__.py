"""Repository interfaces for sesame_auth.

This package defines the abstract account repository that can be
implemented by different persistence technologies. The SQLAlchemy
implementation lives in sesame_auth.persistence.sqlalchemy.
"""

from sesame_auth.repositories.account_repository import (
    AccountData,
    AccountRecord,
    AccountRepository,
)

__all__ = ["AccountData", "AccountRecord", "AccountRepository"]

"""Sesame Auth - session token infrastructure.

This package provides the authentication building blocks that are
independent of the transport in front of them. It handles:
- Registration validation (password confirmation, length, email syntax)
- Password hashing (bcrypt)
- JWT token issue and verification
- Account storage (with pluggable persistence)

Architecture:
    sesame_auth/
    ├── services/           # Pure logic (validation, hashing, JWT)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Error taxonomy

Usage:
    from sesame_auth import CredentialValidator, JWTService, PasswordHashingService
    from sesame_auth.persistence.sqlalchemy import AccountStore
"""

from sesame_auth.exceptions import (
    AuthError,
    ConfigError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    SesameError,
    StoreError,
    TokenError,
    ValidationError,
)
from sesame_auth.repositories import AccountData, AccountRecord, AccountRepository
from sesame_auth.schemas import (
    Credentials,
    PreparedRegistration,
    RefreshPolicy,
    RegisterInput,
    SessionToken,
    TokenClaims,
)
from sesame_auth.services import (
    CredentialValidator,
    JWTService,
    PasswordHashingService,
)

__all__ = [
    # Services
    "CredentialValidator",
    "JWTService",
    "PasswordHashingService",
    # Repositories (interfaces)
    "AccountData",
    "AccountRecord",
    "AccountRepository",
    # Schemas
    "Credentials",
    "PreparedRegistration",
    "RefreshPolicy",
    "RegisterInput",
    "SessionToken",
    "TokenClaims",
    # Exceptions
    "AuthError",
    "ConfigError",
    "ConflictError",
    "ErrorCode",
    "NotFoundError",
    "SesameError",
    "StoreError",
    "TokenError",
    "ValidationError",
]

"""Authentication services.

Provides registration validation, password hashing and JWT token
management.
"""

from sesame_auth.services.credential_validator import (
    CredentialValidator,
    is_valid_email,
    normalize_email,
)
from sesame_auth.services.jwt_service import JWTService
from sesame_auth.services.password_service import PasswordHashingService

__all__ = [
    "CredentialValidator",
    "JWTService",
    "PasswordHashingService",
    "is_valid_email",
    "normalize_email",
]

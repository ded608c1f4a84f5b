"""Pydantic schemas for API request/response models."""

from sesame.presentation.api.schemas.accounts import AccountResponse
from sesame.presentation.api.schemas.auth import (
    AuthenticateRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

__all__ = [
    "AccountResponse",
    "AuthenticateRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
]

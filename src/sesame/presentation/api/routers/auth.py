"""Authentication router for registration, authentication and token refresh.

Service errors are not caught here; the application's exception handlers
map them to responses.
"""

from fastapi import APIRouter, status

from sesame.presentation.api.dependencies import SessionServiceDep
from sesame.presentation.api.schemas.auth import (
    AuthenticateRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account registered, session token issued"},
        400: {"description": "Invalid input"},
        409: {"description": "Username or email already taken"},
        503: {"description": "Account store unavailable"},
    },
)
async def register(
    request: RegisterRequest,
    session_service: SessionServiceDep,
) -> TokenResponse:
    token = await session_service.register(request.to_input())
    return TokenResponse.from_token(token)


@router.post(
    "/authenticate",
    summary="Authenticate with email and password",
    responses={
        200: {"description": "Authenticated, session token issued"},
        401: {"description": "Unknown email or wrong password"},
        503: {"description": "Account store unavailable"},
    },
)
async def authenticate(
    request: AuthenticateRequest,
    session_service: SessionServiceDep,
) -> TokenResponse:
    token = await session_service.authenticate(request.to_credentials())
    return TokenResponse.from_token(token)


@router.post(
    "/refresh",
    summary="Exchange a valid token for a new one",
    responses={
        200: {"description": "Token refreshed"},
        401: {"description": "Invalid, expired or malformed token"},
    },
)
async def refresh(
    request: RefreshRequest,
    session_service: SessionServiceDep,
) -> TokenResponse:
    token = await session_service.refresh(request.old_token)
    return TokenResponse.from_token(token)

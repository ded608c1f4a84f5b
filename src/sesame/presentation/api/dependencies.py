"""FastAPI dependency injection for the Sesame API.

Provides dependencies for:
- The account store handle (created in the application lifespan)
- Database sessions (one per request, always released)
- Auth services built from settings
- The session service
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sesame.application.services import SessionService
from sesame.presentation.api.config import get_api_settings
from sesame_auth import CredentialValidator, JWTService, PasswordHashingService
from sesame_auth.persistence.sqlalchemy import AccountStore
from sesame_config.settings import Settings

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Store & Session
# -----------------------------------------------------------------------------


def get_account_store(request: Request) -> AccountStore:
    """Get the store handle opened by the application lifespan."""
    return request.app.state.account_store


AccountStoreDep = Annotated[AccountStore, Depends(get_account_store)]


async def get_db_session(store: AccountStoreDep) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Acquires a session from the store's pool for the request and
    returns it when the request finishes.

    Yields
    ------
    AsyncSession for database operations
    """
    async with store.session() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        token_expire_hours=settings.jwt_token_expire_hours,
        leeway_seconds=settings.jwt_leeway_seconds,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


async def get_session_service(
    session: DBSession,
    store: AccountStoreDep,
    settings: SettingsDep,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> SessionService:
    """
    Get session service with all dependencies.

    This service orchestrates registration, authentication, refresh and
    lookup against a repository bound to the request's session.
    """
    return SessionService(
        account_repository=store.repository(session),
        password_service=password_service,
        jwt_service=jwt_service,
        validator=CredentialValidator(password_service),
        refresh_policy=settings.refresh_policy,
        uniform_auth_errors=settings.uniform_auth_errors,
    )


# Type alias for injected session service
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]

"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sesame import __version__
from sesame.presentation.api.exception_handlers import setup_exception_handlers
from sesame.presentation.api.routers import accounts_router, auth_router
from sesame.presentation.logging_config import configure_logging
from sesame_auth import StoreError
from sesame_auth.persistence.sqlalchemy import AccountStore
from sesame_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account registration and session tokens.

**Operations:**
- Register a new account and receive a session token
- Authenticate with email and password
- Refresh a still-valid token before it expires

**Security:**
- Passwords are hashed with bcrypt
- Tokens are HMAC-signed JWTs valid for 24 hours
""",
    },
    {
        "name": "Accounts",
        "description": "Public account lookup by username or email.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


def _build_store(settings: Settings) -> AccountStore:
    return AccountStore.from_url(
        settings.database_url,
        collection=settings.store_collection,
        operation_timeout=settings.store_timeout_seconds,
        connect_timeout=settings.store_connect_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the account store once at startup and closes it at shutdown.
    A store that cannot be reached is fatal for startup.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s API v%s...", settings.app_name, __version__)

    store = app.state.account_store
    if store is None:
        store = _build_store(settings)
        app.state.account_store = store

    try:
        await store.connect()
    except StoreError as e:
        logger.critical("Could not connect to the account store: %s", e.message)
        await store.dispose()
        raise

    yield

    logger.info("Shutting down %s API...", settings.app_name)
    await store.dispose()


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    return v1_router


def create_app(
    settings: Settings | None = None,
    store: AccountStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing. Loaded from the
        environment when omitted (ConfigError if secrets are missing).
    store
        Optional pre-built account store. Built from settings at
        startup when omitted.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Signed session tokens for registered accounts.",
        version=__version__,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings
    app.state.account_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        """
        return {
            "status": "healthy",
            "version": __version__,
            "api_versions": ["v1"],
        }

    return app

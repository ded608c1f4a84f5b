from sesame.presentation.api.routers.accounts import router as accounts_router
from sesame.presentation.api.routers.auth import router as auth_router

__all__ = [
    "accounts_router",
    "auth_router",
]

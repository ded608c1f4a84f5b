"""Application services."""

from sesame.application.services.session_service import SessionService

__all__ = ["SessionService"]

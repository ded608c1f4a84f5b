"""API configuration adapter.

Bridges the centralized sesame_config settings with the API layer. The
settings object is attached to the application at creation time, so
tests can build an app with their own settings.
"""

from fastapi import Request

from sesame_config.settings import Settings


def get_api_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings

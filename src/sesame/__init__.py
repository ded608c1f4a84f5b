"""Sesame - signed session tokens for a user-credential store.

This package holds the application layer and the adapters in front of
it:
- application: the session service (register, authenticate, refresh,
  lookup)
- presentation.api: FastAPI transport
- presentation.cli: Typer command line

The transport-independent building blocks live in sesame_auth;
configuration lives in sesame_config.
"""

__version__ = "0.1.0"

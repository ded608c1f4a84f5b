"""Persistence implementations for sesame_auth.

This package contains database-specific implementations of the
repository interfaces defined in sesame_auth.repositories.

Structure:
    persistence/
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation

Usage:
    from sesame_auth.persistence.sqlalchemy import (
        AccountRepositorySQLAlchemy,
        AccountStore,
    )
"""

"""Fixtures for tests against a real in-process SQLite store."""

import pytest

from sesame_auth.persistence.sqlalchemy import AccountStore
from tests.shared.factories import sqlite_url


@pytest.fixture
async def account_store(tmp_path):
    """A connected store backed by a fresh SQLite file."""
    store = AccountStore.from_url(sqlite_url(tmp_path))
    await store.connect()

    yield store

    await store.dispose()


@pytest.fixture
async def db_session(account_store):
    """A session on the test store."""
    async with account_store.session() as session:
        yield session


@pytest.fixture
def account_repo(account_store, db_session):
    """An account repository bound to the test session."""
    return account_store.repository(db_session)

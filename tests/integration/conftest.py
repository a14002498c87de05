"""Integration test fixtures backed by an in-memory SQLite database."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))


@pytest.fixture
def settings():
    from infrastructure.settings import AppSettings

    return AppSettings(
        database_url="sqlite+pysqlite:///:memory:",
        bcrypt_cost=4,
        scrypt_n=1024,
        pbkdf2_iterations=1000,
    )


@pytest.fixture
def sync_engine(settings):
    """Create a synchronous SQLAlchemy engine with the credential schema."""
    from infrastructure.database.engine import create_db_engine, create_schema

    engine = create_db_engine(settings)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sync_engine):
    from infrastructure.database.engine import create_session_factory

    return create_session_factory(sync_engine)


@pytest.fixture
def sql_store(session_factory):
    from infrastructure.database.repository import SqlCredentialStore

    return SqlCredentialStore(session_factory)

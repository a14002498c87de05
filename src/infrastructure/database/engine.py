"""
SQLAlchemy engine setup for the credential store.

Provides a synchronous engine and session factory built from
:class:`AppSettings`, plus a helper that creates the ``app_user`` table.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from infrastructure.settings import AppSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Engine factories
# ---------------------------------------------------------------------------


def _is_memory_sqlite(url: str) -> bool:
    if not url.startswith("sqlite"):
        return False
    database = url.split("://", 1)[-1].lstrip("/")
    return database in {"", ":memory:"}


def create_db_engine(settings: AppSettings) -> Engine:
    """Create a synchronous SQLAlchemy :class:`Engine`.

    In-memory SQLite gets a :class:`StaticPool` so every session sees the
    same database; other URLs use the dialect's default pool.
    """
    url = settings.database_url
    if _is_memory_sqlite(url):
        return sa_create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.db_echo,
        )
    return sa_create_engine(url, pool_pre_ping=True, echo=settings.db_echo)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    """Create the credential tables if they do not exist yet."""
    Base.metadata.create_all(engine)
    logger.info("Credential schema ensured on %s", engine.url.render_as_string(hide_password=True))

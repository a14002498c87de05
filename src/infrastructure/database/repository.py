"""
Repository implementation for the credential store.

:class:`SqlCredentialStore` satisfies the ``CredentialStore`` port on top of a
synchronous SQLAlchemy :class:`Session` factory. Each call opens and closes
its own session, so one store instance may be shared across threads.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from domain.exceptions import UnsupportedAlgorithmError
from domain.models.credential import CredentialRecord, PasswordAlgorithm

from .models import AppUserModel


def _to_record(row: AppUserModel) -> CredentialRecord:
    try:
        algorithm = PasswordAlgorithm(row.algorithm)
    except ValueError as exc:
        raise UnsupportedAlgorithmError(str(row.algorithm)) from exc
    return CredentialRecord(
        username=row.username,
        password_hash=row.password or "",
        algorithm=algorithm,
        roles=row.roles or "",
    )


class SqlCredentialStore:
    """Lookup and upsert of :class:`AppUserModel` rows (``app_user``).

    Parameters
    ----------
    session_factory:
        A :class:`sessionmaker` bound to the target engine.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> Optional[CredentialRecord]:
        with self._session_factory() as session:
            stmt = select(AppUserModel).where(AppUserModel.username == username)
            row = session.execute(stmt).scalar_one_or_none()
            return _to_record(row) if row is not None else None

    def save(self, record: CredentialRecord) -> CredentialRecord:
        """Insert *record*, or overwrite the row with the same username."""
        with self._session_factory.begin() as session:
            session.merge(
                AppUserModel(
                    username=record.username,
                    password=record.password_hash,
                    roles=record.roles,
                    algorithm=record.algorithm.value,
                )
            )
        return record


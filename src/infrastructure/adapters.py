"""Adapter implementations bridging infrastructure to application-layer ports."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from domain.models.credential import CredentialRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# In-memory repository adapters (swap for the SQL store in production)
# ---------------------------------------------------------------------------

class InMemoryCredentialStore:
    """Synchronous in-memory credential store keyed by username."""

    def __init__(self) -> None:
        self._store: dict[str, CredentialRecord] = {}

    def find_by_username(self, username: str) -> Optional[CredentialRecord]:
        record = self._store.get(username)
        # Copies keep callers from mutating stored state in place.
        return replace(record) if record else None

    def save(self, record: CredentialRecord) -> CredentialRecord:
        self._store[record.username] = replace(record)
        logger.debug("Saved credential record for %s", record.username)
        return record

    def __len__(self) -> int:
        return len(self._store)

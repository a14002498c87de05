"""Credential verification application service.

Authenticates a username/secret pair by dispatching to the key-derivation
algorithm recorded for that user, then derives the role grants handed to
the session layer. Every failure kind collapses into one generic outcome
outside this module; the distinct reasons are only logged.
"""

from __future__ import annotations

import logging
from typing import Protocol

from domain.exceptions import (
    AuthenticationFailedError,
    MalformedStoredHashError,
    UnsupportedAlgorithmError,
)
from domain.models.authentication import AuthenticationDecision, FailureReason
from domain.models.credential import CredentialRecord, PasswordAlgorithm
from domain.services.role_grants import derive_granted_roles
from infrastructure.auth.algorithm_registry import AlgorithmRegistry
from infrastructure.auth.password_codecs import Secret
from infrastructure.observability.metrics import record_attempt

logger = logging.getLogger(__name__)

# Unknown usernames are checked against a throwaway hash of this algorithm so
# they cost about as much as a wrong secret.
UNKNOWN_USER_ALGORITHM = PasswordAlgorithm.BCRYPT
_UNKNOWN_USER_SECRET = "userNotFoundPassword"

# ---------------------------------------------------------------------------
# Repository port
# ---------------------------------------------------------------------------


class CredentialStore(Protocol):
    """Port: persistence of :class:`CredentialRecord` entries keyed by username."""

    def find_by_username(self, username: str) -> CredentialRecord | None: ...

    def save(self, record: CredentialRecord) -> CredentialRecord: ...


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CredentialVerifier:
    """Authentication decision procedure.

    Concurrent calls share only the store, the read-only registry and a
    throwaway hash built on first use. A race on that first use builds the
    hash twice, which is harmless.
    """

    def __init__(self, store: CredentialStore, registry: AlgorithmRegistry) -> None:
        self._store = store
        self._registry = registry
        self._unknown_user_hash: str | None = None

    def _check_unknown_user(self, secret: Secret) -> None:
        codec = self._registry.resolve(UNKNOWN_USER_ALGORITHM)
        if self._unknown_user_hash is None:
            self._unknown_user_hash = codec.encode(_UNKNOWN_USER_SECRET)
        codec.verify(secret, self._unknown_user_hash)

    def _fail(
        self, username: str, reason: FailureReason, algorithm: str
    ) -> AuthenticationDecision:
        record_attempt(algorithm, reason.value.lower())
        return AuthenticationDecision.failure(username, reason)

    def authenticate(self, username: str, secret: Secret) -> AuthenticationDecision:
        """Run one authentication attempt and return its decision.

        Never raises for unknown users, wrong secrets, corrupted hashes or
        unknown algorithm tags; those come back as failed decisions.
        """
        try:
            record = self._store.find_by_username(username)
        except UnsupportedAlgorithmError as exc:
            logger.error(
                "Credential record for %s references unsupported algorithm %s",
                username,
                exc.algorithm,
            )
            return self._fail(username, FailureReason.UNSUPPORTED_ALGORITHM, "unsupported")

        if record is None:
            self._check_unknown_user(secret)
            logger.info("Authentication failed for %s: unknown user", username)
            return self._fail(username, FailureReason.UNKNOWN_USER, "unknown")

        try:
            codec = self._registry.resolve(record.algorithm)
        except UnsupportedAlgorithmError as exc:
            logger.error(
                "Credential record for %s references unsupported algorithm %s",
                username,
                exc.algorithm,
            )
            return self._fail(username, FailureReason.UNSUPPORTED_ALGORITHM, "unsupported")

        algorithm = codec.algorithm.value
        try:
            ok = codec.check(secret, record.password_hash)
        except MalformedStoredHashError as exc:
            logger.warning(
                "Authentication failed for %s: stored %s hash is malformed (%s)",
                username,
                algorithm,
                exc.reason,
            )
            return self._fail(username, FailureReason.MALFORMED_STORED_HASH, algorithm)

        if not ok:
            logger.info("Authentication failed for %s: invalid secret", username)
            return self._fail(username, FailureReason.INVALID_SECRET, algorithm)

        granted = derive_granted_roles(record.roles)
        record_attempt(algorithm, "success")
        logger.info("User %s authenticated via %s", username, algorithm)
        return AuthenticationDecision.success(username, granted)

    def authenticate_or_raise(self, username: str, secret: Secret) -> AuthenticationDecision:
        """Like :meth:`authenticate` but raise :class:`AuthenticationFailedError` on failure."""
        decision = self.authenticate(username, secret)
        if not decision.authenticated:
            raise AuthenticationFailedError()
        return decision

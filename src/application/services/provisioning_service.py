"""Account provisioning: creates credential records under a chosen algorithm."""

from __future__ import annotations

from application.services.credential_verifier import CredentialStore
from domain.exceptions import UserAlreadyExistsError
from domain.models.credential import CredentialRecord, PasswordAlgorithm
from infrastructure.auth.algorithm_registry import AlgorithmRegistry
from infrastructure.auth.password_codecs import Secret
from infrastructure.observability.logging_config import get_logger

log = get_logger(__name__)

# (username, secret, algorithm, roles)
DEMO_USERS: tuple[tuple[str, str, PasswordAlgorithm, str], ...] = (
    ("alice", "password", PasswordAlgorithm.BCRYPT, "USER"),
    ("bob", "password", PasswordAlgorithm.SCRYPT, "USER"),
    ("carol", "password", PasswordAlgorithm.PBKDF2, "ADMIN"),
)


class ProvisioningService:
    def __init__(self, store: CredentialStore, registry: AlgorithmRegistry) -> None:
        self._store = store
        self._registry = registry

    def provision(
        self,
        username: str,
        secret: Secret,
        algorithm: PasswordAlgorithm | str,
        roles: str = "USER",
    ) -> CredentialRecord:
        """Hash *secret* with *algorithm* and save a new record.

        The stored tag is always the codec's own tag, so record and hash
        cannot disagree at creation time.
        """
        if self._store.find_by_username(username) is not None:
            raise UserAlreadyExistsError(username=username)

        codec = self._registry.resolve(algorithm)
        record = CredentialRecord(
            username=username,
            password_hash=codec.encode(secret),
            algorithm=codec.algorithm,
            roles=roles,
        )
        record = self._store.save(record)
        log.info("Credential provisioned", username=username, algorithm=codec.algorithm.value)
        return record

    def seed_demo_users(self) -> list[CredentialRecord]:
        """Create the demo accounts, skipping any username that already exists."""
        created: list[CredentialRecord] = []
        for username, secret, algorithm, roles in DEMO_USERS:
            if self._store.find_by_username(username) is not None:
                log.info("Demo user already present", username=username)
                continue
            created.append(self.provision(username, secret, algorithm, roles))
        return created

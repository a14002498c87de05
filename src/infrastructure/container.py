"""Dependency injection container for the credential service.

Wires the algorithm registry, the credential store and the application
services together exactly once per process.
"""

from __future__ import annotations

import logging

from application.services.credential_verifier import CredentialStore, CredentialVerifier
from application.services.hashing_service import HashingService
from application.services.provisioning_service import ProvisioningService
from infrastructure.adapters import InMemoryCredentialStore
from infrastructure.auth.algorithm_registry import AlgorithmRegistry
from infrastructure.database.engine import create_db_engine, create_schema, create_session_factory
from infrastructure.database.repository import SqlCredentialStore
from infrastructure.observability.logging_config import setup_logging
from infrastructure.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Central DI container that owns all service instances."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        store: CredentialStore | None = None,
    ) -> None:
        self._settings = settings or get_settings()

        # Infrastructure
        self.registry = AlgorithmRegistry.from_settings(self._settings)
        self.engine = None
        if store is None:
            self.engine = create_db_engine(self._settings)
            store = SqlCredentialStore(create_session_factory(self.engine))
        self.store = store

        # Application services
        self.verifier = CredentialVerifier(store=self.store, registry=self.registry)
        self.provisioning_service = ProvisioningService(store=self.store, registry=self.registry)
        self.hashing_service = HashingService(registry=self.registry)

        logger.info("ServiceContainer initialized")

    @property
    def settings(self) -> AppSettings:
        return self._settings


def bootstrap(settings: AppSettings | None = None) -> ServiceContainer:
    """Process startup: configure logging, build the container, prepare storage."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    container = ServiceContainer(settings)
    if container.engine is not None:
        create_schema(container.engine)
    if settings.seed_demo_users:
        created = container.provisioning_service.seed_demo_users()
        logger.info("Seeded %d demo users", len(created))
    return container


def in_memory_container(settings: AppSettings | None = None) -> ServiceContainer:
    """Container backed by :class:`InMemoryCredentialStore`, for tests and tooling."""
    return ServiceContainer(settings, store=InMemoryCredentialStore())


# Module-level singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Return the global container singleton, bootstrapping it on first use."""
    global _container
    if _container is None:
        _container = bootstrap()
    return _container


def reset_container() -> None:
    """Reset the global container (for testing)."""
    global _container
    if _container is not None and _container.engine is not None:
        _container.engine.dispose()
    _container = None


# ---------------------------------------------------------------------------
# Dependency factories
# ---------------------------------------------------------------------------


def get_credential_verifier() -> CredentialVerifier:
    return get_container().verifier


def get_provisioning_service() -> ProvisioningService:
    return get_container().provisioning_service


def get_hashing_service() -> HashingService:
    return get_container().hashing_service

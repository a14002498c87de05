"""End-to-end login scenarios with production KDF parameters."""

from __future__ import annotations

import logging

import pytest

from domain.models.authentication import GENERIC_FAILURE_MESSAGE
from domain.models.credential import PasswordAlgorithm
from infrastructure.container import (
    ServiceContainer,
    bootstrap,
    get_container,
    in_memory_container,
    reset_container,
)
from infrastructure.settings import AppSettings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope="module")
def seeded() -> ServiceContainer:
    container = in_memory_container(AppSettings())
    container.provisioning_service.seed_demo_users()
    return container


class TestDemoScenarios:

    def test_alice_bcrypt_user(self, seeded):
        decision = seeded.verifier.authenticate("alice", "password")
        assert decision.authenticated is True
        assert decision.granted_roles == ("ROLE_USER",)

    def test_alice_wrong_password_is_generic(self, seeded):
        decision = seeded.verifier.authenticate("alice", "wrong")
        assert decision.authenticated is False
        assert decision.public_message == GENERIC_FAILURE_MESSAGE

    def test_bob_scrypt_user(self, seeded):
        assert seeded.store.find_by_username("bob").password_hash.startswith("$e0801$")
        assert seeded.verifier.authenticate("bob", "password").granted_roles == ("ROLE_USER",)

    def test_carol_pbkdf2_admin(self, seeded):
        record = seeded.store.find_by_username("carol")
        assert record.password_hash.startswith("$pbkdf2-sha256$310000$")
        assert seeded.verifier.authenticate("carol", "password").granted_roles == ("ROLE_ADMIN",)

    def test_bob_scrypt_hash_never_verifies_as_pbkdf2(self, seeded):
        bob_hash = seeded.store.find_by_username("bob").password_hash
        assert seeded.registry.resolve(PasswordAlgorithm.PBKDF2).verify("password", bob_hash) is False

    def test_unknown_user_matches_wrong_password_outcome(self, seeded):
        unknown = seeded.verifier.authenticate("zoe", "password")
        wrong = seeded.verifier.authenticate("carol", "wrong")
        assert (unknown.authenticated, unknown.public_message, unknown.granted_roles) == (
            wrong.authenticated,
            wrong.public_message,
            wrong.granted_roles,
        )


class TestBootstrap:

    def test_bootstrap_with_sql_store_and_seed(self, restore_root_logger):
        container = bootstrap(AppSettings(seed_demo_users=True, bcrypt_cost=4, scrypt_n=1024, pbkdf2_iterations=1000))
        try:
            assert container.engine is not None
            assert container.verifier.authenticate("carol", "password").granted_roles == ("ROLE_ADMIN",)
            assert container.hashing_service.matches(
                "password", container.store.find_by_username("bob").password_hash, "scrypt"
            )
        finally:
            container.engine.dispose()

    def test_global_container_lifecycle(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("CREDENTIALS_BCRYPT_COST", "4")
        reset_container()
        try:
            first = get_container()
            assert get_container() is first
            reset_container()
            assert get_container() is not first
        finally:
            reset_container()

"""Unit tests for ProvisioningService: account creation and demo seeding."""

from __future__ import annotations

import pytest

from domain.exceptions import SecretTooLongError, UnsupportedAlgorithmError, UserAlreadyExistsError
from domain.models.credential import PasswordAlgorithm


class TestProvision:

    def test_record_saved_with_codec_tag(self, provisioning, credential_store, fast_registry, algorithm):
        record = provisioning.provision("alice", "password", algorithm, roles="USER")
        stored = credential_store.find_by_username("alice")
        assert stored == record
        assert stored.algorithm is algorithm
        assert stored.roles == "USER"
        assert fast_registry.resolve(algorithm).verify("password", stored.password_hash)

    def test_plaintext_not_stored(self, provisioning):
        record = provisioning.provision("alice", "password", PasswordAlgorithm.PBKDF2)
        assert "password" not in record.password_hash

    def test_algorithm_name_accepted(self, provisioning):
        record = provisioning.provision("bob", "password", "scrypt")
        assert record.algorithm is PasswordAlgorithm.SCRYPT

    def test_default_role(self, provisioning):
        assert provisioning.provision("bob", "pw", PasswordAlgorithm.BCRYPT).roles == "USER"

    def test_duplicate_username_rejected(self, provisioning):
        provisioning.provision("carol", "pw", PasswordAlgorithm.PBKDF2)
        with pytest.raises(UserAlreadyExistsError):
            provisioning.provision("carol", "other", PasswordAlgorithm.BCRYPT)

    def test_unknown_algorithm_rejected(self, provisioning, credential_store):
        with pytest.raises(UnsupportedAlgorithmError):
            provisioning.provision("dan", "pw", "md5")
        assert credential_store.find_by_username("dan") is None

    def test_bcrypt_secret_too_long(self, provisioning, credential_store):
        with pytest.raises(SecretTooLongError):
            provisioning.provision("eve", "x" * 100, PasswordAlgorithm.BCRYPT)
        assert credential_store.find_by_username("eve") is None


class TestSeedDemoUsers:

    def test_creates_three_users(self, provisioning, credential_store):
        created = provisioning.seed_demo_users()
        assert [r.username for r in created] == ["alice", "bob", "carol"]
        assert credential_store.find_by_username("alice").algorithm is PasswordAlgorithm.BCRYPT
        assert credential_store.find_by_username("bob").algorithm is PasswordAlgorithm.SCRYPT
        carol = credential_store.find_by_username("carol")
        assert carol.algorithm is PasswordAlgorithm.PBKDF2
        assert carol.roles == "ADMIN"

    def test_is_idempotent(self, provisioning, credential_store):
        provisioning.seed_demo_users()
        alice_hash = credential_store.find_by_username("alice").password_hash
        assert provisioning.seed_demo_users() == []
        assert credential_store.find_by_username("alice").password_hash == alice_hash
        assert len(credential_store) == 3

    def test_seeded_users_authenticate(self, provisioning, verifier):
        provisioning.seed_demo_users()
        for username, roles in [("alice", ("ROLE_USER",)), ("bob", ("ROLE_USER",)), ("carol", ("ROLE_ADMIN",))]:
            decision = verifier.authenticate(username, "password")
            assert decision.authenticated is True
            assert decision.granted_roles == roles

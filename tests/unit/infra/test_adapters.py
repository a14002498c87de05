"""Tests for infrastructure.adapters."""

from __future__ import annotations

from domain.models.credential import CredentialRecord, PasswordAlgorithm
from infrastructure.adapters import InMemoryCredentialStore


class TestInMemoryCredentialStore:

    def test_find_missing(self, credential_store):
        assert credential_store.find_by_username("nobody") is None

    def test_returns_copies(self, credential_store):
        credential_store.save(CredentialRecord("alice", "h", PasswordAlgorithm.BCRYPT, "USER"))
        found = credential_store.find_by_username("alice")
        found.roles = "ADMIN"
        assert credential_store.find_by_username("alice").roles == "USER"

    def test_save_overwrites(self):
        store = InMemoryCredentialStore()
        store.save(CredentialRecord("a", "h", PasswordAlgorithm.BCRYPT, "USER"))
        store.save(CredentialRecord("a", "h2", PasswordAlgorithm.SCRYPT, "USER"))
        assert len(store) == 1
        assert store.find_by_username("a").algorithm is PasswordAlgorithm.SCRYPT

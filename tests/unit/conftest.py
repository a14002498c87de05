"""Shared fixtures for unit tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from application.services.credential_verifier import CredentialVerifier
from application.services.hashing_service import HashingService
from application.services.provisioning_service import ProvisioningService
from domain.models.algorithm import BcryptConfig, Pbkdf2Config, ScryptConfig
from domain.models.credential import PasswordAlgorithm
from infrastructure.adapters import InMemoryCredentialStore
from infrastructure.auth.algorithm_registry import AlgorithmRegistry
from infrastructure.auth.password_codecs import BcryptCodec, Pbkdf2Codec, ScryptCodec

TEST_PEPPER = "unit-test-pepper"

# Low-cost parameters keep the suite fast; production defaults are covered
# by the end-to-end tests.
FAST_BCRYPT = BcryptConfig(cost=4)
FAST_SCRYPT = ScryptConfig(n=1024, r=8, p=1)
FAST_PBKDF2 = Pbkdf2Config(iterations=1000, pepper=TEST_PEPPER)


@pytest.fixture
def bcrypt_codec() -> BcryptCodec:
    return BcryptCodec(FAST_BCRYPT)


@pytest.fixture
def scrypt_codec() -> ScryptCodec:
    return ScryptCodec(FAST_SCRYPT)


@pytest.fixture
def pbkdf2_codec() -> Pbkdf2Codec:
    return Pbkdf2Codec(FAST_PBKDF2)


@pytest.fixture(params=list(PasswordAlgorithm), ids=lambda tag: tag.value)
def algorithm(request: pytest.FixtureRequest) -> PasswordAlgorithm:
    return request.param


@pytest.fixture
def fast_registry() -> AlgorithmRegistry:
    return AlgorithmRegistry([FAST_BCRYPT, FAST_SCRYPT, FAST_PBKDF2])


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def verifier(
    credential_store: InMemoryCredentialStore, fast_registry: AlgorithmRegistry
) -> CredentialVerifier:
    return CredentialVerifier(store=credential_store, registry=fast_registry)


@pytest.fixture
def provisioning(
    credential_store: InMemoryCredentialStore, fast_registry: AlgorithmRegistry
) -> ProvisioningService:
    return ProvisioningService(store=credential_store, registry=fast_registry)


@pytest.fixture
def hashing_service(fast_registry: AlgorithmRegistry) -> HashingService:
    return HashingService(registry=fast_registry)

"""
Credential codecs: one encoder/verifier per supported key-derivation function.

Every codec produces a self-describing string that embeds the salt and the
cost parameters used, so verification re-derives with exactly the stored
parameters instead of the live configuration. The formats are disjoint:

* bcrypt  -- ``$2b$10$<22 char salt><31 char hash>`` (modular crypt)
* scrypt  -- ``$<hex params>$<b64 salt>$<b64 key>`` where
  ``params = log2(N) << 16 | r << 8 | p``
* PBKDF2  -- ``$pbkdf2-sha256$<iterations>$<b64 salt>$<b64 key>``

Comparisons are constant time: bcrypt via ``bcrypt.checkpw`` and the other two
via ``cryptography``'s ``KeyDerivationFunction.verify``.
"""

from __future__ import annotations

import base64
import logging
import re
import secrets
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import bcrypt
from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from domain.exceptions import MalformedStoredHashError, SecretTooLongError
from domain.models.algorithm import AlgorithmConfig, BcryptConfig, Pbkdf2Config, ScryptConfig
from domain.models.credential import PasswordAlgorithm
from infrastructure.observability.metrics import time_kdf

logger = logging.getLogger(__name__)

Secret = str | bytes
ConfigT = TypeVar("ConfigT", BcryptConfig, ScryptConfig, Pbkdf2Config)

BCRYPT_MAX_SECRET_BYTES: int = 72
PBKDF2_PREFIX: str = "pbkdf2-sha256"

# Upper bounds applied to parameters parsed from stored strings. A corrupted
# row must fail verification, not allocate gigabytes or spin for hours.
# Configs above these bounds are refused, since their own hashes would not verify.
MAX_BCRYPT_COST: int = 16
MAX_SCRYPT_MEMORY_BYTES: int = 1 << 30
# 128 * N * r * p, the bytes mixed across all p lanes
MAX_SCRYPT_WORK_BYTES: int = 1 << 31
MAX_PBKDF2_ITERATIONS: int = 10_000_000
MAX_DERIVED_KEY_BYTES: int = 64

_BCRYPT_PATTERN = re.compile(r"\$2[aby]\$([0-9]{2})\$[./A-Za-z0-9]{53}")
_HEX_PATTERN = re.compile(r"[0-9a-f]{1,8}")
_ITERATIONS_PATTERN = re.compile(r"[1-9][0-9]{0,9}")


def _to_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _b64decode(segment: str, algorithm: PasswordAlgorithm, field: str) -> bytes:
    """Decode a standard-alphabet base64 segment, rejecting non-canonical forms."""
    try:
        raw = base64.b64decode(segment, validate=True)
    except ValueError as exc:
        raise MalformedStoredHashError(algorithm.value, f"{field} is not base64") from exc
    if not raw or _b64encode(raw) != segment:
        raise MalformedStoredHashError(algorithm.value, f"{field} is not canonical base64")
    return raw


# ======================================================================
# Base codec
# ======================================================================


class CredentialCodec(ABC, Generic[ConfigT]):
    """Encodes secrets for storage and verifies secrets against stored strings."""

    def __init__(self, config: ConfigT) -> None:
        self._validate_config(config)
        self._config = config

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def algorithm(self) -> PasswordAlgorithm:
        return self._config.algorithm

    def encode(self, secret: Secret) -> str:
        """Hash *secret* with a fresh random salt and return the stored form."""
        with time_kdf(self.algorithm.value, "encode"):
            return self._encode(_to_bytes(secret))

    def check(self, secret: Secret, stored_hash: str) -> bool:
        """
        Verify *secret* against *stored_hash*.

        Raises :class:`MalformedStoredHashError` when *stored_hash* cannot be
        parsed by this codec.
        """
        if not isinstance(stored_hash, str):
            raise MalformedStoredHashError(self.algorithm.value, "stored hash is not a string")
        with time_kdf(self.algorithm.value, "verify"):
            return self._check(_to_bytes(secret), stored_hash)

    def verify(self, secret: Secret, stored_hash: str) -> bool:
        """
        Verify *secret* against *stored_hash*.

        Returns ``False`` on mismatch and when *stored_hash* is malformed.
        """
        try:
            return self.check(secret, stored_hash)
        except MalformedStoredHashError as exc:
            logger.warning("Rejected malformed %s hash: %s", self.algorithm.value, exc.reason)
            return False

    def _validate_config(self, config: ConfigT) -> None:
        """Raise ``ValueError`` when *config* exceeds what ``check`` accepts."""

    @abstractmethod
    def _encode(self, secret: bytes) -> str: ...

    @abstractmethod
    def _check(self, secret: bytes, stored_hash: str) -> bool: ...


# ======================================================================
# bcrypt
# ======================================================================


class BcryptCodec(CredentialCodec[BcryptConfig]):
    """bcrypt with a fixed cost; salt and cost live in the modular crypt string."""

    def _validate_config(self, config: BcryptConfig) -> None:
        if config.cost > MAX_BCRYPT_COST:
            raise ValueError(f"bcrypt cost {config.cost} exceeds the limit of {MAX_BCRYPT_COST}")

    def _encode(self, secret: bytes) -> str:
        if len(secret) > BCRYPT_MAX_SECRET_BYTES:
            raise SecretTooLongError(self.algorithm.value, BCRYPT_MAX_SECRET_BYTES)
        salt = bcrypt.gensalt(rounds=self._config.cost)
        return bcrypt.hashpw(secret, salt).decode("ascii")

    def _check(self, secret: bytes, stored_hash: str) -> bool:
        match = _BCRYPT_PATTERN.fullmatch(stored_hash)
        if match is None:
            raise MalformedStoredHashError(self.algorithm.value, "not a modular crypt string")
        if not 4 <= int(match.group(1)) <= MAX_BCRYPT_COST:
            raise MalformedStoredHashError(self.algorithm.value, "cost out of range")
        if len(secret) > BCRYPT_MAX_SECRET_BYTES:
            # encode() never produces a hash for such a secret
            return False
        try:
            return bcrypt.checkpw(secret, stored_hash.encode("ascii"))
        except ValueError as exc:
            raise MalformedStoredHashError(self.algorithm.value, "invalid salt") from exc


# ======================================================================
# scrypt
# ======================================================================


class ScryptCodec(CredentialCodec[ScryptConfig]):
    """scrypt with N, r and p packed into a hex parameter word."""

    @staticmethod
    def _cost_error(log2_n: int, r: int, p: int, key_length: int) -> str | None:
        if log2_n > 30 or 128 * r * (1 << log2_n) > MAX_SCRYPT_MEMORY_BYTES:
            return "memory cost too large"
        if 128 * r * p * (1 << log2_n) > MAX_SCRYPT_WORK_BYTES:
            return "parallelism cost too large"
        if key_length > MAX_DERIVED_KEY_BYTES:
            return "derived key too long"
        return None

    def _validate_config(self, config: ScryptConfig) -> None:
        error = self._cost_error(config.log2_n, config.r, config.p, config.key_length)
        if error is not None:
            raise ValueError(f"scrypt config rejected: {error}")

    def _encode(self, secret: bytes) -> str:
        cfg = self._config
        salt = secrets.token_bytes(cfg.salt_length)
        key = Scrypt(salt=salt, length=cfg.key_length, n=cfg.n, r=cfg.r, p=cfg.p).derive(secret)
        params = (cfg.log2_n << 16) | (cfg.r << 8) | cfg.p
        return f"${params:x}${_b64encode(salt)}${_b64encode(key)}"

    def _check(self, secret: bytes, stored_hash: str) -> bool:
        parts = stored_hash.split("$")
        if len(parts) != 4 or parts[0] != "":
            raise MalformedStoredHashError(self.algorithm.value, "expected $params$salt$key")
        _, params_hex, salt_b64, key_b64 = parts
        if not _HEX_PATTERN.fullmatch(params_hex):
            raise MalformedStoredHashError(self.algorithm.value, "parameters are not hex")

        params = int(params_hex, 16)
        log2_n = (params >> 16) & 0xFFFF
        r = (params >> 8) & 0xFF
        p = params & 0xFF
        if log2_n < 1 or r < 1 or p < 1:
            raise MalformedStoredHashError(self.algorithm.value, "cost parameters out of range")

        salt = _b64decode(salt_b64, self.algorithm, "salt")
        expected = _b64decode(key_b64, self.algorithm, "derived key")
        error = self._cost_error(log2_n, r, p, len(expected))
        if error is not None:
            raise MalformedStoredHashError(self.algorithm.value, error)

        kdf = Scrypt(salt=salt, length=len(expected), n=1 << log2_n, r=r, p=p)
        try:
            kdf.verify(secret, expected)
        except InvalidKey:
            return False
        return True


# ======================================================================
# PBKDF2
# ======================================================================


class Pbkdf2Codec(CredentialCodec[Pbkdf2Config]):
    """
    PBKDF2-HMAC-SHA256 with an application-wide pepper.

    The pepper is appended to the per-credential salt before derivation and
    is never written into the stored string; a hash is only verifiable by a
    codec configured with the same pepper.
    """

    def _validate_config(self, config: Pbkdf2Config) -> None:
        if config.iterations > MAX_PBKDF2_ITERATIONS:
            raise ValueError(
                f"PBKDF2 iterations {config.iterations} exceed the limit of {MAX_PBKDF2_ITERATIONS}"
            )
        if config.key_length > MAX_DERIVED_KEY_BYTES:
            raise ValueError(f"PBKDF2 key length must not exceed {MAX_DERIVED_KEY_BYTES} bytes")

    def _derive_kdf(self, salt: bytes, length: int, iterations: int) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt + self._config.pepper.encode("utf-8"),
            iterations=iterations,
        )

    def _encode(self, secret: bytes) -> str:
        cfg = self._config
        salt = secrets.token_bytes(cfg.salt_length)
        key = self._derive_kdf(salt, cfg.key_length, cfg.iterations).derive(secret)
        return f"${PBKDF2_PREFIX}${cfg.iterations}${_b64encode(salt)}${_b64encode(key)}"

    def _check(self, secret: bytes, stored_hash: str) -> bool:
        parts = stored_hash.split("$")
        if len(parts) != 5 or parts[0] != "" or parts[1] != PBKDF2_PREFIX:
            raise MalformedStoredHashError(
                self.algorithm.value, f"expected ${PBKDF2_PREFIX}$iterations$salt$key"
            )
        _, _, iterations_str, salt_b64, key_b64 = parts
        if not _ITERATIONS_PATTERN.fullmatch(iterations_str):
            raise MalformedStoredHashError(self.algorithm.value, "iterations are not a number")
        iterations = int(iterations_str)
        if iterations > MAX_PBKDF2_ITERATIONS:
            raise MalformedStoredHashError(self.algorithm.value, "iteration count too large")

        salt = _b64decode(salt_b64, self.algorithm, "salt")
        expected = _b64decode(key_b64, self.algorithm, "derived key")
        if len(expected) > MAX_DERIVED_KEY_BYTES:
            raise MalformedStoredHashError(self.algorithm.value, "derived key too long")

        kdf = self._derive_kdf(salt, len(expected), iterations)
        try:
            kdf.verify(secret, expected)
        except InvalidKey:
            return False
        return True


# ======================================================================
# Factory
# ======================================================================


def create_codec(config: AlgorithmConfig) -> CredentialCodec:
    """Build the codec matching *config*'s variant."""
    if isinstance(config, BcryptConfig):
        return BcryptCodec(config)
    if isinstance(config, ScryptConfig):
        return ScryptCodec(config)
    if isinstance(config, Pbkdf2Config):
        return Pbkdf2Codec(config)
    raise TypeError(f"No codec for config type {type(config).__name__}")

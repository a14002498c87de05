"""Immutable key-derivation parameter sets, one per :class:`PasswordAlgorithm`.

Each config describes the parameters used when *encoding* a new secret.
Verification never consults these values for cost parameters: stored hashes
carry their own salt and cost, so raising a default here leaves existing
credentials verifiable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias

from domain.models.credential import PasswordAlgorithm

# Historic development value. Deployments override it through settings.
DEFAULT_PBKDF2_PEPPER: str = "StrongPepperUsedAcrossAllPBKDF2Hashes"


@dataclass(frozen=True)
class BcryptConfig:
    algorithm: ClassVar[PasswordAlgorithm] = PasswordAlgorithm.BCRYPT

    # log2 rounds; salts are always 16 bytes
    cost: int = 10

    def __post_init__(self) -> None:
        if not 4 <= self.cost <= 31:
            raise ValueError(f"bcrypt cost must be within 4..31, got {self.cost}")


@dataclass(frozen=True)
class ScryptConfig:
    algorithm: ClassVar[PasswordAlgorithm] = PasswordAlgorithm.SCRYPT

    n: int = 16384
    r: int = 8
    p: int = 1
    key_length: int = 32
    salt_length: int = 16

    def __post_init__(self) -> None:
        if self.n <= 1 or self.n & (self.n - 1) != 0:
            raise ValueError(f"scrypt N must be a power of two greater than 1, got {self.n}")
        # The stored parameter word packs r and p into one byte each.
        if not 1 <= self.r <= 0xFF:
            raise ValueError(f"scrypt r must be within 1..255, got {self.r}")
        if not 1 <= self.p <= 0xFF:
            raise ValueError(f"scrypt p must be within 1..255, got {self.p}")
        if self.key_length < 1:
            raise ValueError("scrypt key length must be positive")
        if self.salt_length < 1:
            raise ValueError("scrypt salt length must be positive")

    @property
    def log2_n(self) -> int:
        return self.n.bit_length() - 1


@dataclass(frozen=True)
class Pbkdf2Config:
    algorithm: ClassVar[PasswordAlgorithm] = PasswordAlgorithm.PBKDF2

    iterations: int = 310000
    salt_length: int = 16
    key_length: int = 32
    pepper: str = field(default=DEFAULT_PBKDF2_PEPPER, repr=False)
    prf: ClassVar[str] = "sha256"

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise ValueError(f"PBKDF2 iterations must be positive, got {self.iterations}")
        if self.salt_length < 1:
            raise ValueError("PBKDF2 salt length must be positive")
        if self.key_length < 1:
            raise ValueError("PBKDF2 key length must be positive")


AlgorithmConfig: TypeAlias = BcryptConfig | ScryptConfig | Pbkdf2Config

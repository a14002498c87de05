from domain.models.algorithm import (
    DEFAULT_PBKDF2_PEPPER,
    AlgorithmConfig,
    BcryptConfig,
    Pbkdf2Config,
    ScryptConfig,
)
from domain.models.authentication import (
    GENERIC_FAILURE_MESSAGE,
    AuthenticationDecision,
    FailureReason,
)
from domain.models.credential import CredentialRecord, PasswordAlgorithm

__all__ = [
    "DEFAULT_PBKDF2_PEPPER",
    "GENERIC_FAILURE_MESSAGE",
    "AlgorithmConfig",
    "AuthenticationDecision",
    "BcryptConfig",
    "CredentialRecord",
    "FailureReason",
    "PasswordAlgorithm",
    "Pbkdf2Config",
    "ScryptConfig",
]

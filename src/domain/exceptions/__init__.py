from domain.exceptions.credential_exceptions import (
    AuthenticationFailedError,
    DomainError,
    MalformedStoredHashError,
    SecretTooLongError,
    UnsupportedAlgorithmError,
    UserAlreadyExistsError,
)

__all__ = [
    "AuthenticationFailedError",
    "DomainError",
    "MalformedStoredHashError",
    "SecretTooLongError",
    "UnsupportedAlgorithmError",
    "UserAlreadyExistsError",
]

from __future__ import annotations

from domain.models.authentication import GENERIC_FAILURE_MESSAGE


class DomainError(Exception):
    """Base class for all domain-layer exceptions.

    Carries HTTP-mapping metadata so an outer layer can produce
    RFC 9457 Problem Details without knowing exception internals.
    """

    def __init__(
        self,
        detail: str = "",
        *,
        title: str = "Domain Error",
        status_code: int = 400,
        error_type: str = "about:blank",
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.title = title
        self.status_code = status_code
        self.error_type = error_type


class UnsupportedAlgorithmError(DomainError):
    def __init__(self, algorithm: str = "") -> None:
        self.algorithm = algorithm
        super().__init__(
            detail=f"Unsupported algorithm: {algorithm}",
            title="Unsupported Algorithm",
            status_code=500,
            error_type="https://credentials.example/problems/unsupported-algorithm",
        )


class MalformedStoredHashError(DomainError):
    def __init__(self, algorithm: str = "", reason: str = "") -> None:
        self.algorithm = algorithm
        self.reason = reason
        super().__init__(
            detail=f"Malformed {algorithm} hash: {reason}",
            title="Malformed Stored Hash",
            status_code=500,
            error_type="https://credentials.example/problems/malformed-hash",
        )


class AuthenticationFailedError(DomainError):
    """Generic login failure; deliberately carries no reason."""

    def __init__(self) -> None:
        super().__init__(
            detail=GENERIC_FAILURE_MESSAGE,
            title="Unauthorized",
            status_code=401,
            error_type="https://credentials.example/problems/authentication-failed",
        )


class UserAlreadyExistsError(DomainError):
    def __init__(self, username: str = "") -> None:
        self.username = username
        super().__init__(
            detail=f"User already exists: {username}",
            title="User Conflict",
            status_code=409,
            error_type="https://credentials.example/problems/user-conflict",
        )


class SecretTooLongError(DomainError):
    def __init__(self, algorithm: str = "", limit: int = 0) -> None:
        self.algorithm = algorithm
        self.limit = limit
        super().__init__(
            detail=f"{algorithm} accepts secrets of at most {limit} bytes",
            title="Secret Too Long",
            status_code=422,
            error_type="https://credentials.example/problems/secret-too-long",
        )

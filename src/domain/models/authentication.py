from __future__ import annotations

import enum
from dataclasses import dataclass, field

GENERIC_FAILURE_MESSAGE: str = "Authentication failed"


class FailureReason(enum.Enum):
    UNKNOWN_USER = "UNKNOWN_USER"
    INVALID_SECRET = "INVALID_SECRET"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    MALFORMED_STORED_HASH = "MALFORMED_STORED_HASH"


@dataclass(frozen=True)
class AuthenticationDecision:
    """Outcome of a single authentication attempt.

    ``reason`` is diagnostic and must stay inside the service boundary.
    Anything shown to the caller goes through :attr:`public_message`, which
    is identical for every failure kind.
    """

    username: str
    authenticated: bool
    granted_roles: tuple[str, ...] = field(default_factory=tuple)
    reason: FailureReason | None = None

    @classmethod
    def success(cls, username: str, granted_roles: tuple[str, ...]) -> AuthenticationDecision:
        return cls(username=username, authenticated=True, granted_roles=granted_roles)

    @classmethod
    def failure(cls, username: str, reason: FailureReason) -> AuthenticationDecision:
        return cls(username=username, authenticated=False, reason=reason)

    @property
    def public_message(self) -> str | None:
        return None if self.authenticated else GENERIC_FAILURE_MESSAGE

from __future__ import annotations

import enum
from dataclasses import dataclass


class PasswordAlgorithm(str, enum.Enum):
    BCRYPT = "BCRYPT"
    SCRYPT = "SCRYPT"
    PBKDF2 = "PBKDF2"

    @classmethod
    def from_name(cls, name: str) -> PasswordAlgorithm:
        """Look up a tag by name, ignoring case and surrounding whitespace.

        Raises ``ValueError`` for names outside the closed set.
        """
        normalised = name.strip().upper()
        try:
            return cls(normalised)
        except ValueError:
            raise ValueError(f"Unsupported algorithm: {name}") from None


@dataclass
class CredentialRecord:
    username: str = ""
    password_hash: str = ""
    algorithm: PasswordAlgorithm = PasswordAlgorithm.BCRYPT
    # comma-separated, e.g. "USER,ADMIN"
    roles: str = ""

    def __repr__(self) -> str:
        return (
            f"CredentialRecord(username={self.username!r}, "
            f"algorithm={self.algorithm.value}, roles={self.roles!r})"
        )

"""Mapping from stored role names to granted authorities."""

from __future__ import annotations

ROLE_PREFIX: str = "ROLE_"


def to_grant(role_name: str) -> str:
    """Normalise a single role name, e.g. ``"admin "`` -> ``"ROLE_ADMIN"``."""
    return f"{ROLE_PREFIX}{role_name.strip().upper()}"


def derive_granted_roles(roles: str) -> tuple[str, ...]:
    """Split a comma-joined roles string into grants.

    Blank tokens are dropped. Order and duplicates are kept as stored.
    """
    return tuple(to_grant(token) for token in roles.split(",") if token.strip())

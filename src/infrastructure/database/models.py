"""
SQLAlchemy 2.0+ ORM models for the credential store.

Schema layout
-------------
* ``app_user`` -- one row per account: username (primary key), encoded
  password hash, comma-joined role names and the algorithm tag that produced
  the hash.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Shared declarative base for every ORM model."""
    pass


# ---------------------------------------------------------------------------
# AppUserModel
# ---------------------------------------------------------------------------

class AppUserModel(Base):
    """A stored credential.

    ``algorithm`` is a plain string column so that a row carrying an unknown
    tag can still be loaded and reported, instead of failing inside the ORM.
    """

    __tablename__ = "app_user"
    __table_args__ = (
        CheckConstraint(
            "algorithm IN ('BCRYPT', 'PBKDF2', 'SCRYPT')",
            name="ck_app_user_algorithm",
        ),
    )

    username: Mapped[str] = mapped_column(String(255), primary_key=True)
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    roles: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    algorithm: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    def __repr__(self) -> str:
        return f"<AppUser(username={self.username!r}, algorithm={self.algorithm!r})>"

"""Application settings loaded from environment variables via Pydantic."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from domain.models.algorithm import DEFAULT_PBKDF2_PEPPER


class AppSettings(BaseSettings):
    """Central configuration for the credential service."""

    model_config = {"env_prefix": "CREDENTIALS_", "case_sensitive": False}

    # Database
    database_url: str = "sqlite+pysqlite:///:memory:"
    db_echo: bool = False

    # bcrypt
    bcrypt_cost: int = 10

    # scrypt
    scrypt_n: int = 16384
    scrypt_r: int = 8
    scrypt_p: int = 1
    scrypt_key_length: int = 32
    scrypt_salt_length: int = 16

    # PBKDF2-HMAC-SHA256
    pbkdf2_iterations: int = 310000
    pbkdf2_salt_length: int = 16
    pbkdf2_key_length: int = 32
    # Override in every real deployment; keep out of source control.
    pbkdf2_pepper: SecretStr = SecretStr(DEFAULT_PBKDF2_PEPPER)

    # Logging
    log_level: str = "INFO"

    # Startup
    seed_demo_users: bool = False


def get_settings() -> AppSettings:
    """Return the application settings singleton."""
    return AppSettings()

"""
Registry mapping each :class:`PasswordAlgorithm` to its config and codec.

Built once at process start and never mutated afterwards, so concurrent
readers need no locking. Adding an algorithm means adding an enum member, a
config variant, a codec and one entry in :meth:`AlgorithmRegistry.from_settings`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from domain.exceptions import UnsupportedAlgorithmError
from domain.models.algorithm import AlgorithmConfig, BcryptConfig, Pbkdf2Config, ScryptConfig
from domain.models.credential import PasswordAlgorithm
from infrastructure.auth.password_codecs import CredentialCodec, create_codec

if TYPE_CHECKING:
    from infrastructure.settings import AppSettings

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Read-only lookup from algorithm tag to :class:`CredentialCodec`."""

    def __init__(self, configs: Iterable[AlgorithmConfig]) -> None:
        codecs: dict[PasswordAlgorithm, CredentialCodec] = {}
        for config in configs:
            if config.algorithm in codecs:
                raise ValueError(f"Duplicate config for {config.algorithm.value}")
            codecs[config.algorithm] = create_codec(config)

        missing = [tag.value for tag in PasswordAlgorithm if tag not in codecs]
        if missing:
            raise ValueError(f"No config registered for: {', '.join(missing)}")

        self._codecs: Mapping[PasswordAlgorithm, CredentialCodec] = MappingProxyType(codecs)
        logger.info(
            "Algorithm registry initialised with %s",
            ", ".join(tag.value for tag in self._codecs),
        )

    @classmethod
    def default(cls) -> AlgorithmRegistry:
        """Registry with the built-in parameter sets and the development pepper."""
        return cls([BcryptConfig(), ScryptConfig(), Pbkdf2Config()])

    @classmethod
    def from_settings(cls, settings: AppSettings) -> AlgorithmRegistry:
        return cls(
            [
                BcryptConfig(cost=settings.bcrypt_cost),
                ScryptConfig(
                    n=settings.scrypt_n,
                    r=settings.scrypt_r,
                    p=settings.scrypt_p,
                    key_length=settings.scrypt_key_length,
                    salt_length=settings.scrypt_salt_length,
                ),
                Pbkdf2Config(
                    iterations=settings.pbkdf2_iterations,
                    salt_length=settings.pbkdf2_salt_length,
                    key_length=settings.pbkdf2_key_length,
                    pepper=settings.pbkdf2_pepper.get_secret_value(),
                ),
            ]
        )

    @staticmethod
    def _coerce(tag: PasswordAlgorithm | str) -> PasswordAlgorithm:
        if isinstance(tag, PasswordAlgorithm):
            return tag
        try:
            return PasswordAlgorithm.from_name(tag)
        except (AttributeError, ValueError) as exc:
            raise UnsupportedAlgorithmError(str(tag)) from exc

    def resolve(self, tag: PasswordAlgorithm | str) -> CredentialCodec:
        """
        Return the codec for *tag*.

        String tags are matched case-insensitively. Anything outside the
        closed set raises :class:`UnsupportedAlgorithmError`.
        """
        algorithm = self._coerce(tag)
        try:
            return self._codecs[algorithm]
        except KeyError as exc:
            raise UnsupportedAlgorithmError(algorithm.value) from exc

    def config_for(self, tag: PasswordAlgorithm | str) -> AlgorithmConfig:
        return self.resolve(tag).config

    @property
    def algorithms(self) -> tuple[PasswordAlgorithm, ...]:
        return tuple(self._codecs)

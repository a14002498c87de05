"""Ad-hoc hashing workbench: encode text and check matches by algorithm name.

Nothing here touches the credential store. Names such as ``"bcrypt"`` or
``"PBKDF2"`` are resolved case-insensitively through the registry.
"""

from __future__ import annotations

import logging

from infrastructure.auth.algorithm_registry import AlgorithmRegistry

logger = logging.getLogger(__name__)


class HashingService:
    def __init__(self, registry: AlgorithmRegistry) -> None:
        self._registry = registry

    def encode(self, plain_text: str, algorithm_name: str) -> str:
        return self._registry.resolve(algorithm_name).encode(plain_text)

    def matches(self, plain_text: str, stored_hash: str, algorithm_name: str) -> bool:
        codec = self._registry.resolve(algorithm_name)
        result = codec.verify(plain_text, stored_hash)
        logger.debug("Workbench %s match check: %s", codec.algorithm.value, result)
        return result

"""
Prometheus metrics for credential hashing and authentication.

Metrics are module-level singletons registered on the default registry so a
host process can expose them with ``prometheus_client.start_http_server``
or ``generate_latest`` without further wiring.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import REGISTRY, Counter, Histogram

# ======================================================================
# Custom metrics (module-level singletons)
# ======================================================================

authentication_attempts_total = Counter(
    "authentication_attempts_total",
    "Total authentication attempts by stored algorithm and outcome",
    labelnames=["algorithm", "outcome"],
    registry=REGISTRY,
)

credential_kdf_duration_seconds = Histogram(
    "credential_kdf_duration_seconds",
    "Time spent inside a key-derivation function",
    labelnames=["algorithm", "operation"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=REGISTRY,
)


# ======================================================================
# Helpers
# ======================================================================


def record_attempt(algorithm: str, outcome: str) -> None:
    """Count one authentication attempt.

    *algorithm* is ``"unknown"`` when no record was found.
    """
    authentication_attempts_total.labels(algorithm=algorithm, outcome=outcome).inc()


@contextmanager
def time_kdf(algorithm: str, operation: str) -> Iterator[None]:
    """Observe the wall-clock duration of one encode or verify call."""
    start = time.perf_counter()
    try:
        yield
    finally:
        credential_kdf_duration_seconds.labels(
            algorithm=algorithm, operation=operation
        ).observe(time.perf_counter() - start)

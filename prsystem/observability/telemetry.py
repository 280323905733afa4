"""
In-process telemetry helpers.

Nothing is shipped to an external metrics backend; events go to the log and
counters/latencies stay in memory so tests can assert instrumentation.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("prsystem.telemetry")

_COUNTERS: dict[str, int] = {}
_LATENCIES: dict[str, list[float]] = {}


def _latency_name(metric_name: str) -> str:
    return metric_name if metric_name.endswith("_ms") else f"{metric_name}_ms"


def log_event(event_name: str, **fields: Any) -> None:
    """
    Structured log event. Caller must keep PII out of ``fields``.

    Side Effects:
        - Writes to logger (info level)
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Increment an in-memory counter and emit a debug log.

    Side Effects:
        - Modifies _COUNTERS dict (in-memory state)
    """
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counter(name: str) -> int:
    return _COUNTERS.get(name, 0)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Time a code block and record the latency in milliseconds under
    ``<metric_name>_ms``.

    Side Effects:
        - Appends to _LATENCIES dict (in-memory state)
    """
    name = _latency_name(metric_name)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug("timing=%s ms=%.3f", name, elapsed_ms)
        _LATENCIES.setdefault(name, []).append(elapsed_ms)


def get_latency_stats() -> dict[str, dict[str, float]]:
    """Count, average, p95 and max (milliseconds) for every timed metric."""
    stats: dict[str, dict[str, float]] = {}
    for name, samples in _LATENCIES.items():
        ordered = sorted(samples)
        count = len(ordered)
        stats[name] = {
            "count": count,
            "avg": sum(ordered) / count,
            "p95": ordered[min(int(count * 0.95), count - 1)],
            "max": ordered[-1],
        }
    return stats


def reset() -> None:
    """Clear counters and latencies (tests)."""
    _COUNTERS.clear()
    _LATENCIES.clear()

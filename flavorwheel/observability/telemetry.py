"""
In-process telemetry for the wheel service.

Events are written to the log; counters and latency samples stay in memory
so the health endpoint and tests can read them back. No external metrics
backend is involved.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections import defaultdict
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("flavorwheel.telemetry")

_lock = threading.Lock()
_counts: defaultdict[str, int] = defaultdict(int)
_samples: defaultdict[str, list[float]] = defaultdict(list)

_NO_SAMPLES: dict[str, float] = {
    "count": 0,
    "min": 0.0,
    "max": 0.0,
    "avg": 0.0,
    "p50": 0.0,
    "p95": 0.0,
}


def _metric_key(name: str) -> str:
    # "wheel.generate.latency" and "wheel.generate.latency_ms" are one series
    return f"{name}_ms" if name.endswith(".latency") else name


def _percentile(ordered: list[float], fraction: float) -> float:
    return ordered[min(int(len(ordered) * fraction), len(ordered) - 1)]


def log_event(event_name: str, **fields: Any) -> None:
    """
    Log a structured event. Fields must not carry descriptor text or user ids
    beyond what is already in the request scope.

    Side Effects:
        - Writes to logger (info level)
    """
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    """
    Bump a named counter, returning the new total.

    Side Effects:
        - Updates the in-memory counter table
        - Writes to logger (debug level)
    """
    with _lock:
        _counts[name] += increment
        total = _counts[name]
    logger.debug("counter=%s value=%s", name, total)
    return total


def get_counter(name: str) -> int:
    with _lock:
        return _counts.get(name, 0)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Record how long the wrapped block took, in seconds, even if it raises.

    Side Effects:
        - Appends a latency sample
        - Writes to logger (debug level)
    """
    key = _metric_key(metric_name)
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - started
        with _lock:
            _samples[key].append(elapsed)
        logger.debug("timing=%s seconds=%.6f", key, elapsed)


def _sorted_samples(metric_name: str) -> list[float]:
    with _lock:
        return sorted(_samples.get(_metric_key(metric_name), ()))


def get_p95(metric_name: str) -> float:
    """95th percentile latency in seconds, 0.0 when nothing was recorded."""
    ordered = _sorted_samples(metric_name)
    return _percentile(ordered, 0.95) if ordered else 0.0


def get_latency_stats(metric_name: str) -> dict[str, float]:
    ordered = _sorted_samples(metric_name)
    if not ordered:
        return dict(_NO_SAMPLES)

    return {
        "count": len(ordered),
        "min": ordered[0],
        "max": ordered[-1],
        "avg": sum(ordered) / len(ordered),
        "p50": _percentile(ordered, 0.50),
        "p95": _percentile(ordered, 0.95),
    }


def reset_latencies() -> None:
    """
    Forget every latency sample and counter. Tests call this between cases.

    Side Effects:
        - Clears the in-memory counter and latency tables
    """
    with _lock:
        _samples.clear()
        _counts.clear()

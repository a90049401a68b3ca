"""Process-wide engine metrics: counters, timers and a summary log line."""

import threading
import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")

# Counters the engine increments.
ENGINE_COUNTERS = ("achievements_unlocked", "level_ups", "patterns_detected", "plans_generated")


class Metrics:
    """Thread-safe counters and timers."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def get(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Time the wrapped block and record its duration in seconds."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            with self._lock:
                self._timers.setdefault(name, []).append(duration)

    def summary(self) -> dict[str, Any]:
        with self._lock:
            counters = {name: self._counters.get(name, 0) for name in ENGINE_COUNTERS}
            counters.update(self._counters)
            timers = {
                name: {
                    "count": len(d),
                    "total": sum(d),
                    "avg": sum(d) / len(d),
                    "max": max(d),
                }
                for name, d in self._timers.items()
                if d
            }
        return {"counters": counters, "timers": timers}

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timers.clear()


metrics = Metrics()


def log_run_summary(**context):
    """Emit the current metrics as a single ``run_summary`` event."""
    logger.info("run_summary", **context, **metrics.summary())

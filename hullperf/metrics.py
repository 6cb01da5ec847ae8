"""
Pipeline Metrics Module.

Collects timings and counters for the training pipeline and the
prediction entry point:
- Timing of each training stage
- Row counters (consolidated, skipped, training rows)
- Gauges for the latest trained snapshot (fleet baseline, vessels)

Usage:
    from hullperf.metrics import metrics, timed

    @timed("train_model")
    def train_model():
        ...

    with metrics.timer("consolidation"):
        records = consolidate(events, consumption)

    metrics.increment("suggestions_served")
    summary = metrics.get_summary()
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from threading import Lock
from typing import Callable, Dict, Optional
from collections import deque

logger = logging.getLogger(__name__)


@dataclass
class TimingStats:
    """Statistics for a timed operation."""
    name: str
    count: int = 0
    total_ms: float = 0.0
    min_ms: float = float('inf')
    max_ms: float = 0.0
    recent_ms: deque = field(default_factory=lambda: deque(maxlen=50))

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.count if self.count > 0 else 0.0

    @property
    def last_ms(self) -> float:
        return self.recent_ms[-1] if self.recent_ms else 0.0

    def record(self, duration_ms: float):
        """Record a timing measurement."""
        self.count += 1
        self.total_ms += duration_ms
        self.min_ms = min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)
        self.recent_ms.append(duration_ms)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "avg_ms": round(self.avg_ms, 3),
            "min_ms": round(self.min_ms, 3) if self.min_ms != float('inf') else 0,
            "max_ms": round(self.max_ms, 3),
            "last_ms": round(self.last_ms, 3),
        }


class PerformanceMetrics:
    """
    Thread-safe metrics collector.

    Prediction calls run concurrently against a shared snapshot, so
    counters and timings are updated under a lock.
    """

    # Training stages slower than this are logged as warnings (ms)
    SLOW_THRESHOLD_MS = 5000.0

    def __init__(self, slow_threshold_ms: Optional[float] = None):
        self._timings: Dict[str, TimingStats] = {}
        self._counters: Dict[str, int] = {}
        self._gauges: Dict[str, float] = {}
        self._lock = Lock()
        self._start_time = datetime.now()
        self.slow_threshold_ms = slow_threshold_ms or self.SLOW_THRESHOLD_MS

    @contextmanager
    def timer(self, name: str):
        """Context manager for timing a block of code."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._record_timing(name, elapsed_ms)

    def _record_timing(self, name: str, elapsed_ms: float):
        with self._lock:
            if name not in self._timings:
                self._timings[name] = TimingStats(name=name)
            self._timings[name].record(elapsed_ms)

        if elapsed_ms > self.slow_threshold_ms:
            logger.warning(
                f"Slow operation: {name} took {elapsed_ms:.1f}ms "
                f"(threshold: {self.slow_threshold_ms}ms)"
            )

    def increment(self, name: str, amount: int = 1):
        """Increment a counter."""
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + amount

    def set_gauge(self, name: str, value: float):
        """Set a gauge value."""
        with self._lock:
            self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def get_gauge(self, name: str) -> float:
        with self._lock:
            return self._gauges.get(name, 0.0)

    def get_timing(self, name: str) -> Optional[TimingStats]:
        with self._lock:
            return self._timings.get(name)

    def get_summary(self) -> dict:
        """Get complete metrics summary."""
        with self._lock:
            uptime = (datetime.now() - self._start_time).total_seconds()
            return {
                "uptime_seconds": round(uptime, 1),
                "timings": {
                    name: stats.to_dict()
                    for name, stats in self._timings.items()
                },
                "counters": self._counters.copy(),
                "gauges": {k: round(v, 4) for k, v in self._gauges.items()},
            }

    def log_summary(self):
        """Log the current summary at INFO level."""
        summary = self.get_summary()

        timing_str = ", ".join(
            f"{name}: {stats['last_ms']:.1f}ms"
            for name, stats in summary["timings"].items()
        )
        counter_str = ", ".join(
            f"{name}={value}"
            for name, value in summary["counters"].items()
        )

        logger.info(
            f"Pipeline metrics - "
            f"Timings: [{timing_str or 'none'}] | "
            f"Counters: [{counter_str or 'none'}]"
        )

    def reset(self):
        """Reset all metrics."""
        with self._lock:
            self._timings.clear()
            self._counters.clear()
            self._gauges.clear()
            self._start_time = datetime.now()


# Global metrics instance
metrics = PerformanceMetrics()


def timed(name: str):
    """
    Decorator to time a function.

    Usage:
        @timed("train_model")
        def train_model():
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            with metrics.timer(name):
                return func(*args, **kwargs)
        return wrapper
    return decorator


def get_metrics() -> PerformanceMetrics:
    """Get the global metrics instance."""
    return metrics

"""
Unit tests for Pipeline Metrics Module.

Tests timing, counters, gauges and the @timed decorator.
"""

import logging
import threading
import time

import pytest

from hullperf.metrics import (
    PerformanceMetrics,
    TimingStats,
    metrics,
    timed,
    get_metrics,
)


class TestTimingStats:
    """Unit tests for TimingStats class."""

    def test_initial_values(self):
        """Test initial stats values."""
        stats = TimingStats(name="consolidation")

        assert stats.name == "consolidation"
        assert stats.count == 0
        assert stats.total_ms == 0.0
        assert stats.min_ms == float('inf')
        assert stats.max_ms == 0.0
        assert stats.last_ms == 0.0

    def test_record_multiple(self):
        """Test recording multiple timings."""
        stats = TimingStats(name="regression")
        stats.record(5.0)
        stats.record(15.0)
        stats.record(10.0)

        assert stats.count == 3
        assert stats.total_ms == 30.0
        assert stats.min_ms == 5.0
        assert stats.max_ms == 15.0
        assert stats.avg_ms == 10.0
        assert stats.last_ms == 10.0

    def test_avg_ms_empty(self):
        """Test average with no recordings."""
        assert TimingStats(name="baseline").avg_ms == 0.0

    def test_to_dict(self):
        """Test conversion to dictionary."""
        stats = TimingStats(name="features")
        stats.record(5.0)
        stats.record(15.0)

        d = stats.to_dict()

        assert d["count"] == 2
        assert d["avg_ms"] == 10.0
        assert d["min_ms"] == 5.0
        assert d["max_ms"] == 15.0
        assert d["last_ms"] == 15.0

    def test_to_dict_empty(self):
        """Unrecorded min is reported as 0, not infinity."""
        assert TimingStats(name="x").to_dict()["min_ms"] == 0


class TestPerformanceMetrics:
    """Unit tests for PerformanceMetrics class."""

    @pytest.fixture
    def metrics_instance(self):
        """Create a fresh metrics instance for testing."""
        return PerformanceMetrics()

    def test_timer_context_manager(self, metrics_instance):
        """Test timer context manager."""
        with metrics_instance.timer("train_model"):
            time.sleep(0.01)  # 10ms

        timing = metrics_instance.get_timing("train_model")
        assert timing is not None
        assert timing.count == 1
        assert timing.avg_ms >= 10

    def test_timer_records_on_exception(self, metrics_instance):
        """A failing block is still timed."""
        with pytest.raises(ValueError):
            with metrics_instance.timer("load_exports"):
                raise ValueError("bad export")

        assert metrics_instance.get_timing("load_exports").count == 1

    def test_increment_counter(self, metrics_instance):
        """Test counter increment."""
        metrics_instance.increment("suggestions_served")
        metrics_instance.increment("suggestions_served")
        metrics_instance.increment("sessions_skipped", amount=5)

        assert metrics_instance.get_counter("suggestions_served") == 2
        assert metrics_instance.get_counter("sessions_skipped") == 5
        assert metrics_instance.get_counter("nonexistent") == 0

    def test_gauges(self, metrics_instance):
        """Test gauge setting and overwrite."""
        metrics_instance.set_gauge("fleet_cfi_clean", 30.0)
        metrics_instance.set_gauge("fleet_cfi_clean", 31.5)

        assert metrics_instance.get_gauge("fleet_cfi_clean") == 31.5
        assert metrics_instance.get_gauge("nonexistent") == 0.0

    def test_get_summary(self, metrics_instance):
        """Test summary retrieval."""
        metrics_instance.increment("training_runs")
        metrics_instance.set_gauge("vessels", 4)
        with metrics_instance.timer("regression"):
            pass

        summary = metrics_instance.get_summary()

        assert "uptime_seconds" in summary
        assert summary["counters"] == {"training_runs": 1}
        assert summary["gauges"] == {"vessels": 4}
        assert summary["timings"]["regression"]["count"] == 1

    def test_slow_operation_logged(self, caplog):
        """Operations above the threshold produce a warning."""
        m = PerformanceMetrics(slow_threshold_ms=1.0)
        with caplog.at_level(logging.WARNING, logger="hullperf.metrics"):
            with m.timer("train_model"):
                time.sleep(0.01)

        assert "Slow operation: train_model" in caplog.text

    def test_log_summary(self, metrics_instance, caplog):
        metrics_instance.increment("training_runs")
        with caplog.at_level(logging.INFO, logger="hullperf.metrics"):
            metrics_instance.log_summary()

        assert "training_runs=1" in caplog.text

    def test_reset(self, metrics_instance):
        """Test metrics reset."""
        metrics_instance.increment("counter")
        metrics_instance.set_gauge("gauge", 42.0)
        with metrics_instance.timer("operation"):
            pass

        metrics_instance.reset()

        summary = metrics_instance.get_summary()
        assert summary["timings"] == {}
        assert summary["counters"] == {}
        assert summary["gauges"] == {}


class TestTimedDecorator:
    """Test the @timed decorator."""

    def test_timed_decorator(self):
        """Test @timed decorator records timing and keeps the return value."""
        @timed("decorated_function")
        def sample_function():
            return {"key": "value"}

        assert sample_function() == {"key": "value"}

        timing = metrics.get_timing("decorated_function")
        assert timing is not None
        assert timing.count == 1

    def test_timed_decorator_multiple_calls(self):
        """Test decorator with multiple function calls."""
        @timed("multi_call")
        def multi_function():
            pass

        for _ in range(5):
            multi_function()

        assert metrics.get_timing("multi_call").count == 5

    def test_preserves_metadata(self):
        @timed("named")
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestGlobalMetrics:
    """Test global metrics instance."""

    def test_get_metrics_returns_same_instance(self):
        """Test get_metrics returns global instance."""
        assert isinstance(metrics, PerformanceMetrics)
        assert get_metrics() is metrics


class TestThreadSafety:
    """Test thread safety of metrics."""

    def test_concurrent_increments(self):
        """Test concurrent counter increments."""
        m = PerformanceMetrics()
        iterations = 100
        threads = 4

        def increment_counter():
            for _ in range(iterations):
                m.increment("suggestions_served")

        thread_list = [threading.Thread(target=increment_counter) for _ in range(threads)]
        for t in thread_list:
            t.start()
        for t in thread_list:
            t.join()

        assert m.get_counter("suggestions_served") == iterations * threads

    def test_concurrent_timers(self):
        """Test concurrent timer usage."""
        m = PerformanceMetrics()

        def use_timer():
            for _ in range(10):
                with m.timer("concurrent_timer"):
                    time.sleep(0.001)

        threads = [threading.Thread(target=use_timer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert m.get_timing("concurrent_timer").count == 40

"""Prometheus-style metrics collector. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from typing import Any


class MetricsCollector:
    """
    In-memory Prometheus-style registry for repository counters and query latencies.
    Thread-safe. Exposes increment, observe_latency, export_metrics.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # Counters: name -> value or name -> {label key -> value}
        self._counters: dict[str, float] = {}
        self._counters_by_labels: dict[str, dict[str, float]] = {}
        # Histograms: name -> list of observed values (for latency)
        self._histograms: dict[str, list[float]] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        index: str | None = None,
        event_name: str | None = None,
    ) -> None:
        """Increment a counter. Optional index or event_name label for dimensional metrics."""
        with self._lock:
            if index is not None:
                key = f"{name}:index={index}"
            elif event_name is not None:
                key = f"{name}:event={event_name}"
            else:
                self._counters[name] = self._counters.get(name, 0) + value
                return
            labels = self._counters_by_labels.setdefault(name, {})
            labels[key] = labels.get(key, 0) + value

    def observe_latency(
        self,
        name: str,
        latency_ms: float,
        *,
        index: str | None = None,
    ) -> None:
        """Record a latency observation (histogram-style). Optional index label."""
        with self._lock:
            bucket = name if index is None else f"{name}:index={index}"
            self._histograms.setdefault(bucket, []).append(latency_ms)

    def counter_total(self, name: str) -> float:
        """Sum of a counter across all of its labels."""
        with self._lock:
            total = self._counters.get(name, 0)
            total += sum(self._counters_by_labels.get(name, {}).values())
            return total

    def export_metrics(self) -> dict[str, Any]:
        """Export all metrics as a dict (simulated Prometheus-style)."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {
                    k: dict(v) for k, v in self._counters_by_labels.items()
                },
                "histograms": {
                    k: {
                        "count": len(v),
                        "sum": sum(v),
                        "values": list(v),
                    }
                    for k, v in self._histograms.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_labels.clear()
            self._histograms.clear()

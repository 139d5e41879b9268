"""Metrics collection for the assistants MCP server.

Prometheus-compatible counters and histograms, exported as text by the HTTP
transport on GET /metrics. A collector is owned by the ServerContext rather
than held in a module global.

Example:
    >>> collector = MetricsCollector()
    >>> collector.increment_counter("mcp_requests_total", {"method": "tools/list", "status": "ok"})
    >>> collector.observe_histogram("mcp_request_duration_seconds", 0.004, {"method": "tools/list"})
    >>> "mcp_requests_total" in collector.export_prometheus()
    True
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import ClassVar

LabelKey = tuple[tuple[str, str], ...]

DEFAULT_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


@dataclass
class Counter:
    """A monotonically increasing counter metric."""

    name: str
    help_text: str
    values: dict[LabelKey, float] = field(default_factory=dict)

    def increment(self, labels: dict[str, str] | None = None, value: float = 1.0) -> None:
        key = _label_key(labels)
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, labels: dict[str, str] | None = None) -> float:
        return self.values.get(_label_key(labels), 0.0)


@dataclass
class _HistogramSeries:
    buckets: dict[float, float]
    total: float = 0.0
    count: float = 0.0


@dataclass
class Histogram:
    """A histogram metric for measuring distributions (e.g. latency)."""

    name: str
    help_text: str
    buckets: tuple[float, ...] = DEFAULT_LATENCY_BUCKETS
    values: dict[LabelKey, _HistogramSeries] = field(default_factory=dict)

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        key = _label_key(labels)
        series = self.values.get(key)
        if series is None:
            series = _HistogramSeries(buckets=dict.fromkeys(self.buckets, 0.0))
            self.values[key] = series
        for bound in self.buckets:
            if value <= bound:
                series.buckets[bound] += 1.0
                break
        series.total += value
        series.count += 1.0

    def get_count(self, labels: dict[str, str] | None = None) -> float:
        series = self.values.get(_label_key(labels))
        return series.count if series is not None else 0.0


class MetricsCollector:
    """Collects and exports metrics in Prometheus format.

    Thread-safe: uvicorn may serve the HTTP transport from several threads.
    """

    DEFAULT_COUNTERS: ClassVar[dict[str, str]] = {
        "mcp_requests_total": "Total number of JSON-RPC requests handled",
        "mcp_tool_calls_total": "Total number of tool executions",
        "mcp_parse_errors_total": "Total number of JSON-RPC parse errors",
        "mcp_notifications_total": "Total number of JSON-RPC notifications received",
    }

    DEFAULT_HISTOGRAMS: ClassVar[dict[str, str]] = {
        "mcp_request_duration_seconds": "Request processing duration in seconds",
        "mcp_tool_duration_seconds": "Tool execution duration in seconds",
    }

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters = {
            name: Counter(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_COUNTERS.items()
        }
        self._histograms = {
            name: Histogram(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_HISTOGRAMS.items()
        }
        self._start_time = time.time()

    def increment_counter(
        self, name: str, labels: dict[str, str] | None = None, value: float = 1.0
    ) -> None:
        with self._lock:
            if name in self._counters:
                self._counters[name].increment(labels, value)

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            if name in self._histograms:
                self._histograms[name].observe(value, labels)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            counter = self._counters.get(name)
            return counter.get(labels) if counter is not None else 0.0

    def get_histogram_count(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            histogram = self._histograms.get(name)
            return histogram.get_count(labels) if histogram is not None else 0.0

    @staticmethod
    def _format_labels(labels: LabelKey, extra: str = "") -> str:
        parts = [
            '{}="{}"'.format(k, v.replace("\\", "\\\\").replace('"', '\\"')) for k, v in labels
        ]
        if extra:
            parts.append(extra)
        return "{" + ",".join(parts) + "}" if parts else ""

    def export_prometheus(self) -> str:
        """Export all metrics in Prometheus text exposition format."""
        lines: list[str] = []

        with self._lock:
            for counter in self._counters.values():
                lines.append(f"# HELP {counter.name} {counter.help_text}")
                lines.append(f"# TYPE {counter.name} counter")
                if not counter.values:
                    lines.append(f"{counter.name} 0")
                for key, value in counter.values.items():
                    lines.append(f"{counter.name}{self._format_labels(key)} {value}")

            for histogram in self._histograms.values():
                lines.append(f"# HELP {histogram.name} {histogram.help_text}")
                lines.append(f"# TYPE {histogram.name} histogram")
                for key, series in histogram.values.items():
                    cumulative = 0.0
                    for bound in histogram.buckets:
                        cumulative += series.buckets[bound]
                        labels = self._format_labels(key, f'le="{bound}"')
                        lines.append(f"{histogram.name}_bucket{labels} {cumulative}")
                    labels = self._format_labels(key, 'le="+Inf"')
                    lines.append(f"{histogram.name}_bucket{labels} {series.count}")
                    lines.append(f"{histogram.name}_sum{self._format_labels(key)} {series.total}")
                    lines.append(f"{histogram.name}_count{self._format_labels(key)} {series.count}")

            uptime = time.time() - self._start_time
            lines.append("# HELP mcp_process_uptime_seconds Time since server start")
            lines.append("# TYPE mcp_process_uptime_seconds gauge")
            lines.append(f"mcp_process_uptime_seconds {uptime:.3f}")

        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Reset all metrics to zero."""
        with self._lock:
            for counter in self._counters.values():
                counter.values.clear()
            for histogram in self._histograms.values():
                histogram.values.clear()

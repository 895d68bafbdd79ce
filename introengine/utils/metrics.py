"""
Prometheus Metrics Collector

In-process counters and histograms for the engines and the HTTP boundary.
Renders the Prometheus text exposition format (text/plain; version=0.0.4).
"""
import time
import threading
from typing import Dict, List, Optional
from dataclasses import dataclass, field


@dataclass
class MetricValue:
    """Single sample with its labels."""
    value: float
    labels: Dict[str, str] = field(default_factory=dict)


class _LabeledMetric:
    """Shared label handling for all metric kinds."""

    kind = "untyped"

    def __init__(self, name: str, description: str, labels: Optional[List[str]] = None):
        self.name = name
        self.description = description
        self.label_names = labels or []
        self._lock = threading.Lock()

    @staticmethod
    def _label_key(labels: Dict[str, str]) -> tuple:
        return tuple(sorted(labels.items()))


class Counter(_LabeledMetric):
    """Monotonic counter (engine calls, routes found, requests)."""

    kind = "counter"

    def __init__(self, name: str, description: str, labels: Optional[List[str]] = None):
        super().__init__(name, description, labels)
        self._values: Dict[tuple, float] = {}

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        """Increment counter by amount."""
        key = self._label_key(labels)
        with self._lock:
            self._values[key] = self._values.get(key, 0.0) + amount

    def get(self, **labels: str) -> float:
        """Current value for one label combination (0 if never incremented)."""
        with self._lock:
            return self._values.get(self._label_key(labels), 0.0)

    def collect(self) -> List[MetricValue]:
        with self._lock:
            return [MetricValue(value=v, labels=dict(k)) for k, v in self._values.items()]


class Histogram(_LabeledMetric):
    """
    Cumulative-bucket histogram.

    Buckets default to sub-second ranges since every engine is an
    in-memory computation.
    """

    kind = "histogram"
    DEFAULT_BUCKETS = (0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0)

    def __init__(
        self,
        name: str,
        description: str,
        labels: Optional[List[str]] = None,
        buckets: Optional[tuple] = None
    ):
        super().__init__(name, description, labels)
        self.buckets = tuple(sorted(buckets or self.DEFAULT_BUCKETS))
        self._values: Dict[tuple, Dict] = {}

    def observe(self, value: float, **labels: str) -> None:
        """Record an observation."""
        key = self._label_key(labels)
        with self._lock:
            data = self._values.setdefault(
                key, {"buckets": dict.fromkeys(self.buckets, 0), "sum": 0.0, "count": 0}
            )
            data["sum"] += value
            data["count"] += 1
            for bucket in self.buckets:
                if value <= bucket:
                    data["buckets"][bucket] += 1

    def count(self, **labels: str) -> int:
        with self._lock:
            data = self._values.get(self._label_key(labels))
            return data["count"] if data else 0

    def collect(self) -> List[MetricValue]:
        result = []
        with self._lock:
            for key, data in self._values.items():
                base = dict(key)
                for bucket in self.buckets:
                    result.append(MetricValue(data["buckets"][bucket], {**base, "le": str(bucket)}))
                result.append(MetricValue(data["count"], {**base, "le": "+Inf"}))
                result.append(MetricValue(data["sum"], {**base, "_metric": "sum"}))
                result.append(MetricValue(data["count"], {**base, "_metric": "count"}))
        return result


class Timer:
    """Context manager that records elapsed seconds into a histogram."""

    def __init__(self, histogram: Histogram, **labels: str):
        self.histogram = histogram
        self.labels = labels
        self.start_time: Optional[float] = None
        self.elapsed_ms: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        if self.start_time is not None:
            duration = time.perf_counter() - self.start_time
            self.elapsed_ms = duration * 1000
            self.histogram.observe(duration, **self.labels)


class MetricsRegistry:
    """
    Central registry for application metrics.

    Provides singleton access and Prometheus text format export.
    """

    _instance: Optional["MetricsRegistry"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "MetricsRegistry":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._metrics: Dict[str, Counter | Histogram] = {}
        self._initialized = True
        self._setup_metrics()

    def _setup_metrics(self) -> None:
        """Initialize all application metrics."""

        # ============================================
        # ENGINE METRICS
        # ============================================
        self.engine_calls = self.counter(
            "ie_engine_calls_total",
            "Total engine invocations by engine",
            ["engine"]
        )

        self.engine_duration = self.histogram(
            "ie_engine_duration_seconds",
            "Engine processing duration",
            ["engine"]
        )

        self.routes_found = self.counter(
            "ie_routes_total",
            "Intro routes surfaced by route type",
            ["route_type"]
        )

        # ============================================
        # REQUEST METRICS
        # ============================================
        self.requests_total = self.counter(
            "ie_requests_total",
            "Total HTTP requests by endpoint and status",
            ["endpoint", "status"]
        )

    def counter(self, name: str, description: str, labels: Optional[List[str]] = None) -> Counter:
        """Create and register a counter."""
        metric = Counter(name, description, labels)
        self._metrics[name] = metric
        return metric

    def histogram(
        self,
        name: str,
        description: str,
        labels: Optional[List[str]] = None,
        buckets: Optional[tuple] = None
    ) -> Histogram:
        """Create and register a histogram."""
        metric = Histogram(name, description, labels, buckets)
        self._metrics[name] = metric
        return metric

    def time_engine(self, engine: str) -> Timer:
        """Count one engine call and time it."""
        self.engine_calls.inc(engine=engine)
        return Timer(self.engine_duration, engine=engine)

    def export(self) -> str:
        """
        Export all metrics in Prometheus text exposition format.

        Format specification:
        https://prometheus.io/docs/instrumenting/exposition_formats/
        """
        lines = []

        for name, metric in self._metrics.items():
            lines.append(f"# HELP {name} {metric.description}")
            lines.append(f"# TYPE {name} {metric.kind}")

            for mv in metric.collect():
                labels = dict(mv.labels)
                metric_name = name
                if isinstance(metric, Histogram):
                    if "_metric" in labels:
                        metric_name = f"{name}_{labels.pop('_metric')}"
                    else:
                        metric_name = f"{name}_bucket"
                lines.append(f"{metric_name}{self._format_labels(labels)} {mv.value}")

            lines.append("")

        return "\n".join(lines)

    def _format_labels(self, labels: Dict[str, str]) -> str:
        if not labels:
            return ""
        parts = [f'{k}="{v}"' for k, v in sorted(labels.items())]
        return "{" + ",".join(parts) + "}"

    def reset(self) -> None:
        """Reset all metrics. Useful for testing."""
        self._metrics.clear()
        self._setup_metrics()


# Global metrics instance
metrics = MetricsRegistry()

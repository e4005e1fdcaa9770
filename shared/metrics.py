"""
Shared metrics configuration for the AR.IO gateway selector.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional
import time
import threading
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for the gateway selector."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up gateway selection metrics."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # Cache metrics
        self._metrics["cache_hits_total"] = Counter(
            "cache_hits_total",
            "Total cache hits",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["cache_misses_total"] = Counter(
            "cache_misses_total",
            "Total cache misses",
            ["cache_type"],
            registry=self.registry
        )

        # Registry metrics
        self._metrics["registry_fetch_total"] = Counter(
            "registry_fetch_total",
            "Total gateway registry fetches",
            ["status"],
            registry=self.registry
        )

        self._metrics["registry_fetch_duration_seconds"] = Histogram(
            "registry_fetch_duration_seconds",
            "Gateway registry fetch duration in seconds",
            registry=self.registry
        )

        # Liveness metrics
        self._metrics["gateway_probes_total"] = Counter(
            "gateway_probes_total",
            "Total gateway liveness probes",
            ["status"],
            registry=self.registry
        )

        # Selection metrics
        self._metrics["gateway_selections_total"] = Counter(
            "gateway_selections_total",
            "Total gateway selections",
            ["routing_method"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_cache_access(self, cache_type: str, hit: bool):
        """Record a cache hit or miss."""
        metric_name = "cache_hits_total" if hit else "cache_misses_total"
        self.increment_counter(metric_name, cache_type=cache_type)

    def record_probe(self, online: bool):
        """Record a liveness probe outcome."""
        self.increment_counter("gateway_probes_total", status="online" if online else "offline")

    def record_selection(self, routing_method: str):
        """Record a gateway selection."""
        self.increment_counter("gateway_selections_total", routing_method=routing_method)

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            if operation_name in self._metrics:
                metric = self._metrics[operation_name]
                if labels:
                    metric = metric.labels(**labels)
                metric.observe(duration)

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            with self._lock:
                self._metrics[metric_name].labels(**labels).inc()


_default_collectors: Dict[str, MetricsCollector] = {}
_default_collectors_lock = threading.Lock()


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service.

    Collectors on the default registry are created once per service.
    """
    if registry is not None:
        return MetricsCollector(service_name, registry)

    with _default_collectors_lock:
        if service_name not in _default_collectors:
            _default_collectors[service_name] = MetricsCollector(service_name)
        return _default_collectors[service_name]

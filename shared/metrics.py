"""
Shared metrics configuration for the Masa MCP service.
"""

import threading
from typing import Any, Dict, Optional

from prometheus_client import Counter, Histogram, CollectorRegistry, start_http_server


class MetricsCollector:
    """Prometheus metrics for API calls and cache activity.

    Each collector owns its registry unless one is passed in, so several
    collectors can coexist in one process (tests build their own).
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up the metrics exported by the service."""

        self._metrics["api_requests_total"] = Counter(
            "masa_api_requests_total",
            "Total Masa API requests by outcome",
            ["method", "path", "status"],
            registry=self.registry
        )

        self._metrics["api_request_duration_seconds"] = Histogram(
            "masa_api_request_duration_seconds",
            "Masa API request duration in seconds",
            ["method", "path"],
            registry=self.registry
        )

        self._metrics["api_retries_total"] = Counter(
            "masa_api_retries_total",
            "Total Masa API retries",
            ["reason"],
            registry=self.registry
        )

        self._metrics["cache_operations_total"] = Counter(
            "masa_cache_operations_total",
            "Cache lookups by region and result",
            ["region", "result"],
            registry=self.registry
        )

    def record_api_request(self, method: str, path: str, status: str, duration: float):
        """Record one completed (or failed) API request."""
        with self._lock:
            self._metrics["api_requests_total"].labels(
                method=method,
                path=path,
                status=status
            ).inc()
            self._metrics["api_request_duration_seconds"].labels(
                method=method,
                path=path
            ).observe(duration)

    def record_retry(self, reason: str):
        """Record a retry scheduled after a failure."""
        self._metrics["api_retries_total"].labels(reason=reason).inc()

    def record_cache_lookup(self, region: str, hit: bool):
        """Record a cache hit or miss."""
        self._metrics["cache_operations_total"].labels(
            region=region,
            result="hit" if hit else "miss"
        ).inc()

    def get_sample_value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read a sample back from the registry."""
        return self.registry.get_sample_value(name, labels or {})

    def start_exporter(self, port: int):
        """Expose the registry over HTTP for scraping."""
        start_http_server(port, registry=self.registry)

"""Prometheus adapter for the :class:`MeterRegistry` protocol."""

from __future__ import annotations

import threading
from typing import Any


def prometheus_name(name: str) -> str:
    """Translate a dotted metric name into a Prometheus metric name."""
    return name.replace(".", "_").replace("-", "_")


class PrometheusRegistry:
    """Forward metrics to ``prometheus_client``.

    Counters map to :class:`~prometheus_client.Counter` and timers to
    :class:`~prometheus_client.Summary` (observed in milliseconds).
    Metrics are created lazily; label names come from the tag keys of
    the first call for a given name.

    Args:
        registry: Collector registry to register metrics with.  Defaults
            to ``prometheus_client.REGISTRY``.
    """

    def __init__(self, registry: Any = None) -> None:
        import prometheus_client

        self._registry = registry if registry is not None else prometheus_client.REGISTRY
        self._lock = threading.Lock()
        self._counters: dict[str, Any] = {}
        self._summaries: dict[str, Any] = {}

    def counter(
        self,
        name: str,
        value: float = 1.0,
        tags: dict[str, str] | None = None,
    ) -> None:
        metric = self._get_or_create(self._counters, "Counter", name, tags)
        (metric.labels(**tags) if tags else metric).inc(value)

    def timer(
        self,
        name: str,
        duration_ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        metric = self._get_or_create(self._summaries, "Summary", name, tags)
        (metric.labels(**tags) if tags else metric).observe(duration_ms)

    def get_metrics(self) -> dict[str, Any]:
        """Return registered metric names grouped by kind."""
        with self._lock:
            return {
                "counters": list(self._counters.keys()),
                "timers": list(self._summaries.keys()),
            }

    def _get_or_create(self, cache: dict[str, Any], kind: str, name: str, tags: dict[str, str] | None) -> Any:
        with self._lock:
            if name not in cache:
                import prometheus_client

                metric_cls = getattr(prometheus_client, kind)
                label_names = sorted(tags.keys()) if tags else []
                cache[name] = metric_cls(
                    prometheus_name(name), f"{kind} {name}", label_names, registry=self._registry
                )
            return cache[name]

"""Metrics collection and export."""

from ksm_notation.core.metrics.exporters import PrometheusRegistry
from ksm_notation.core.metrics.registry import InMemoryRegistry, MeterRegistry, ResolverMetric

__all__ = [
    "InMemoryRegistry",
    "MeterRegistry",
    "PrometheusRegistry",
    "ResolverMetric",
]

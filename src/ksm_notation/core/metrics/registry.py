"""Meter registry protocol and in-memory implementation.

The resolver records a small fixed set of metrics, named in
:class:`ResolverMetric`.  Values are never used as tags; tags only
carry outcome labels such as ``kind`` or ``status``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

TagSet = tuple[tuple[str, str], ...]


class ResolverMetric(str, Enum):
    """Metric names emitted by the notation resolver."""

    FIELD_RESOLVED = "ksm.field.resolved"
    VALIDATION_REJECTED = "ksm.validation.rejected"
    RECORD_FETCHED = "ksm.record.fetched"
    FIELD_DURATION = "ksm.field.duration"


@runtime_checkable
class MeterRegistry(Protocol):
    """What the resolver needs from a metrics backend.

    Implementations are shared between threads.
    """

    def counter(self, name: str, value: float = 1.0, tags: dict[str, str] | None = None) -> None:
        """Add *value* to counter *name* (e.g. ``"ksm.field.resolved"``)."""
        ...

    def timer(self, name: str, duration_ms: float, tags: dict[str, str] | None = None) -> None:
        """Observe one duration in milliseconds."""
        ...

    def get_metrics(self) -> dict[str, Any]:
        ...


def tag_set(tags: dict[str, str] | None) -> TagSet:
    """Order-independent, hashable form of *tags*."""
    return tuple(sorted((tags or {}).items()))


def _label(tags: TagSet) -> str:
    return ",".join(f"{k}={v}" for k, v in tags)


@dataclass
class _Summary:
    count: int = 0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0

    def observe(self, duration_ms: float) -> None:
        if self.count == 0:
            self.min_ms = self.max_ms = duration_ms
        else:
            self.min_ms = min(self.min_ms, duration_ms)
            self.max_ms = max(self.max_ms, duration_ms)
        self.count += 1
        self.total_ms += duration_ms

    def as_dict(self) -> dict[str, Any]:
        return {"count": self.count, "total_ms": self.total_ms, "min_ms": self.min_ms, "max_ms": self.max_ms}


class InMemoryRegistry:
    """Thread-safe in-memory metrics registry.

    Default registry when no backend is configured.  Each series is
    identified by its name plus its tag set; :meth:`get_metrics` renders
    tag sets as ``k=v`` labels joined by commas (``""`` when untagged).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[tuple[str, TagSet], float] = {}
        self._timers: dict[tuple[str, TagSet], _Summary] = {}

    def counter(self, name: str, value: float = 1.0, tags: dict[str, str] | None = None) -> None:
        series = (name, tag_set(tags))
        with self._lock:
            self._counters[series] = self._counters.get(series, 0.0) + value

    def timer(self, name: str, duration_ms: float, tags: dict[str, str] | None = None) -> None:
        series = (name, tag_set(tags))
        with self._lock:
            summary = self._timers.get(series)
            if summary is None:
                summary = self._timers[series] = _Summary()
            summary.observe(duration_ms)

    def get_metrics(self) -> dict[str, Any]:
        """Return ``{"counters": {name: {label: value}}, "timers": {name: {label: summary}}}``."""
        counters: dict[str, dict[str, float]] = {}
        timers: dict[str, dict[str, dict[str, Any]]] = {}
        with self._lock:
            for (name, tags), value in self._counters.items():
                counters.setdefault(name, {})[_label(tags)] = value
            for (name, tags), summary in self._timers.items():
                timers.setdefault(name, {})[_label(tags)] = summary.as_dict()
        return {"counters": counters, "timers": timers}

    def get_counter(self, name: str, tags: dict[str, str] | None = None) -> float:
        """Current value of one series, ``0.0`` if it was never incremented."""
        with self._lock:
            return self._counters.get((name, tag_set(tags)), 0.0)

    def get_counter_total(self, name: str) -> float:
        """Sum of a counter across all of its tag sets."""
        with self._lock:
            return sum(value for (series, _), value in self._counters.items() if series == name)

    def get_timer_count(self, name: str, tags: dict[str, str] | None = None) -> int:
        with self._lock:
            summary = self._timers.get((name, tag_set(tags)))
        return summary.count if summary else 0

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timers.clear()

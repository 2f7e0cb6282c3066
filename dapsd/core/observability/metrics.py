"""
Metrics — lightweight in-process counters.

No external dependencies. Enough to see how many requests were
served, rejected or flagged as traversal attempts, exported as JSON
by the ``/api/metrics`` endpoint.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Counter:
    """Monotonically increasing counter."""

    name: str
    value: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def inc(self, n: int = 1) -> None:
        with self._lock:
            self.value += n

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": "counter", "value": self.value, "labels": self.labels}


def _key(name: str, labels: dict[str, str]) -> str:
    return f"{name}:{sorted(labels.items())}" if labels else name


class MetricsRegistry:
    """Central registry for all counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, Counter] = {}

    def counter(self, name: str, **labels: str) -> Counter:
        """Get or create a counter."""
        key = _key(name, labels)
        with self._lock:
            if key not in self._counters:
                self._counters[key] = Counter(name=name, labels=labels)
            return self._counters[key]

    def value(self, name: str, **labels: str) -> int:
        """Current value of a counter (0 if it was never touched)."""
        key = _key(name, labels)
        with self._lock:
            counter = self._counters.get(key)
        return counter.value if counter is not None else 0

    def to_dict(self) -> dict[str, list[dict]]:
        with self._lock:
            counters = list(self._counters.values())
        return {"counters": [c.to_dict() for c in counters]}

    def reset(self) -> None:
        """Clear all metrics."""
        with self._lock:
            self._counters.clear()

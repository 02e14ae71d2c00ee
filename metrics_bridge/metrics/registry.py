"""Simple in-memory metrics registry."""
from __future__ import annotations

from threading import Lock
from typing import List, MutableMapping, Tuple


class MetricsRegistry:
    """Thread-safe mapping of metric names to metric objects."""

    def __init__(self) -> None:
        self._metrics: MutableMapping[str, object] = {}
        self._lock = Lock()

    def register(self, name: str, metric: object) -> None:
        with self._lock:
            self._metrics[name] = metric

    def get(self, name: str) -> object | None:
        with self._lock:
            return self._metrics.get(name)

    def unregister(self, name: str) -> None:
        with self._lock:
            self._metrics.pop(name, None)

    def unregister_all(self) -> None:
        with self._lock:
            self._metrics.clear()

    def items(self) -> List[Tuple[str, object]]:
        """Return a point-in-time copy of all ``(name, metric)`` pairs."""

        with self._lock:
            return list(self._metrics.items())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._metrics

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)

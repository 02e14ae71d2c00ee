"""Tag-aware facade over the in-memory metrics registry."""
from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Mapping, Tuple

from metrics_bridge.metrics.base import Counter
from metrics_bridge.metrics.registry import MetricsRegistry

DELTA_PREFIX = "∆"
ALT_DELTA_PREFIX = "Δ"


def delta_counter_name(name: str) -> str:
    """Return ``name`` marked so its counter is reported as a delta."""

    if has_delta_prefix(name):
        return name
    return DELTA_PREFIX + name


def has_delta_prefix(name: str) -> bool:
    return name.startswith((DELTA_PREFIX, ALT_DELTA_PREFIX))


def strip_delta_prefix(name: str) -> str:
    if has_delta_prefix(name):
        return name[1:]
    return name


@dataclass(frozen=True)
class RegistrationEntry:
    """Metadata recorded for a name at registration time."""

    name: str
    base_name: str
    tags: Mapping[str, str] = field(default_factory=dict)
    delta: bool = False
    initial_count: int = 0

    @classmethod
    def for_name(
        cls,
        name: str,
        tags: Mapping[str, str] | None = None,
        metric: object | None = None,
    ) -> "RegistrationEntry":
        delta = has_delta_prefix(name)
        initial_count = metric.count if delta and isinstance(metric, Counter) else 0
        return cls(
            name=name,
            base_name=strip_delta_prefix(name),
            tags=dict(tags or {}),
            delta=delta,
            initial_count=initial_count,
        )


class TaggedRegistry:
    """Registry facade that keeps a tag overlay keyed by metric name."""

    def __init__(self, metrics: MetricsRegistry | None = None) -> None:
        self.metrics = metrics if metrics is not None else MetricsRegistry()
        self._entries: Dict[str, RegistrationEntry] = {}
        self._lock = Lock()

    def register(self, name: str, metric: object, tags: Mapping[str, str] | None = None) -> None:
        entry = RegistrationEntry.for_name(name, tags, metric)
        with self._lock:
            self.metrics.register(name, metric)
            self._entries[name] = entry

    def get(self, name: str) -> object | None:
        return self.metrics.get(name)

    def unregister(self, name: str) -> None:
        with self._lock:
            self.metrics.unregister(name)
            self._entries.pop(name, None)

    def unregister_all(self) -> None:
        with self._lock:
            self.metrics.unregister_all()
            self._entries.clear()

    def tags_for(self, name: str) -> Dict[str, str]:
        with self._lock:
            entry = self._entries.get(name)
        return dict(entry.tags) if entry is not None else {}

    def entry_for(self, name: str) -> RegistrationEntry:
        """Return the stored entry, or one derived from the bare name."""

        with self._lock:
            entry = self._entries.get(name)
        return entry if entry is not None else RegistrationEntry.for_name(name)

    def items(self) -> List[Tuple[str, object]]:
        return self.metrics.items()


default_registry = TaggedRegistry()


def register_metric(name: str, metric: object, tags: Mapping[str, str] | None = None) -> None:
    default_registry.register(name, metric, tags)


def get_metric(name: str) -> object | None:
    return default_registry.get(name)


def unregister_metric(name: str) -> None:
    default_registry.unregister(name)

"""Histogram that summarises updates per closed time window."""
from __future__ import annotations

import time
from collections import Counter as ValueCounts
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Callable, Deque, Dict, Iterable, List, Tuple

from .base import MetricKind


class Granularity(Enum):
    """Width of the window a distribution summarises."""

    MINUTE = ("!M", 60)
    HOUR = ("!H", 3600)
    DAY = ("!D", 86400)

    def __init__(self, identifier: str, seconds: int) -> None:
        self.identifier = identifier
        self.seconds = seconds

    def window_start(self, timestamp: float) -> int:
        return int(timestamp // self.seconds) * self.seconds


@dataclass(frozen=True)
class Centroid:
    value: float
    count: int


@dataclass(frozen=True)
class Distribution:
    """Centroids of one closed window."""

    centroids: Tuple[Centroid, ...]
    granularity: Granularity
    timestamp: int


class _Bin:
    __slots__ = ("start", "values")

    def __init__(self, start: int) -> None:
        self.start = start
        self.values: ValueCounts = ValueCounts()


def compress_centroids(values: ValueCounts, max_centroids: int) -> Tuple[Centroid, ...]:
    """Collapse value counts into at most ``max_centroids`` weighted centroids."""

    ordered = sorted(values.items())
    if len(ordered) <= max_centroids:
        return tuple(Centroid(float(value), count) for value, count in ordered)

    total = sum(count for _, count in ordered)
    per_centroid = total / max_centroids
    centroids: List[Centroid] = []
    weight = 0
    weighted_sum = 0.0
    for value, count in ordered:
        weight += count
        weighted_sum += value * count
        if weight >= per_centroid:
            centroids.append(Centroid(weighted_sum / weight, weight))
            weight = 0
            weighted_sum = 0.0
    if weight:
        centroids.append(Centroid(weighted_sum / weight, weight))
    return tuple(centroids)


class WindowedHistogram:
    """Histogram whose updates are bucketed into windows per granularity.

    A window becomes visible through :meth:`distributions` only once it has
    closed. Windows that never received an update produce nothing.
    """

    kind = MetricKind.WINDOWED_HISTOGRAM

    def __init__(
        self,
        granularities: Iterable[Granularity] | None = None,
        *,
        max_bins: int = 10,
        max_centroids: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        selected = tuple(dict.fromkeys(granularities or (Granularity.MINUTE,)))
        if max_bins <= 0 or max_centroids <= 0:
            raise ValueError("max_bins and max_centroids must be positive")
        self.granularities: Tuple[Granularity, ...] = selected
        self.max_bins = max_bins
        self.max_centroids = max_centroids
        self._clock = clock
        now = clock()
        self._current: Dict[Granularity, _Bin] = {
            granularity: _Bin(granularity.window_start(now)) for granularity in selected
        }
        self._prior: Dict[Granularity, Deque[_Bin]] = {
            granularity: deque(maxlen=max_bins) for granularity in selected
        }
        self._lock = Lock()

    def _rotate(self, now: float) -> None:
        for granularity in self.granularities:
            start = granularity.window_start(now)
            current = self._current[granularity]
            if current.start == start:
                continue
            if current.values:
                self._prior[granularity].append(current)
            self._current[granularity] = _Bin(start)

    def update(self, value: float) -> None:
        with self._lock:
            self._rotate(self._clock())
            for current in self._current.values():
                current.values[value] += 1

    def distributions(self) -> List[Distribution]:
        """Return and forget the closed windows of every granularity."""

        with self._lock:
            self._rotate(self._clock())
            result: List[Distribution] = []
            for granularity in self.granularities:
                prior = self._prior[granularity]
                while prior:
                    closed = prior.popleft()
                    result.append(
                        Distribution(
                            centroids=compress_centroids(closed.values, self.max_centroids),
                            granularity=granularity,
                            timestamp=closed.start,
                        )
                    )
            return result

    def _current_values(self) -> ValueCounts:
        with self._lock:
            return ValueCounts(self._current[self.granularities[0]].values)

    @property
    def count(self) -> int:
        return sum(self._current_values().values())

    @property
    def min(self) -> float:
        values = self._current_values()
        return float(min(values)) if values else 0.0

    @property
    def max(self) -> float:
        values = self._current_values()
        return float(max(values)) if values else 0.0

    @property
    def mean(self) -> float:
        values = self._current_values()
        total = sum(values.values())
        if not total:
            return 0.0
        return sum(value * count for value, count in values.items()) / total

"""Primitive metric implementations held by the registry."""
from __future__ import annotations

import heapq
import math
import random
import time
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Callable, List, Sequence, Tuple


class MetricKind(str, Enum):
    """Closed set of metric shapes understood by the reporter."""

    COUNTER = "counter"
    GAUGE = "gauge"
    GAUGE_FLOAT64 = "gauge_float64"
    HISTOGRAM = "histogram"
    WINDOWED_HISTOGRAM = "windowed_histogram"


class Counter:
    """Integer counter that can be incremented and decremented."""

    kind = MetricKind.COUNTER

    def __init__(self) -> None:
        self._count = 0
        self._lock = Lock()

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount

    def dec(self, amount: int = 1) -> None:
        with self._lock:
            self._count -= amount

    def clear(self) -> None:
        with self._lock:
            self._count = 0

    @property
    def count(self) -> int:
        with self._lock:
            return self._count


class Gauge:
    """Integer gauge holding the last value it was updated with."""

    kind = MetricKind.GAUGE

    def __init__(self, value: int = 0) -> None:
        self._value = int(value)
        self._lock = Lock()

    def update(self, value: int) -> None:
        with self._lock:
            self._value = int(value)

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class GaugeFloat64(Gauge):
    """Floating point gauge."""

    kind = MetricKind.GAUGE_FLOAT64

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)
        self._lock = Lock()

    def update(self, value: float) -> None:
        with self._lock:
            self._value = float(value)

    @property
    def value(self) -> float:
        with self._lock:
            return self._value


class UniformSample:
    """Fixed size reservoir using Vitter's algorithm R."""

    def __init__(self, reservoir_size: int, *, rng: random.Random | None = None) -> None:
        if reservoir_size <= 0:
            raise ValueError("reservoir_size must be positive")
        self.reservoir_size = reservoir_size
        self._rng = rng or random.Random()
        self._values: List[float] = []
        self._count = 0
        self._lock = Lock()

    def update(self, value: float) -> None:
        with self._lock:
            self._count += 1
            if len(self._values) < self.reservoir_size:
                self._values.append(value)
                return
            index = self._rng.randrange(self._count)
            if index < self.reservoir_size:
                self._values[index] = value

    def clear(self) -> None:
        with self._lock:
            self._values = []
            self._count = 0

    def state(self) -> Tuple[int, List[float]]:
        """Return the total number of updates and a copy of the retained values."""

        with self._lock:
            return self._count, list(self._values)


class ExpDecaySample:
    """Exponentially decaying reservoir biased towards recent updates.

    Priorities follow the forward-decay model; the landmark is moved forward
    every ``rescale_threshold`` seconds to keep the weights bounded.
    """

    rescale_threshold = 3600.0

    def __init__(
        self,
        reservoir_size: int,
        alpha: float,
        *,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        if reservoir_size <= 0:
            raise ValueError("reservoir_size must be positive")
        self.reservoir_size = reservoir_size
        self.alpha = alpha
        self._clock = clock
        self._rng = rng or random.Random()
        self._heap: List[Tuple[float, int, float]] = []
        self._sequence = 0
        self._count = 0
        self._start = clock()
        self._next_rescale = self._start + self.rescale_threshold
        self._lock = Lock()

    def update(self, value: float) -> None:
        now = self._clock()
        with self._lock:
            if now >= self._next_rescale:
                self._rescale(now)
            self._count += 1
            self._sequence += 1
            priority = math.exp(self.alpha * (now - self._start)) / (1.0 - self._rng.random())
            item = (priority, self._sequence, value)
            if len(self._heap) < self.reservoir_size:
                heapq.heappush(self._heap, item)
            elif priority > self._heap[0][0]:
                heapq.heapreplace(self._heap, item)

    def _rescale(self, now: float) -> None:
        factor = math.exp(-self.alpha * (now - self._start))
        self._heap = [(priority * factor, seq, value) for priority, seq, value in self._heap]
        heapq.heapify(self._heap)
        self._start = now
        self._next_rescale = now + self.rescale_threshold

    def clear(self) -> None:
        with self._lock:
            self._heap = []
            self._count = 0
            self._start = self._clock()
            self._next_rescale = self._start + self.rescale_threshold

    def state(self) -> Tuple[int, List[float]]:
        with self._lock:
            return self._count, [value for _, _, value in self._heap]


def sample_percentiles(values: Sequence[float], percentiles: Sequence[float]) -> List[float]:
    """Interpolated percentiles over ``values``; zeros for an empty sample."""

    if not values:
        return [0.0 for _ in percentiles]
    ordered = sorted(values)
    size = len(ordered)
    results: List[float] = []
    for percentile in percentiles:
        pos = percentile * (size + 1)
        if pos < 1.0:
            results.append(float(ordered[0]))
        elif pos >= size:
            results.append(float(ordered[-1]))
        else:
            lower = ordered[int(pos) - 1]
            upper = ordered[int(pos)]
            results.append(lower + (pos - math.floor(pos)) * (upper - lower))
    return results


@dataclass(frozen=True)
class HistogramSnapshot:
    """Immutable view of a histogram's sample at one point in time."""

    count: int
    values: Tuple[float, ...]

    @property
    def min(self) -> float:
        return float(min(self.values)) if self.values else 0.0

    @property
    def max(self) -> float:
        return float(max(self.values)) if self.values else 0.0

    @property
    def mean(self) -> float:
        if not self.values:
            return 0.0
        return math.fsum(self.values) / len(self.values)

    @property
    def variance(self) -> float:
        if not self.values:
            return 0.0
        mean = self.mean
        return math.fsum((value - mean) ** 2 for value in self.values) / len(self.values)

    @property
    def stddev(self) -> float:
        return math.sqrt(self.variance)

    def percentiles(self, percentiles: Sequence[float]) -> List[float]:
        return sample_percentiles(self.values, percentiles)


class Histogram:
    """Sample based histogram reporting a statistical breakdown."""

    kind = MetricKind.HISTOGRAM

    def __init__(self, sample: UniformSample | ExpDecaySample | None = None) -> None:
        self.sample = sample if sample is not None else ExpDecaySample(1028, 0.015)

    def update(self, value: float) -> None:
        self.sample.update(value)

    def clear(self) -> None:
        self.sample.clear()

    @property
    def count(self) -> int:
        return self.snapshot().count

    def snapshot(self) -> HistogramSnapshot:
        count, values = self.sample.state()
        return HistogramSnapshot(count=count, values=tuple(values))

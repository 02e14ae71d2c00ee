"""Python runtime statistics exposed as ordinary gauges."""
from __future__ import annotations

import gc
import threading
import time
from typing import Callable, Dict

from metrics_bridge.metrics.base import Gauge, GaugeFloat64
from metrics_bridge.metrics.definitions import RUNTIME_METRIC_DEFINITIONS

from .registry import TaggedRegistry


class RuntimeMetrics:
    """Register the runtime gauges and refresh them on demand."""

    def __init__(
        self,
        registry: TaggedRegistry,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.registry = registry
        self._clock = clock
        self._started = clock()
        self.gauges: Dict[str, Gauge] = {}
        for definition in RUNTIME_METRIC_DEFINITIONS:
            if definition.metric_type == "gauge":
                gauge: Gauge = Gauge()
            elif definition.metric_type == "gauge_float64":
                gauge = GaugeFloat64()
            else:  # pragma: no cover - definitions are static
                raise ValueError(f"Unsupported metric type: {definition.metric_type}")
            registry.register(definition.name, gauge)
            self.gauges[definition.name] = gauge

    def refresh(self) -> None:
        gen0, gen1, gen2 = gc.get_count()
        self.gauges["python.runtime.gc.gen0"].update(gen0)
        self.gauges["python.runtime.gc.gen1"].update(gen1)
        self.gauges["python.runtime.gc.gen2"].update(gen2)
        self.gauges["python.runtime.gc.collections"].update(
            sum(stats.get("collections", 0) for stats in gc.get_stats())
        )
        self.gauges["python.runtime.threads"].update(threading.active_count())
        self.gauges["python.runtime.uptime"].update(self._clock() - self._started)

    def unregister(self) -> None:
        for name in self.gauges:
            self.registry.unregister(name)

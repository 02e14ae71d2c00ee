"""Conversions from registered metrics to sender emissions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Tuple

from metrics_bridge.metrics.base import Counter, Gauge, Histogram, MetricKind
from metrics_bridge.metrics.windowed import WindowedHistogram
from metrics_bridge.senders.base import Sender

from .registry import RegistrationEntry

logger = logging.getLogger(__name__)

HISTOGRAM_PERCENTILES: Tuple[Tuple[str, float], ...] = (
    ("p50", 0.5),
    ("p75", 0.75),
    ("p95", 0.95),
    ("p99", 0.99),
    ("p999", 0.999),
)


@dataclass(slots=True)
class FlushContext:
    """Everything an adapter needs for one pass."""

    sender: Sender
    source: str
    timestamp: int
    prepare_name: Callable[..., str]
    emit: Callable[[str, Callable[[], None]], None]


class MetricAdapters:
    """Per-kind conversion logic, holding the delta counter baselines."""

    def __init__(self) -> None:
        # name -> (metric the baseline belongs to, last reported count)
        self._baselines: Dict[str, Tuple[object, int]] = {}
        self._handlers: Dict[MetricKind, Callable[..., None]] = {
            MetricKind.COUNTER: self.report_counter,
            MetricKind.GAUGE: self.report_gauge,
            MetricKind.GAUGE_FLOAT64: self.report_gauge,
            MetricKind.HISTOGRAM: self.report_histogram,
            MetricKind.WINDOWED_HISTOGRAM: self.report_windowed_histogram,
        }
        missing = set(MetricKind) - set(self._handlers)
        if missing:  # pragma: no cover
            raise RuntimeError(f"No adapter for metric kinds: {sorted(kind.value for kind in missing)}")

    def handler_for(self, metric: object) -> Callable[..., None] | None:
        kind = getattr(metric, "kind", None)
        if not isinstance(kind, MetricKind):
            return None
        return self._handlers[kind]

    def report(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: object,
        tags: Mapping[str, str],
    ) -> bool:
        """Emit ``metric``; returns False when its type is not supported."""

        handler = self.handler_for(metric)
        if handler is None:
            logger.debug("Skipping metric %r of unsupported type %s", entry.name, type(metric).__name__)
            return False
        handler(ctx, entry, metric, tags)
        return True

    def report_counter(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: Counter,
        tags: Mapping[str, str],
    ) -> None:
        if entry.delta:
            self._report_delta(ctx, entry, metric, tags)
            return
        name = ctx.prepare_name(entry.base_name, "count")
        count = metric.count
        ctx.emit(name, lambda: ctx.sender.send_metric(name, float(count), ctx.timestamp, ctx.source, tags))

    def _report_delta(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: Counter,
        tags: Mapping[str, str],
    ) -> None:
        current = metric.count
        owner, baseline = self._baselines.get(entry.name, (None, entry.initial_count))
        if owner is not None and owner is not metric:
            baseline = entry.initial_count
        self._baselines[entry.name] = (metric, current)
        delta = current - baseline
        if delta == 0:
            return
        name = ctx.prepare_name(entry.base_name, "count")
        ctx.emit(name, lambda: ctx.sender.send_delta_counter(name, float(delta), ctx.source, tags))

    def retain(self, names: Iterable[str]) -> None:
        """Drop baselines of names that are no longer registered."""

        keep = set(names)
        for name in [name for name in self._baselines if name not in keep]:
            del self._baselines[name]

    def report_gauge(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: Gauge,
        tags: Mapping[str, str],
    ) -> None:
        name = ctx.prepare_name(entry.base_name, "value")
        value = float(metric.value)
        ctx.emit(name, lambda: ctx.sender.send_metric(name, value, ctx.timestamp, ctx.source, tags))

    def report_histogram(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: Histogram,
        tags: Mapping[str, str],
    ) -> None:
        snapshot = metric.snapshot()
        values = [
            ("count", float(snapshot.count)),
            ("min", snapshot.min),
            ("max", snapshot.max),
            ("mean", snapshot.mean),
            ("stddev", snapshot.stddev),
        ]
        percentiles = snapshot.percentiles([percentile for _, percentile in HISTOGRAM_PERCENTILES])
        values.extend(zip((key for key, _ in HISTOGRAM_PERCENTILES), percentiles))

        for suffix, value in values:
            name = ctx.prepare_name(entry.base_name, suffix)
            ctx.emit(
                name,
                lambda name=name, value=value: ctx.sender.send_metric(
                    name, value, ctx.timestamp, ctx.source, tags
                ),
            )

    def report_windowed_histogram(
        self,
        ctx: FlushContext,
        entry: RegistrationEntry,
        metric: WindowedHistogram,
        tags: Mapping[str, str],
    ) -> None:
        name = ctx.prepare_name(entry.base_name)
        for distribution in metric.distributions():
            ctx.emit(
                name,
                lambda distribution=distribution: ctx.sender.send_distribution(
                    name,
                    list(distribution.centroids),
                    frozenset({distribution.granularity}),
                    distribution.timestamp,
                    ctx.source,
                    tags,
                ),
            )

"""Metric primitives and the in-memory registry."""
from .base import (
    Counter,
    ExpDecaySample,
    Gauge,
    GaugeFloat64,
    Histogram,
    HistogramSnapshot,
    MetricKind,
    UniformSample,
)
from .definitions import RUNTIME_METRIC_DEFINITIONS, MetricDefinition
from .registry import MetricsRegistry
from .windowed import Centroid, Distribution, Granularity, WindowedHistogram

__all__ = [
    "Centroid",
    "Counter",
    "Distribution",
    "ExpDecaySample",
    "Gauge",
    "GaugeFloat64",
    "Granularity",
    "Histogram",
    "HistogramSnapshot",
    "MetricDefinition",
    "MetricKind",
    "MetricsRegistry",
    "RUNTIME_METRIC_DEFINITIONS",
    "UniformSample",
    "WindowedHistogram",
]

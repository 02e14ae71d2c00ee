"""Periodically report in-process metrics to a telemetry backend."""
from .application import ApplicationTags
from .lifespan import reporting_lifespan
from .metrics import (
    Counter,
    ExpDecaySample,
    Gauge,
    GaugeFloat64,
    Granularity,
    Histogram,
    MetricsRegistry,
    UniformSample,
    WindowedHistogram,
)
from .reporting import (
    Reporter,
    ReporterOptions,
    TaggedRegistry,
    default_registry,
    delta_counter_name,
    get_metric,
    register_metric,
    unregister_metric,
)
from .senders import LoggingSender, Sender, SenderError

__all__ = [
    "ApplicationTags",
    "Counter",
    "ExpDecaySample",
    "Gauge",
    "GaugeFloat64",
    "Granularity",
    "Histogram",
    "LoggingSender",
    "MetricsRegistry",
    "Reporter",
    "ReporterOptions",
    "Sender",
    "SenderError",
    "TaggedRegistry",
    "UniformSample",
    "WindowedHistogram",
    "default_registry",
    "delta_counter_name",
    "get_metric",
    "register_metric",
    "reporting_lifespan",
    "unregister_metric",
]

"""Reporting engine and the pieces it composes."""
from .adapters import HISTOGRAM_PERCENTILES, FlushContext, MetricAdapters
from .naming import prepare_name
from .registry import (
    ALT_DELTA_PREFIX,
    DELTA_PREFIX,
    RegistrationEntry,
    TaggedRegistry,
    default_registry,
    delta_counter_name,
    get_metric,
    has_delta_prefix,
    register_metric,
    unregister_metric,
)
from .reporter import Reporter, ReporterOptions, ReporterState
from .runtime import RuntimeMetrics

__all__ = [
    "ALT_DELTA_PREFIX",
    "DELTA_PREFIX",
    "FlushContext",
    "HISTOGRAM_PERCENTILES",
    "MetricAdapters",
    "RegistrationEntry",
    "Reporter",
    "ReporterOptions",
    "ReporterState",
    "RuntimeMetrics",
    "TaggedRegistry",
    "default_registry",
    "delta_counter_name",
    "get_metric",
    "has_delta_prefix",
    "prepare_name",
    "register_metric",
    "unregister_metric",
]

"""Built-in metric definitions refreshed by the reporter itself."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MetricDefinition:
    """Describe a metric that should exist in the registry."""

    name: str
    metric_type: str
    description: str


RUNTIME_METRIC_DEFINITIONS: Tuple[MetricDefinition, ...] = (
    MetricDefinition(
        name="python.runtime.gc.gen0",
        metric_type="gauge",
        description="Objects currently tracked in garbage collector generation 0.",
    ),
    MetricDefinition(
        name="python.runtime.gc.gen1",
        metric_type="gauge",
        description="Objects currently tracked in garbage collector generation 1.",
    ),
    MetricDefinition(
        name="python.runtime.gc.gen2",
        metric_type="gauge",
        description="Objects currently tracked in garbage collector generation 2.",
    ),
    MetricDefinition(
        name="python.runtime.gc.collections",
        metric_type="gauge",
        description="Total number of garbage collections across all generations.",
    ),
    MetricDefinition(
        name="python.runtime.threads",
        metric_type="gauge",
        description="Number of live Python threads.",
    ),
    MetricDefinition(
        name="python.runtime.uptime",
        metric_type="gauge_float64",
        description="Seconds since the runtime collector was created.",
    ),
)

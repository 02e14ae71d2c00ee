"""Sender that writes every emission to the log instead of a backend."""
from __future__ import annotations

import json
import logging
from threading import Lock
from typing import AbstractSet, Dict, Mapping, Sequence

from metrics_bridge.metrics.windowed import Centroid, Granularity

from .base import SenderError

logger = logging.getLogger(__name__)


class LoggingSender:
    """Dry-run sender useful for local development and debugging."""

    def __init__(self, *, level: int = logging.INFO) -> None:
        self.level = level
        self._counts: Dict[str, int] = {"metric": 0, "delta": 0, "distribution": 0}
        self._lock = Lock()
        self._started = False

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name or "" in name.split("."):
            raise SenderError(f"Invalid metric name: {name!r}")

    def _record(self, kind: str, payload: Mapping[str, object]) -> None:
        with self._lock:
            self._counts[kind] += 1
        logger.log(self.level, "%s %s", kind, json.dumps(payload, sort_keys=True))

    def send_metric(
        self,
        name: str,
        value: float,
        timestamp: int,
        source: str,
        tags: Mapping[str, str],
    ) -> None:
        self._validate_name(name)
        self._record(
            "metric",
            {"name": name, "value": value, "timestamp": timestamp, "source": source, "tags": dict(tags)},
        )

    def send_delta_counter(
        self,
        name: str,
        value: float,
        source: str,
        tags: Mapping[str, str],
    ) -> None:
        self._validate_name(name)
        self._record("delta", {"name": name, "value": value, "source": source, "tags": dict(tags)})

    def send_distribution(
        self,
        name: str,
        centroids: Sequence[Centroid],
        granularities: AbstractSet[Granularity],
        timestamp: int,
        source: str,
        tags: Mapping[str, str],
    ) -> None:
        self._validate_name(name)
        self._record(
            "distribution",
            {
                "name": name,
                "centroids": [[centroid.value, centroid.count] for centroid in centroids],
                "granularities": sorted(granularity.identifier for granularity in granularities),
                "timestamp": timestamp,
                "source": source,
                "tags": dict(tags),
            },
        )

    def counts(self) -> Dict[str, int]:
        """Return how many emissions of each kind were logged."""

        with self._lock:
            return dict(self._counts)

    def flush(self) -> None:
        logger.debug("Flush requested; %s", self.counts())

    def start(self) -> None:
        self._started = True

    def close(self) -> None:
        self._started = False

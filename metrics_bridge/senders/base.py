"""Interface of the transport that delivers emissions to the backend."""
from __future__ import annotations

from typing import AbstractSet, Mapping, Protocol, Sequence, runtime_checkable

from metrics_bridge.metrics.windowed import Centroid, Granularity


class SenderError(RuntimeError):
    """Raised by a sender when an emission cannot be accepted."""


@runtime_checkable
class Sender(Protocol):
    """Minimum capability set the reporter relies on.

    Every ``send_*`` call signals failure by raising.
    """

    def send_metric(
        self,
        name: str,
        value: float,
        timestamp: int,
        source: str,
        tags: Mapping[str, str],
    ) -> None: ...

    def send_delta_counter(
        self,
        name: str,
        value: float,
        source: str,
        tags: Mapping[str, str],
    ) -> None: ...

    def send_distribution(
        self,
        name: str,
        centroids: Sequence[Centroid],
        granularities: AbstractSet[Granularity],
        timestamp: int,
        source: str,
        tags: Mapping[str, str],
    ) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...

    def start(self) -> None: ...

import threading

import pytest

from metrics_bridge.application import ApplicationTags
from metrics_bridge.reporting.registry import TaggedRegistry
from metrics_bridge.senders.base import SenderError


class MockSender:
    """Records emissions; rejects the names listed in ``fail_names``."""

    def __init__(self, fail_names=(".count",)):
        self.fail_names = set(fail_names)
        self.metrics = []
        self.deltas = []
        self.distributions = []
        self.flush_error = None
        self._lock = threading.Lock()

    def send_metric(self, name, value, timestamp, source, tags):
        if name in self.fail_names:
            raise SenderError("empty metric name")
        with self._lock:
            self.metrics.append((name, value, timestamp, source, dict(tags)))

    def send_delta_counter(self, name, value, source, tags):
        if name in self.fail_names:
            raise SenderError("empty metric name")
        with self._lock:
            self.deltas.append((name, value, source, dict(tags)))

    def send_distribution(self, name, centroids, granularities, timestamp, source, tags):
        with self._lock:
            self.distributions.append((name, list(centroids), set(granularities), timestamp, dict(tags)))

    def flush(self):
        if self.flush_error is not None:
            raise self.flush_error

    def close(self):
        pass

    def start(self):
        pass

    def counters(self):
        with self._lock:
            return len(self.distributions), len(self.metrics), len(self.deltas)

    def metric_names(self):
        with self._lock:
            return [metric[0] for metric in self.metrics]


class FakeClock:
    def __init__(self, now=1_800_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sender():
    return MockSender()


@pytest.fixture
def registry():
    return TaggedRegistry()


@pytest.fixture
def application():
    return ApplicationTags("app", "srv")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sender_factory():
    return MockSender

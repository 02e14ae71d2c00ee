from collections import Counter as ValueCounts

import pytest

from metrics_bridge.metrics.base import MetricKind
from metrics_bridge.metrics.windowed import (
    Granularity,
    WindowedHistogram,
    compress_centroids,
)

HOUR_ALIGNED = 3600.0 * 500 + 10


def test_open_window_is_not_emitted(clock):
    histogram = WindowedHistogram([Granularity.MINUTE], clock=clock)
    for value in range(100):
        histogram.update(value)

    assert histogram.distributions() == []
    assert histogram.count == 100
    assert histogram.kind is MetricKind.WINDOWED_HISTOGRAM


def test_closed_window_is_emitted_once(clock):
    histogram = WindowedHistogram([Granularity.MINUTE], clock=clock)
    window_start = Granularity.MINUTE.window_start(clock())
    for value in range(1000):
        histogram.update(value % 50)

    clock.advance(120)
    distributions = histogram.distributions()

    assert len(distributions) == 1
    distribution = distributions[0]
    assert distribution.granularity is Granularity.MINUTE
    assert distribution.timestamp == window_start
    assert sum(centroid.count for centroid in distribution.centroids) == 1000
    assert len(distribution.centroids) == 50

    assert histogram.distributions() == []


def test_empty_windows_are_skipped(clock):
    histogram = WindowedHistogram([Granularity.MINUTE], clock=clock)
    clock.advance(600)
    assert histogram.distributions() == []


def test_granularities_rotate_independently():
    clock_value = [HOUR_ALIGNED]
    histogram = WindowedHistogram(
        [Granularity.MINUTE, Granularity.HOUR],
        clock=lambda: clock_value[0],
    )
    histogram.update(1.0)
    clock_value[0] += 61

    distributions = histogram.distributions()
    assert [d.granularity for d in distributions] == [Granularity.MINUTE]

    clock_value[0] += 3600
    distributions = histogram.distributions()
    assert [d.granularity for d in distributions] == [Granularity.HOUR]


def test_prior_bins_are_capped(clock):
    histogram = WindowedHistogram([Granularity.MINUTE], max_bins=10, clock=clock)
    for _ in range(12):
        histogram.update(1.0)
        clock.advance(60)

    distributions = histogram.distributions()
    assert len(distributions) == 10
    assert distributions == sorted(distributions, key=lambda d: d.timestamp)


def test_current_window_statistics(clock):
    histogram = WindowedHistogram(clock=clock)
    for value in (1.0, 2.0, 3.0, 6.0):
        histogram.update(value)

    assert histogram.min == 1.0
    assert histogram.max == 6.0
    assert histogram.mean == pytest.approx(3.0)


def test_compress_centroids_preserves_total_count():
    values = ValueCounts({float(value): 2 for value in range(1000)})
    centroids = compress_centroids(values, 10)

    assert len(centroids) <= 11
    assert sum(centroid.count for centroid in centroids) == 2000
    assert [c.value for c in centroids] == sorted(c.value for c in centroids)


def test_invalid_limits_raise():
    with pytest.raises(ValueError):
        WindowedHistogram(max_bins=0)


def test_granularity_identifiers():
    assert Granularity.MINUTE.identifier == "!M"
    assert Granularity.HOUR.window_start(7300) == 7200
    assert Granularity.DAY.seconds == 86400

import threading

from metrics_bridge.metrics.base import Counter, Gauge
from metrics_bridge.metrics.registry import MetricsRegistry
from metrics_bridge.reporting import registry as registry_module
from metrics_bridge.reporting.registry import (
    TaggedRegistry,
    delta_counter_name,
    has_delta_prefix,
    strip_delta_prefix,
)


def test_register_stores_metric_and_tags(registry):
    counter = Counter()
    registry.register("requests", counter, {"tag1": "tag"})

    assert registry.get("requests") is counter
    assert registry.tags_for("requests") == {"tag1": "tag"}


def test_unknown_names_yield_defaults(registry):
    assert registry.get("missing") is None
    assert registry.tags_for("missing") == {}
    registry.unregister("missing")


def test_re_registration_is_last_write_wins(registry):
    first, second = Counter(), Gauge()
    registry.register("metric", first, {"version": "1"})
    registry.register("metric", second, {"version": "2"})

    assert registry.get("metric") is second
    assert registry.tags_for("metric") == {"version": "2"}


def test_unregister_removes_metric_and_tags(registry):
    registry.register("metric", Counter(), {"a": "b"})
    registry.unregister("metric")

    assert registry.get("metric") is None
    assert registry.tags_for("metric") == {}
    assert registry.items() == []


def test_tags_for_returns_a_copy(registry):
    registry.register("metric", Counter(), {"a": "b"})
    registry.tags_for("metric")["a"] = "changed"
    assert registry.tags_for("metric") == {"a": "b"}


def test_delta_entries_are_flagged_at_registration(registry):
    counter = Counter()
    counter.inc(4)
    registry.register(delta_counter_name("jobs"), counter)

    entry = registry.entry_for(delta_counter_name("jobs"))
    assert entry.delta is True
    assert entry.base_name == "jobs"
    assert entry.initial_count == 4


def test_entry_derived_for_raw_registrations():
    metrics = MetricsRegistry()
    facade = TaggedRegistry(metrics)
    metrics.register("Δraw", Counter())

    entry = facade.entry_for("Δraw")
    assert entry.delta is True
    assert entry.base_name == "raw"
    assert entry.tags == {}
    assert [name for name, _ in facade.items()] == ["Δraw"]


def test_delta_prefix_helpers():
    assert delta_counter_name("foo") == "∆foo"
    assert delta_counter_name("∆foo") == "∆foo"
    assert has_delta_prefix("Δfoo")
    assert not has_delta_prefix("foo")
    assert strip_delta_prefix("∆foo") == "foo"
    assert strip_delta_prefix("foo") == "foo"


def test_concurrent_registration(registry):
    def worker(offset):
        for index in range(100):
            name = f"metric.{offset}.{index}"
            registry.register(name, Counter(), {"worker": str(offset)})
            registry.items()
            if index % 2:
                registry.unregister(name)

    threads = [threading.Thread(target=worker, args=(offset,)) for offset in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.items()) == 8 * 50
    assert registry.tags_for("metric.3.0") == {"worker": "3"}


def test_default_registry_helpers():
    counter = Counter()
    registry_module.register_metric("default.helper", counter, {"a": "b"})
    try:
        assert registry_module.get_metric("default.helper") is counter
        assert registry_module.default_registry.tags_for("default.helper") == {"a": "b"}
    finally:
        registry_module.unregister_metric("default.helper")
    assert registry_module.get_metric("default.helper") is None


def test_unregister_all(registry):
    registry.register("a", Counter(), {"x": "y"})
    registry.register("b", Counter())
    registry.unregister_all()
    assert registry.items() == []
    assert registry.tags_for("a") == {}


def test_metrics_registry_operations():
    metrics = MetricsRegistry()
    counter = Counter()
    metrics.register("a", counter)
    metrics.register("b", Gauge())

    assert metrics.get("a") is counter
    assert "a" in metrics
    assert len(metrics) == 2

    metrics.unregister("a")
    metrics.unregister("missing")
    assert metrics.get("a") is None
    assert [name for name, _ in metrics.items()] == ["b"]

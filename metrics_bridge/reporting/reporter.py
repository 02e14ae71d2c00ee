"""Periodic reporter that flushes the registry into a sender."""
from __future__ import annotations

import logging
import socket
import threading
import time
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from metrics_bridge.application import ApplicationTags
from metrics_bridge.core.config import Settings
from metrics_bridge.core.logging import get_tracer
from metrics_bridge.senders.base import Sender

from .adapters import FlushContext, MetricAdapters
from .naming import prepare_name
from .registry import TaggedRegistry, default_registry
from .runtime import RuntimeMetrics

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class ReporterOptions(BaseModel):
    """Options recognised by :class:`Reporter`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    interval: float = Field(default=1.0, gt=0, description="Seconds between scheduled reports.")
    prefix: str = Field(default="")
    add_suffix: bool = Field(default=True)
    auto_start: bool = Field(default=True)
    log_errors: bool = Field(default=False)
    source: str = Field(default_factory=socket.gethostname)
    runtime_metrics: bool = Field(default=False)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "ReporterOptions":
        values: dict[str, Any] = {
            "interval": settings.report_interval,
            "prefix": settings.prefix,
            "add_suffix": settings.add_suffix,
            "auto_start": settings.auto_start,
            "log_errors": settings.log_errors,
            "runtime_metrics": settings.runtime_metrics,
        }
        if settings.source:
            values["source"] = settings.source
        values.update(overrides)
        return cls(**values)


class ReporterState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class Reporter:
    """Report every registered metric to ``sender`` once per interval.

    Failed emissions are counted (see :meth:`errors_count`) and never stop a
    pass. Manual :meth:`report` calls and scheduled ones share a lock, so a
    delta baseline or a closed histogram window is never reported twice.
    """

    def __init__(
        self,
        sender: Sender,
        application: ApplicationTags | None = None,
        *,
        registry: TaggedRegistry | None = None,
        options: ReporterOptions | None = None,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = ReporterOptions(**overrides)
        elif overrides:
            options = ReporterOptions(**{**options.model_dump(), **overrides})
        self.options = options
        self.sender = sender
        self.application = application
        self.registry = registry if registry is not None else default_registry
        self._clock = clock
        self._application_tags = application.as_tags() if application is not None else {}
        self._adapters = MetricAdapters()
        self._runtime = RuntimeMetrics(self.registry) if options.runtime_metrics else None

        self._state = ReporterState.IDLE
        self._state_lock = threading.Lock()
        self._report_lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._errors = 0
        self._errors_lock = threading.Lock()

        if options.auto_start:
            self.start()

    @property
    def state(self) -> ReporterState:
        with self._state_lock:
            return self._state

    def prepare_name(self, name: str, *suffixes: str) -> str:
        return prepare_name(
            name,
            *suffixes,
            prefix=self.options.prefix,
            add_suffix=self.options.add_suffix,
        )

    def errors_count(self) -> int:
        with self._errors_lock:
            return self._errors

    def start(self) -> None:
        with self._state_lock:
            if self._state is ReporterState.RUNNING:
                return
            if self._state is ReporterState.STOPPED:
                logger.warning("Reporter already closed; ignoring start()")
                return
            self._state = ReporterState.RUNNING
            self._thread = threading.Thread(
                target=self._run, name="metrics-bridge-reporter", daemon=True
            )
            self._thread.start()
        logger.info("Reporting metrics every %ss", self.options.interval)

    def _run(self) -> None:
        while not self._stop_event.wait(self.options.interval):
            try:
                self.report()
            except Exception:
                logger.exception("Scheduled metrics report failed")

    def close(self) -> None:
        """Stop scheduled reporting; safe to call more than once.

        Waits for an in-flight pass to finish. The sender is left open.
        """

        with self._state_lock:
            if self._state is ReporterState.STOPPED:
                return
            self._state = ReporterState.STOPPED
            thread, self._thread = self._thread, None
        self._stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        with self._report_lock:
            if self._runtime is not None:
                self._runtime.unregister()
        logger.debug("Reporter closed after %d failed emissions", self.errors_count())

    def __enter__(self) -> "Reporter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _emit(self, name: str, call: Callable[[], None]) -> None:
        try:
            call()
        except Exception as exc:
            with self._errors_lock:
                self._errors += 1
            if self.options.log_errors:
                logger.error("Failed to report metric %r: %s", name, exc)
            else:
                logger.debug("Failed to report metric %r: %s", name, exc)

    def report(self) -> None:
        """Run one synchronous pass over the registry."""

        with self._report_lock:
            if self.state is ReporterState.STOPPED:
                logger.debug("Reporter closed; skipping report")
                return
            with tracer.start_as_current_span("metrics_bridge.report") as span:
                errors_before = self.errors_count()
                reported = self._report_pass()
                span.set_attribute("metrics.count", reported)
                span.set_attribute("metrics.errors", self.errors_count() - errors_before)

    def _report_pass(self) -> int:
        if self._runtime is not None:
            self._runtime.refresh()

        ctx = FlushContext(
            sender=self.sender,
            source=self.options.source,
            timestamp=int(self._clock()),
            prepare_name=self.prepare_name,
            emit=self._emit,
        )
        items = self.registry.items()
        reported = 0
        for name, metric in items:
            # Removed or replaced since the snapshot was taken.
            if self.registry.get(name) is not metric:
                continue
            entry = self.registry.entry_for(name)
            tags = {**self._application_tags, **entry.tags}
            if self._adapters.report(ctx, entry, metric, tags):
                reported += 1
        self._adapters.retain(name for name, _ in items)
        return reported

    def flush(self) -> None:
        """Ask the sender to flush its buffers, counting a failure on error."""

        self._emit("flush", self.sender.flush)

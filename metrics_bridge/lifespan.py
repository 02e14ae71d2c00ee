"""Wire settings, logging and a reporter together for a host process."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from .application import ApplicationTags
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .reporting.registry import TaggedRegistry
from .reporting.reporter import Reporter, ReporterOptions
from .senders.base import Sender


@contextmanager
def reporting_lifespan(
    sender: Sender,
    *,
    settings: Settings | None = None,
    registry: TaggedRegistry | None = None,
    **overrides: Any,
) -> Iterator[Reporter]:
    """Run a reporter configured from ``settings`` for the duration of the block.

    On exit the reporter is closed and the sender is asked to flush.
    """

    settings = settings or get_settings()
    logger = configure_logging(settings)
    reporter = Reporter(
        sender,
        ApplicationTags.from_settings(settings),
        registry=registry,
        options=ReporterOptions.from_settings(settings, **overrides),
    )
    logger.debug("Reporter configured with %s", reporter.options)
    try:
        yield reporter
    finally:
        reporter.close()
        reporter.flush()

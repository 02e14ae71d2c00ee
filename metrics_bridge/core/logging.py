"""Logging and tracing hooks for the metrics bridge."""

from __future__ import annotations

import logging
from logging.config import dictConfig

from opentelemetry import trace

from metrics_bridge.core.config import Settings

PACKAGE_LOGGER = "metrics_bridge"


def configure_logging(settings: Settings) -> logging.Logger:
    """Give the package logger its own handler, level and format."""

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "bridge": {
                    "format": settings.log_format,
                }
            },
            "handlers": {
                "bridge": {
                    "class": "logging.StreamHandler",
                    "formatter": "bridge",
                    "level": level,
                }
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "handlers": ["bridge"],
                    "level": level,
                    "propagate": settings.log_propagate,
                },
            },
        }
    )
    return logging.getLogger(PACKAGE_LOGGER)


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the globally installed provider.

    Without an SDK provider installed by the host application this is the
    no-op tracer, so report spans cost nothing.
    """

    return trace.get_tracer(name)

"""Structured logging configuration using structlog.

Events are JSON lines on stderr; stdout carries the Nagios plugin output.
Every event is stamped with the plugin name and package version so log
lines from several checks running on one monitoring host can be told apart.
"""

from __future__ import annotations

import logging
import sys

import structlog

from vmcheck import __version__

PLUGIN_NAME = "check_vmware_alarms"


def _add_plugin_context(
    logger: object, method_name: str, event_dict: structlog.typing.EventDict
) -> structlog.typing.EventDict:
    event_dict.setdefault("plugin", PLUGIN_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def setup_logging(level: str = "info") -> None:
    """Configure structlog for JSON output to stderr, filtered at *level*."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_plugin_context,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]

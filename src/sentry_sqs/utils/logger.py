"""
Module: logger.py
Description: structlog setup shared by producer processes and the delivery worker.

Both sides write one JSON object per line so CloudWatch Logs Insights can
query them the same way. Records below SENTRY_LOG_LEVEL are dropped.
"""

import logging
from datetime import datetime, timezone

import structlog

from sentry_sqs.config.settings import settings


def _add_timestamp(logger, method_name, event_dict):
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    event_dict["level"] = method_name.upper()
    return event_dict


structlog.configure(
    processors=[
        _add_timestamp,
        _add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.WriteLoggerFactory(),
    wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, settings.log_level)),
    cache_logger_on_first_use=True,
)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a JSON logger bound to the module name."""
    return structlog.get_logger(name).bind(logger=name)

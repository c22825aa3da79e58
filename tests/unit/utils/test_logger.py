"""
Module: test_logger.py
Description: Unit tests for the shared structlog configuration.
"""

from structlog.testing import capture_logs

from sentry_sqs.utils.logger import get_logger


class TestGetLogger:
    """Test cases for get_logger."""

    def test_binds_module_name(self):
        with capture_logs() as logs:
            get_logger("sentry_sqs.delivery.worker").info("Delivery task dispatched", connection_id="conn-1")

        assert logs == [{
            "logger": "sentry_sqs.delivery.worker",
            "connection_id": "conn-1",
            "event": "Delivery task dispatched",
            "log_level": "info",
        }]

    def test_below_configured_level_dropped(self):
        with capture_logs() as logs:
            logger = get_logger("sentry_sqs.config.lookup")
            logger.debug("Option resolved from DSN", option="async.queue.name")
            logger.warning("Queue unavailable")

        assert [entry["event"] for entry in logs] == ["Queue unavailable"]

"""
Module: delivery/transport.py
Description: Queue-backed Sentry transport.

QueuedTransport wraps an existing Sentry transport. Captured envelopes are
not sent inline; each one becomes a delivery task on the task queue, and the
delivery worker later calls the wrapped transport with the original envelope.

The wrapped transport is shared by every worker invocation for the same
connection identifier and is called without additional locking, so it must
be safe to use concurrently (sentry_sdk's HttpTransport is).
"""

from typing import Any, Optional

from sentry_sdk.envelope import Envelope
from sentry_sdk.transport import Transport

from sentry_sqs.config.settings import settings
from sentry_sqs.delivery.registry import ConnectionRegistry, connections
from sentry_sqs.models.task import DeliveryTask
from sentry_sqs.sqs_queue.base import TaskQueue
from sentry_sqs.sqs_queue.sqs import SQSTaskQueue
from sentry_sqs.utils.logger import get_logger

logger = get_logger(__name__)


class QueuedTransport(Transport):
    """
    Sentry transport that defers delivery through a task queue.

    Attributes:
        connection_id: Identifier routing queued tasks back to this transport
        transport: Wrapped transport performing the actual send
        task_queue: Queue receiving delivery tasks
        queue_name: Selected queue, None for the task queue's default
    """

    def __init__(
        self,
        connection_id: str,
        transport: Transport,
        task_queue: Optional[TaskQueue] = None,
        registry: ConnectionRegistry = connections
    ):
        """
        Initialize the queued transport and register it.

        Args:
            connection_id: Non-empty connection identifier
            transport: Transport to wrap
            task_queue: Task queue (SQS queue from settings when None)
            registry: Registry the worker resolves connections from

        Raises:
            ValueError: If connection_id or transport is invalid
        """
        if not isinstance(connection_id, str) or not connection_id.strip():
            raise ValueError("connection_id must be a non-empty string")
        if not isinstance(transport, Transport):
            raise ValueError("transport must be a sentry_sdk Transport instance")

        super().__init__()
        self.options = transport.options
        self.parsed_dsn = getattr(transport, "parsed_dsn", None)

        self.connection_id = connection_id
        self.transport = transport
        self.queue_name: Optional[str] = None
        self.task_queue = task_queue if task_queue is not None else SQSTaskQueue(
            settings.default_queue_name,
            region_name=settings.aws_region,
            endpoint_url=settings.sqs_endpoint_url
        )
        self.registry = registry
        self.registry.register(connection_id, self)

        logger.info(
            "Queued transport initialized",
            connection_id=connection_id,
            wrapped_transport=type(transport).__name__
        )

    def set_queue(self, queue_name: str) -> None:
        """
        Select the named queue receiving delivery tasks.

        Args:
            queue_name: SQS queue name
        """
        if not queue_name or not isinstance(queue_name, str):
            raise ValueError("queue_name must be a non-empty string")
        self.queue_name = queue_name

    def capture_envelope(self, envelope: Envelope) -> None:
        """
        Enqueue the envelope for asynchronous delivery.

        Returns as soon as the task queue accepted the task; the wrapped
        transport is never called here.

        Raises:
            TaskSubmissionError: If the task could not be enqueued
        """
        task = DeliveryTask.from_envelope(self.connection_id, envelope, self.queue_name)
        message_id = self.task_queue.enqueue(self.queue_name, task)

        logger.debug(
            "Envelope queued for delivery",
            connection_id=self.connection_id,
            queue_name=self.queue_name,
            message_id=message_id
        )

    def deliver(self, envelope: Envelope, timeout: float) -> None:
        """
        Send an envelope through the wrapped transport.

        Called by the delivery worker. The wrapped transport is flushed
        so the send completes before the worker invocation ends.

        Args:
            envelope: Envelope rebuilt from a delivery task
            timeout: Seconds to wait for the wrapped transport to flush
        """
        self.transport.capture_envelope(envelope)
        self.transport.flush(timeout)

    def flush(self, timeout: float, callback: Optional[Any] = None) -> None:
        # Nothing is buffered: every envelope was handed to the queue already.
        return None

    def kill(self) -> None:
        """
        Close the connection.

        Unregisters the connection identifier and kills the wrapped
        transport. Tasks already on the queue are left untouched.
        """
        self.registry.unregister(self.connection_id, self)
        self.transport.kill()

        logger.info("Queued transport closed", connection_id=self.connection_id)

    def is_healthy(self) -> bool:
        return self.transport.is_healthy()

    def record_lost_event(self, *args: Any, **kwargs: Any) -> None:
        self.transport.record_lost_event(*args, **kwargs)

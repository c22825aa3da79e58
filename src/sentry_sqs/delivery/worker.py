"""
Module: delivery/worker.py
Description: SQS worker Lambda for queued Sentry delivery.

Processes delivery tasks from the SQS queue and hands each envelope to the
transport wrapped by the queued transport that created the task.

The Lambda module must build the Sentry client (through the factory, with
the same connection identifier as the producers) before handler() runs, so
the connection is registered in this process.
"""

from collections import Counter
from typing import Any, Dict, Optional

from pydantic import ValidationError

from sentry_sqs.config.settings import settings
from sentry_sqs.delivery.registry import ConnectionRegistry, connections
from sentry_sqs.exceptions import ConnectionNotFoundError, InvalidTaskError
from sentry_sqs.models.task import DeliveryTask
from sentry_sqs.utils.logger import get_logger
from sentry_sqs.utils.metrics import MetricsClient

logger = get_logger(__name__)


def source_queue(record: Dict[str, Any]) -> str:
    """Return the queue name of an SQS record (last segment of its ARN)."""
    arn = record.get('eventSourceARN') or ''
    return arn.rsplit(':', 1)[-1] or 'unknown'


def parse_task(body: str) -> DeliveryTask:
    """
    Parse an SQS message body into a delivery task.

    Raises:
        InvalidTaskError: If the body is not a valid delivery task
    """
    try:
        return DeliveryTask.model_validate_json(body)
    except ValidationError as e:
        raise InvalidTaskError(f"Invalid delivery task: {e.error_count()} validation error(s)") from e


def dispatch_task(
    task: DeliveryTask,
    registry: ConnectionRegistry = connections,
    flush_timeout: Optional[float] = None
) -> None:
    """
    Deliver one task through its registered connection.

    Args:
        task: Delivery task taken from the queue
        registry: Registry holding the queued transports
        flush_timeout: Seconds to wait for the send (settings default when None)

    Raises:
        ConnectionNotFoundError: If no transport is registered for the task
    """
    connection = registry.get(task.connection_id)
    if connection is None:
        raise ConnectionNotFoundError(task.connection_id)

    if flush_timeout is None:
        flush_timeout = settings.worker_flush_timeout

    connection.deliver(task.to_envelope(), flush_timeout)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for SQS delivery tasks.

    Args:
        event: SQS event with batch of messages
        context: Lambda context

    Returns:
        Response with batch item failures (if any)
    """
    metrics = MetricsClient(settings.metrics_namespace, settings.aws_region) \
        if settings.metrics_enabled else None

    batch_failures = []
    delivered = Counter()
    failed = Counter()

    for record in event['Records']:
        message_id = record['messageId']
        try:
            task = parse_task(record['body'])

            logger.info(
                "Processing delivery task from SQS",
                message_id=message_id,
                connection_id=task.connection_id
            )

            dispatch_task(task)
            delivered[source_queue(record)] += 1

        except InvalidTaskError as e:
            logger.error(
                "Malformed delivery task, leaving it for the dead-letter queue",
                message_id=message_id,
                error=str(e)
            )
            batch_failures.append({'itemIdentifier': message_id})
            failed[source_queue(record)] += 1

        except ConnectionNotFoundError as e:
            # Report failure so SQS redelivers (and eventually dead-letters) it
            logger.warning(
                "No connection registered for delivery task, will retry",
                message_id=message_id,
                connection_id=e.connection_id
            )
            batch_failures.append({'itemIdentifier': message_id})
            failed[source_queue(record)] += 1

        except Exception as e:
            logger.error(
                "Error delivering queued envelope",
                message_id=message_id,
                error=str(e),
                error_type=type(e).__name__
            )
            batch_failures.append({'itemIdentifier': message_id})
            failed[source_queue(record)] += 1

    if metrics is not None:
        metrics.publish_delivery_counts(delivered, failed)

    return {'batchItemFailures': batch_failures}

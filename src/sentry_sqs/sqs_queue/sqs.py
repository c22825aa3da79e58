"""
Module: sqs.py
Description: SQS task queue for queued Sentry deliveries.

Resolves queue names to queue URLs and sends delivery tasks as SQS
messages. The delivery worker Lambda subscribed to the queue executes them.
"""

import hashlib
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sentry_sqs.exceptions import TaskSubmissionError
from sentry_sqs.models.task import DeliveryTask
from sentry_sqs.utils.logger import get_logger

logger = get_logger(__name__)


class SQSTaskQueue:
    """
    SQS implementation of the task queue.

    Sends one message per delivery task. Queue URLs are looked up once
    per queue name and cached for the lifetime of the instance.
    """

    def __init__(
        self,
        default_queue_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None
    ):
        """
        Initialize SQS task queue.

        Args:
            default_queue_name: Queue used when enqueue() gets no queue name
            region_name: AWS region (boto3 default chain when None)
            endpoint_url: Custom SQS endpoint

        Raises:
            ValueError: If default_queue_name is invalid
        """
        if not default_queue_name or not isinstance(default_queue_name, str):
            raise ValueError("default_queue_name must be a non-empty string")

        self.default_queue_name = default_queue_name
        self.sqs = boto3.client('sqs', region_name=region_name, endpoint_url=endpoint_url)
        self._queue_urls: Dict[str, str] = {}

        logger.info(
            "SQS task queue initialized",
            default_queue_name=default_queue_name,
            region_name=region_name
        )

    def queue_url(self, queue_name: str) -> str:
        """
        Resolve a queue name to its URL.

        Raises:
            ClientError: If the queue does not exist or cannot be read
        """
        url = self._queue_urls.get(queue_name)
        if url is None:
            url = self.sqs.get_queue_url(QueueName=queue_name)['QueueUrl']
            self._queue_urls[queue_name] = url
        return url

    def enqueue(self, queue_name: Optional[str], task: DeliveryTask) -> str:
        """
        Send a delivery task to SQS.

        Args:
            queue_name: Target queue, or None for the default queue
            task: Delivery task to submit

        Returns:
            Message ID from SQS

        Raises:
            TaskSubmissionError: If the queue cannot be resolved or the send fails
            ValueError: If task is not a DeliveryTask
        """
        if not isinstance(task, DeliveryTask):
            raise ValueError("task must be a DeliveryTask instance")

        queue_name = queue_name or self.default_queue_name

        body = task.model_dump_json()
        params = {
            'MessageBody': body,
            'MessageAttributes': {
                'ConnectionId': {
                    'StringValue': task.connection_id,
                    'DataType': 'String'
                }
            }
        }
        if queue_name.endswith('.fifo'):
            # One message group per connection; group ids allow 128 printable chars only
            params['MessageGroupId'] = hashlib.sha256(task.connection_id.encode('utf-8')).hexdigest()
            params['MessageDeduplicationId'] = hashlib.sha256(body.encode('utf-8')).hexdigest()

        try:
            response = self.sqs.send_message(QueueUrl=self.queue_url(queue_name), **params)

            message_id = response['MessageId']
            logger.info(
                "Delivery task sent to SQS",
                connection_id=task.connection_id,
                message_id=message_id,
                queue_name=queue_name
            )

            return message_id

        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(
                "Failed to send delivery task to SQS",
                connection_id=task.connection_id,
                queue_name=queue_name,
                error_code=error_code,
                error_message=e.response['Error'].get('Message')
            )
            raise TaskSubmissionError(
                f"Failed to enqueue delivery task on '{queue_name}': {error_code}",
                queue_name=queue_name,
                error_code=error_code
            ) from e

        except BotoCoreError as e:
            logger.error(
                "Unexpected error sending delivery task to SQS",
                connection_id=task.connection_id,
                queue_name=queue_name,
                error=str(e)
            )
            raise TaskSubmissionError(
                f"Failed to enqueue delivery task on '{queue_name}': {e}",
                queue_name=queue_name
            ) from e

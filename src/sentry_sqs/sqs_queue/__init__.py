"""
Package: sqs_queue
Description: Task queue used for queued Sentry delivery.

Provides the TaskQueue interface and its SQS implementation, which
receives one message per captured envelope.
"""

from .base import TaskQueue
from .sqs import SQSTaskQueue

__all__ = [
    "TaskQueue",
    "SQSTaskQueue",
]

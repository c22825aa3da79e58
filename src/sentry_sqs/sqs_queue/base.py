"""
Module: base.py
Description: Task queue interface used by the queued transport.
"""

from typing import Optional, Protocol, runtime_checkable

from sentry_sqs.models.task import DeliveryTask


@runtime_checkable
class TaskQueue(Protocol):
    """
    Platform task queue accepting delivery tasks.

    Implementations submit the task synchronously and return the
    queue-assigned message id, or raise TaskSubmissionError. Execution
    of the task is owned by the queue infrastructure.
    """

    def enqueue(self, queue_name: Optional[str], task: DeliveryTask) -> str:
        ...

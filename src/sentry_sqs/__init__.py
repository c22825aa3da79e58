"""
Package: sentry_sqs
Description: Queued Sentry delivery through Amazon SQS.

Wraps the Sentry client's transport so error reports are enqueued on SQS
and sent later by a worker Lambda, and tags events with the identity of
the platform they were captured on.
"""

from .exceptions import (
    ConnectionNotFoundError,
    InvalidTaskError,
    QueuedDeliveryError,
    TaskSubmissionError,
)
from .factory import (
    DEFAULT_CAPABILITIES,
    Capability,
    QueuedClientFactory,
    init,
)

__all__ = [
    "DEFAULT_CAPABILITIES",
    "Capability",
    "ConnectionNotFoundError",
    "InvalidTaskError",
    "QueuedClientFactory",
    "QueuedDeliveryError",
    "TaskSubmissionError",
    "init",
]

"""
Module: exceptions.py
Description: Errors raised by the queued delivery adapter.
"""


class QueuedDeliveryError(Exception):
    """Base class for queued delivery failures."""


class TaskSubmissionError(QueuedDeliveryError):
    """
    Raised when a delivery task could not be handed to the task queue.

    This is the only failure surfaced to the reporting client; failures of
    the later asynchronous delivery are reported to the queue instead.
    """

    def __init__(self, message: str, queue_name: str = None, error_code: str = None):
        super().__init__(message)
        self.queue_name = queue_name
        self.error_code = error_code


class ConnectionNotFoundError(QueuedDeliveryError):
    """Raised by the worker when a task references an unregistered connection."""

    def __init__(self, connection_id: str):
        super().__init__(
            f"No queued transport registered for connection '{connection_id}'; "
            "it has probably been closed"
        )
        self.connection_id = connection_id


class InvalidTaskError(QueuedDeliveryError):
    """Raised when a queue message body is not a valid delivery task."""

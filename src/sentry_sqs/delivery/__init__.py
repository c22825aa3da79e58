"""
Package: delivery
Description: Queued delivery of Sentry envelopes.

Provides the queue-backed transport, the connection registry that routes
queued tasks back to it, and the SQS worker Lambda that performs the sends.
"""

from .registry import ConnectionRegistry, connections
from .transport import QueuedTransport

__all__ = [
    "ConnectionRegistry",
    "QueuedTransport",
    "connections",
]

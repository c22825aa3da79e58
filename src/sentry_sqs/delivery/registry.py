"""
Module: delivery/registry.py
Description: Process-wide registry of queued transports.

Delivery tasks only carry a connection identifier; the worker uses this
registry to find the queued transport (and the wrapped transport) that
must perform the actual send.
"""

import threading
from typing import TYPE_CHECKING, Dict, Optional

from sentry_sqs.utils.logger import get_logger

if TYPE_CHECKING:
    from sentry_sqs.delivery.transport import QueuedTransport

logger = get_logger(__name__)


class ConnectionRegistry:
    """Thread-safe mapping of connection identifier to queued transport."""

    def __init__(self):
        self._connections: Dict[str, "QueuedTransport"] = {}
        self._lock = threading.Lock()

    def register(self, connection_id: str, transport: "QueuedTransport") -> None:
        """
        Register a queued transport under its connection identifier.

        An existing registration for the same identifier is replaced.
        """
        with self._lock:
            previous = self._connections.get(connection_id)
            self._connections[connection_id] = transport

        if previous is not None and previous is not transport:
            logger.warning(
                "Connection identifier already registered, replacing transport",
                connection_id=connection_id
            )
        else:
            logger.debug("Connection registered", connection_id=connection_id)

    def unregister(
        self,
        connection_id: str,
        transport: Optional["QueuedTransport"] = None
    ) -> bool:
        """
        Remove a registration.

        When transport is given, the entry is only removed if it still
        points at that transport.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            current = self._connections.get(connection_id)
            if current is None or (transport is not None and current is not transport):
                return False
            del self._connections[connection_id]

        logger.debug("Connection unregistered", connection_id=connection_id)
        return True

    def get(self, connection_id: str) -> Optional["QueuedTransport"]:
        with self._lock:
            return self._connections.get(connection_id)

    def clear(self) -> None:
        with self._lock:
            self._connections.clear()

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._connections

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)


# Global registry used by queued transports and the delivery worker
connections = ConnectionRegistry()

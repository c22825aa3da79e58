"""
Package: config
Description: Configuration for the queued delivery adapter.

Exposes the environment-backed Settings and the DSN-scoped option lookup.
"""

from .lookup import CONNECTION_IDENTIFIER, QUEUE_NAME, OptionLookup
from .settings import Settings, settings

__all__ = [
    "CONNECTION_IDENTIFIER",
    "QUEUE_NAME",
    "OptionLookup",
    "Settings",
    "settings",
]

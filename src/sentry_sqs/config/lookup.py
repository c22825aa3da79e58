"""
Module: lookup.py
Description: Option lookup for the queued delivery adapter.

Resolves named options (e.g. 'async.queue.name') from explicit overrides,
the environment-backed Settings, and finally the query string of the DSN
the option is scoped to.
"""

from typing import Mapping, Optional
from urllib.parse import parse_qs, urlsplit

from sentry_sqs.config.settings import Settings, settings as default_settings
from sentry_sqs.utils.logger import get_logger

logger = get_logger(__name__)

# Option naming the SQS queue that receives delivery tasks
QUEUE_NAME = "async.queue.name"

# Option fixing the identifier of the queued connection across every instance
# of the application. Each opened connection should get its own identifier;
# when absent the factory derives one, but its uniqueness is not guaranteed.
CONNECTION_IDENTIFIER = "async.queue.connectionid"


class OptionLookup:
    """
    Key/value lookup for adapter options, optionally scoped by DSN.

    Resolution order:
        1. explicit overrides passed to the constructor
        2. Settings attribute named after the key ('.' replaced by '_')
        3. query options of the DSN

    Empty values are treated as absent.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        overrides: Optional[Mapping[str, str]] = None
    ):
        self.settings = settings if settings is not None else default_settings
        self.overrides = dict(overrides or {})

    def get(self, key: str, dsn: Optional[str] = None) -> Optional[str]:
        """
        Look up an option value.

        Args:
            key: Option name, e.g. 'async.queue.name'
            dsn: DSN the option is scoped to

        Returns:
            The option value, or None when no source defines it
        """
        if not key or not isinstance(key, str):
            raise ValueError("key must be a non-empty string")

        value = self.overrides.get(key)
        if value:
            return value

        value = getattr(self.settings, key.replace('.', '_'), None)
        if value:
            return str(value)

        if dsn:
            value = dsn_options(dsn).get(key)
            if value:
                logger.debug("Option resolved from DSN", option=key)
                return value

        return None


def dsn_options(dsn: str) -> dict:
    """Return the query options of a DSN as a flat dict (last value wins)."""
    query = urlsplit(str(dsn)).query
    return {
        name: values[-1]
        for name, values in parse_qs(query, keep_blank_values=False).items()
    }

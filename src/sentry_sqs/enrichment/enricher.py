"""
Module: enricher.py
Description: before_send hook adding platform identity to Sentry events.

Installed in the client's before_send chain by the factory; runs on each
event before it is serialized into an envelope.
"""

from typing import Any, Dict, Optional

from sentry_sqs.enrichment.platform import LambdaPlatformIdentity, PlatformIdentityProvider

RUNTIME_VERSION_TAG = "runtime.version"
APPLICATION_ID_TAG = "application.id"


class PlatformEventEnricher:
    """
    Tags events with the runtime version and application identity.

    Stateless: the identity provider is queried on every call, and calling
    it again on the same event leaves the event unchanged.
    """

    def __init__(self, identity: Optional[PlatformIdentityProvider] = None):
        self.identity = identity if identity is not None else LambdaPlatformIdentity()

    def enrich(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Set platform fields on an event under construction.

        Args:
            event: Sentry event dictionary

        Returns:
            The same event, mutated
        """
        tags = event.get("tags")
        if tags is None:
            tags = event["tags"] = {}

        runtime_version = self.identity.runtime_version()
        if runtime_version is not None:
            tags[RUNTIME_VERSION_TAG] = runtime_version
        else:
            tags.pop(RUNTIME_VERSION_TAG, None)

        application_id = self.identity.application_id()
        if application_id:
            tags[APPLICATION_ID_TAG] = application_id

        hostname = self.identity.hostname()
        if hostname:
            event["server_name"] = hostname

        return event

    def __call__(self, event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
        return self.enrich(event)

"""
Module: factory.py
Description: Sentry client factory for queued delivery.

Builds sentry_sdk clients whose transport is wrapped in a QueuedTransport
and whose events are enriched with platform identity. Both behaviours are
capabilities applied by composition, so callers can pick them individually
and plug in additional channel transforms or enrichment hooks.

Example:
    >>> from sentry_sqs import init
    >>> init("https://key@o0.ingest.sentry.io/1?async.queue.name=errors")
"""

import enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional

import sentry_sdk
from sentry_sdk.transport import Transport

from sentry_sqs.config.lookup import CONNECTION_IDENTIFIER, QUEUE_NAME, OptionLookup
from sentry_sqs.delivery.transport import QueuedTransport
from sentry_sqs.enrichment.enricher import PlatformEventEnricher
from sentry_sqs.enrichment.platform import LambdaPlatformIdentity, PlatformIdentityProvider
from sentry_sqs.sqs_queue.base import TaskQueue
from sentry_sqs.sqs_queue.sqs import SQSTaskQueue
from sentry_sqs.utils.logger import get_logger

logger = get_logger(__name__)

# (dsn, transport) -> transport
ChannelTransform = Callable[[str, Transport], Transport]
# before_send signature: (event, hint) -> event or None to drop
EnrichmentHook = Callable[[Dict[str, Any], Dict[str, Any]], Optional[Dict[str, Any]]]


class Capability(enum.Enum):
    """Behaviours the factory can apply to a client."""

    QUEUED_DELIVERY = "queued_delivery"
    PLATFORM_ENRICHMENT = "platform_enrichment"


DEFAULT_CAPABILITIES: FrozenSet[Capability] = frozenset(Capability)


def chain_hooks(hooks: Iterable[EnrichmentHook]) -> EnrichmentHook:
    """Combine hooks into one; a hook returning None drops the event."""
    hooks = tuple(hooks)

    def before_send(event, hint):
        for hook in hooks:
            event = hook(event, hint)
            if event is None:
                return None
        return event

    return before_send


class QueuedClientFactory:
    """
    Creates Sentry clients delivering through the platform task queue.

    Args:
        lookup: Option lookup (environment settings + DSN options)
        identity: Platform identity used for enrichment and connection ids
        task_queue: Queue receiving delivery tasks (SQS from settings when None)
        channel_transforms: Extra transforms applied after queue wrapping
        enrichment_hooks: Extra hooks run after platform enrichment
    """

    def __init__(
        self,
        lookup: Optional[OptionLookup] = None,
        identity: Optional[PlatformIdentityProvider] = None,
        task_queue: Optional[TaskQueue] = None,
        channel_transforms: Iterable[ChannelTransform] = (),
        enrichment_hooks: Iterable[EnrichmentHook] = ()
    ):
        self.lookup = lookup if lookup is not None else OptionLookup()
        self.identity = identity if identity is not None else LambdaPlatformIdentity()
        self.task_queue = task_queue
        self.channel_transforms = list(channel_transforms)
        self.enrichment_hooks = list(enrichment_hooks)

    def connection_identifier(self, dsn: str) -> str:
        """
        Return the connection identifier for a DSN.

        The 'async.queue.connectionid' option wins; otherwise the identifier
        is the factory's qualified name, the DSN and the runtime version,
        concatenated. The fallback is stable for a given DSN and version,
        but not guaranteed unique.
        """
        connection_id = self.lookup.get(CONNECTION_IDENTIFIER, dsn)
        if connection_id:
            return connection_id

        return FALLBACK_NAMESPACE + str(dsn) + (self.identity.runtime_version() or "")

    def get_task_queue(self) -> TaskQueue:
        if self.task_queue is None:
            settings = self.lookup.settings
            self.task_queue = SQSTaskQueue(
                settings.default_queue_name,
                region_name=settings.aws_region,
                endpoint_url=settings.sqs_endpoint_url
            )
        return self.task_queue

    def create_queued_transport(self, dsn: str, transport: Transport) -> QueuedTransport:
        """
        Wrap an existing transport in a QueuedTransport configured for the DSN.

        Args:
            dsn: Sentry DSN the options are scoped to
            transport: Transport performing the actual sends

        Returns:
            The queued transport
        """
        queued = QueuedTransport(
            self.connection_identifier(dsn),
            transport,
            task_queue=self.get_task_queue()
        )

        queue_name = self.lookup.get(QUEUE_NAME, dsn)
        if queue_name:
            queued.set_queue(queue_name)

        return queued

    def create_client(
        self,
        dsn: str,
        capabilities: Iterable[Capability] = DEFAULT_CAPABILITIES,
        **options: Any
    ) -> sentry_sdk.Client:
        """
        Create a Sentry client with the requested capabilities.

        Args:
            dsn: Sentry DSN
            capabilities: Capabilities to apply
            **options: Any other sentry_sdk client option

        Returns:
            Configured sentry_sdk.Client
        """
        capabilities = frozenset(capabilities)

        if Capability.PLATFORM_ENRICHMENT in capabilities:
            hooks = [PlatformEventEnricher(self.identity)] + self.enrichment_hooks
            user_before_send = options.get("before_send")
            if user_before_send is not None:
                hooks.append(user_before_send)
            options["before_send"] = chain_hooks(hooks)

        client = sentry_sdk.Client(dsn, **options)

        if Capability.QUEUED_DELIVERY in capabilities:
            if client.transport is None:
                logger.warning("Sentry client has no transport, queued delivery disabled")
            else:
                transport = self.create_queued_transport(dsn, client.transport)
                for transform in self.channel_transforms:
                    transport = transform(dsn, transport)
                client.transport = transport

        logger.info(
            "Sentry client created",
            capabilities=sorted(capability.value for capability in capabilities),
            transport=type(client.transport).__name__ if client.transport else None
        )

        return client


FALLBACK_NAMESPACE = f"{QueuedClientFactory.__module__}.{QueuedClientFactory.__qualname__}"


def init(
    dsn: str,
    capabilities: Iterable[Capability] = DEFAULT_CAPABILITIES,
    factory: Optional[QueuedClientFactory] = None,
    **options: Any
) -> sentry_sdk.Client:
    """
    Create a queued client and bind it to the global Sentry scope.

    Returns:
        The bound client
    """
    factory = factory if factory is not None else QueuedClientFactory()
    client = factory.create_client(dsn, capabilities, **options)
    sentry_sdk.get_global_scope().set_client(client)
    return client

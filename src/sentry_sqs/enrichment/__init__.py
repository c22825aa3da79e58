"""
Package: enrichment
Description: Platform context for reported events.
"""

from .enricher import APPLICATION_ID_TAG, RUNTIME_VERSION_TAG, PlatformEventEnricher
from .platform import LambdaPlatformIdentity, PlatformIdentityProvider, StaticPlatformIdentity

__all__ = [
    "APPLICATION_ID_TAG",
    "RUNTIME_VERSION_TAG",
    "LambdaPlatformIdentity",
    "PlatformEventEnricher",
    "PlatformIdentityProvider",
    "StaticPlatformIdentity",
]

"""
Module: platform.py
Description: Platform identity providers.

Expose the identity of the runtime the adapter runs on (version,
application, instance) so events can be tagged with it.
"""

import os
from typing import Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class PlatformIdentityProvider(Protocol):
    """Ambient identity of the running platform."""

    def runtime_version(self) -> Optional[str]:
        ...

    def application_id(self) -> Optional[str]:
        ...

    def hostname(self) -> Optional[str]:
        ...


class LambdaPlatformIdentity:
    """
    Identity of an AWS Lambda function, read from the runtime environment.

    Values are read on every call so a provider can be created before the
    environment is final.
    """

    VERSION_VARIABLE = "AWS_LAMBDA_FUNCTION_VERSION"
    APPLICATION_VARIABLE = "AWS_LAMBDA_FUNCTION_NAME"
    INSTANCE_VARIABLE = "AWS_LAMBDA_LOG_STREAM_NAME"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ if environ is not None else os.environ

    def runtime_version(self) -> Optional[str]:
        return self.environ.get(self.VERSION_VARIABLE) or None

    def application_id(self) -> Optional[str]:
        return self.environ.get(self.APPLICATION_VARIABLE) or None

    def hostname(self) -> Optional[str]:
        # The log stream name is unique per execution environment
        return self.environ.get(self.INSTANCE_VARIABLE) or None


class StaticPlatformIdentity:
    """Fixed identity, for tests and for platforms without ambient metadata."""

    def __init__(
        self,
        runtime_version: Optional[str] = None,
        application_id: Optional[str] = None,
        hostname: Optional[str] = None
    ):
        self._runtime_version = runtime_version
        self._application_id = application_id
        self._hostname = hostname

    def runtime_version(self) -> Optional[str]:
        return self._runtime_version

    def application_id(self) -> Optional[str]:
        return self._application_id

    def hostname(self) -> Optional[str]:
        return self._hostname

"""
Module: task.py
Description: Delivery task model for queued error reports.

Defines the unit of work put on the task queue for every captured Sentry
envelope. The task carries the serialized envelope plus the connection
identifier needed to route it back to the transport that should send it.

Key Components:
- DeliveryTask: Queue payload with envelope bytes (base64) and routing data
- Validation: Pydantic v2 with custom field validators

Dependencies: pydantic, sentry_sdk, base64
"""

import base64
import binascii
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sentry_sdk.envelope import Envelope


class DeliveryTask(BaseModel):
    """
    Delivery task representing one queued Sentry envelope.

    Attributes:
        connection_id: Identifier of the queued transport that created the task
        queue_name: Queue the task was submitted to (None means default queue)
        envelope: Base64 encoded serialized envelope
        created_at: Timestamp when the task was created
    """

    model_config = ConfigDict(frozen=True)

    connection_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the originating queued transport"
    )
    queue_name: Optional[str] = Field(
        default=None,
        description="Name of the queue the task was submitted to"
    )
    envelope: str = Field(
        ...,
        min_length=1,
        description="Base64 encoded serialized Sentry envelope"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Task creation timestamp"
    )

    @field_validator('envelope')
    @classmethod
    def validate_envelope(cls, v: str) -> str:
        """Validate envelope is well-formed base64."""
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("envelope must be base64 encoded")
        return v

    @classmethod
    def from_envelope(
        cls,
        connection_id: str,
        envelope: Envelope,
        queue_name: Optional[str] = None
    ) -> "DeliveryTask":
        """Build a task from a Sentry envelope."""
        return cls(
            connection_id=connection_id,
            queue_name=queue_name,
            envelope=base64.b64encode(envelope.serialize()).decode("ascii")
        )

    def envelope_bytes(self) -> bytes:
        """Return the serialized envelope."""
        return base64.b64decode(self.envelope)

    def to_envelope(self) -> Envelope:
        """Rebuild the Sentry envelope carried by this task."""
        return Envelope.deserialize(self.envelope_bytes())

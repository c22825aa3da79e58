"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures the queued delivery adapter from environment variables with
validation and defaults. Supports .env files for local development.
Every variable is prefixed with SENTRY_ (e.g. SENTRY_ASYNC_QUEUE_NAME).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SENTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: Optional[str] = Field(
        default=None,
        description="AWS region of the task queue (falls back to the boto3 default chain)"
    )
    sqs_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom SQS endpoint, e.g. a local emulator"
    )

    # Queue settings
    default_queue_name: str = Field(
        default="sentry-events",
        description="Queue used when no async.queue.name option is configured"
    )
    async_queue_name: Optional[str] = Field(
        default=None,
        description="Named SQS queue receiving delivery tasks"
    )
    async_queue_connectionid: Optional[str] = Field(
        default=None,
        description="Explicit connection identifier of the queued transport"
    )

    # Worker settings
    worker_flush_timeout: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Seconds the worker waits for the wrapped transport to flush"
    )

    # Metrics settings
    metrics_enabled: bool = Field(
        default=False,
        description="Publish worker delivery metrics to CloudWatch"
    )
    metrics_namespace: str = Field(
        default="SentrySQS",
        description="CloudWatch metrics namespace"
    )

    @field_validator('default_queue_name')
    @classmethod
    def validate_queue_name(cls, v: str) -> str:
        """Validate SQS queue names."""
        if not v or not isinstance(v, str):
            raise ValueError("Queue name must be a non-empty string")

        # SQS allows alphanumerics, hyphens and underscores (plus .fifo suffix)
        import re
        if not re.match(r'^[a-zA-Z0-9_-]{1,75}(\.fifo)?$', v):
            raise ValueError(
                "Queue name must contain only letters, numbers, hyphens, and underscores"
            )

        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()

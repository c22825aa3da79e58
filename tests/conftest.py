"""
Module: conftest.py
Description: Shared pytest fixtures for sentry-sqs tests.

Provides test settings, recording transports, sample envelopes and
moto-backed SQS queues so the queued delivery flow can be exercised
without AWS or a Sentry server.
"""

import pytest
import boto3
from moto import mock_aws
from pydantic_settings import SettingsConfigDict
from sentry_sdk.envelope import Envelope
from sentry_sdk.transport import Transport

from sentry_sqs.config.lookup import OptionLookup
from sentry_sqs.config.settings import Settings
from sentry_sqs.delivery.registry import connections
from sentry_sqs.enrichment.platform import StaticPlatformIdentity
from sentry_sqs.sqs_queue.sqs import SQSTaskQueue

TEST_DSN = "https://public@sentry.example.com/42"
DEFAULT_QUEUE = "sentry-events"
ERROR_QUEUE = "error-queue"


class TestSettings(Settings):
    """Test settings that ignore .env files."""

    __test__ = False

    model_config = SettingsConfigDict(
        env_prefix="SENTRY_",
        env_file=None,  # Disable .env file loading for tests
        case_sensitive=False,
        extra="ignore"
    )


class RecordingTransport(Transport):
    """Transport double recording every call instead of sending."""

    def __init__(self, options=None):
        super().__init__(options)
        self.envelopes = []
        self.flushes = []
        self.killed = False

    def capture_envelope(self, envelope):
        self.envelopes.append(envelope)

    def flush(self, timeout, callback=None):
        self.flushes.append(timeout)

    def kill(self):
        self.killed = True


def receive_all(sqs_client, queue_name):
    """Drain up to ten messages (with attributes) from a mocked queue."""
    url = sqs_client.get_queue_url(QueueName=queue_name)['QueueUrl']
    response = sqs_client.receive_message(
        QueueUrl=url,
        MaxNumberOfMessages=10,
        MessageAttributeNames=['All']
    )
    return response.get('Messages', [])


@pytest.fixture(autouse=True)
def clean_registry():
    """Ensure no queued transport leaks between tests."""
    connections.clear()
    yield
    connections.clear()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove ambient configuration that would change test outcomes."""
    for name in (
        "SENTRY_ASYNC_QUEUE_NAME",
        "SENTRY_ASYNC_QUEUE_CONNECTIONID",
        "SENTRY_DEFAULT_QUEUE_NAME",
        "AWS_LAMBDA_FUNCTION_VERSION",
        "AWS_LAMBDA_FUNCTION_NAME",
        "AWS_LAMBDA_LOG_STREAM_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_settings():
    """Provide test configuration settings."""
    return TestSettings()


@pytest.fixture
def lookup(test_settings):
    return OptionLookup(test_settings)


@pytest.fixture
def identity():
    return StaticPlatformIdentity(
        runtime_version="20",
        application_id="billing-api",
        hostname="2024/01/15/[20]abcdef"
    )


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def sample_envelope():
    """Envelope holding a single error event."""
    envelope = Envelope()
    envelope.add_event({
        "event_id": "9ec79c33ec9942ab8353589fcb2e04dc",
        "level": "error",
        "message": "Payment provider unreachable",
        "tags": {"component": "billing"}
    })
    return envelope


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def sqs_client(aws_credentials):
    """
    Mocked SQS with the default and the error queue created.

    Uses moto so every boto3 client created inside the test talks to
    the in-memory SQS.
    """
    with mock_aws():
        client = boto3.client('sqs', region_name='us-east-1')
        client.create_queue(QueueName=DEFAULT_QUEUE)
        client.create_queue(QueueName=ERROR_QUEUE)
        yield client


@pytest.fixture
def task_queue(sqs_client):
    """SQSTaskQueue bound to the mocked default queue."""
    return SQSTaskQueue(DEFAULT_QUEUE, region_name='us-east-1')

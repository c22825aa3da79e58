"""
Module: test_queued_flow.py
Description: Integration tests for the queued delivery flow.

Captures errors with a factory-built Sentry client, lets moto SQS hold
the delivery tasks, then runs the worker Lambda handler over the received
messages and checks the wrapped transport sends the original events.
"""

import json

import pytest

from sentry_sqs.config.lookup import QUEUE_NAME, OptionLookup
from sentry_sqs.delivery.worker import handler as sqs_handler
from sentry_sqs.enrichment import RUNTIME_VERSION_TAG
from sentry_sqs.factory import QueuedClientFactory
from conftest import ERROR_QUEUE, TEST_DSN, RecordingTransport, receive_all


def lambda_event(messages):
    """Convert received SQS messages into a Lambda SQS event."""
    return {"Records": [
        {
            "messageId": message["MessageId"],
            "receiptHandle": message["ReceiptHandle"],
            "body": message["Body"],
            "eventSource": "aws:sqs",
        }
        for message in messages
    ]}


@pytest.fixture
def client(test_settings, identity, task_queue):
    lookup = OptionLookup(test_settings, overrides={QUEUE_NAME: ERROR_QUEUE})
    factory = QueuedClientFactory(lookup=lookup, identity=identity, task_queue=task_queue)
    return factory.create_client(
        TEST_DSN,
        transport=RecordingTransport,
        default_integrations=False,
        auto_enabling_integrations=False
    )


class TestQueuedFlow:
    """End-to-end queued delivery."""

    def test_capture_enqueue_and_deliver(self, client, sqs_client):
        wrapped = client.transport.transport

        client.capture_event({"message": "Payment provider unreachable", "level": "error"})
        client.capture_event({"message": "Invoice rendering failed", "level": "error"})
        assert wrapped.envelopes == []

        messages = receive_all(sqs_client, ERROR_QUEUE)
        assert len(messages) == 2

        result = sqs_handler(lambda_event(messages), None)

        assert result == {"batchItemFailures": []}
        delivered = [
            json.loads(envelope.items[0].payload.get_bytes())
            for envelope in wrapped.envelopes
        ]
        assert sorted(event["message"] for event in delivered) == [
            "Invoice rendering failed",
            "Payment provider unreachable",
        ]
        assert all(event["tags"][RUNTIME_VERSION_TAG] == "20" for event in delivered)
        assert len(wrapped.flushes) == 2

    def test_closed_client_leaves_tasks_for_retry(self, client, sqs_client):
        client.capture_event({"message": "boom", "level": "error"})
        client.close()

        messages = receive_all(sqs_client, ERROR_QUEUE)
        result = sqs_handler(lambda_event(messages), None)

        assert result == {"batchItemFailures": [{"itemIdentifier": messages[0]["MessageId"]}]}

    def test_worker_process_rebuilds_connection(self, client, sqs_client, test_settings, identity, task_queue):
        client.capture_event({"message": "boom", "level": "error"})
        messages = receive_all(sqs_client, ERROR_QUEUE)

        # A fresh process builds its client with the same DSN and version,
        # so the derived connection identifier matches the queued task.
        client.close()
        worker_client = QueuedClientFactory(
            lookup=OptionLookup(test_settings, overrides={QUEUE_NAME: ERROR_QUEUE}),
            identity=identity,
            task_queue=task_queue
        ).create_client(
            TEST_DSN,
            transport=RecordingTransport,
            default_integrations=False,
            auto_enabling_integrations=False
        )

        result = sqs_handler(lambda_event(messages), None)

        assert result == {"batchItemFailures": []}
        assert len(worker_client.transport.transport.envelopes) == 1

"""
Module: metrics.py
Description: CloudWatch metrics for the delivery worker.

Publishes, per source queue, how many queued envelopes a worker batch
delivered and how many it handed back to SQS for redelivery.
"""

from collections import Counter
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sentry_sqs.utils.logger import get_logger

logger = get_logger(__name__)

DELIVERED_METRIC = "EnvelopesDelivered"
FAILED_METRIC = "EnvelopeDeliveryFailures"


class MetricsClient:
    """CloudWatch client publishing worker delivery counts."""

    def __init__(self, namespace: str = "SentrySQS", region_name: Optional[str] = None):
        self.namespace = namespace
        self.cloudwatch = boto3.client('cloudwatch', region_name=region_name)

    def publish_delivery_counts(self, delivered: Counter, failed: Counter) -> None:
        """
        Publish one batch of delivery counts, dimensioned by QueueName.

        Failures are only published for queues that had any. Errors are
        logged and swallowed so a metrics outage never fails the batch.

        Args:
            delivered: Delivered envelopes per queue name
            failed: Failed records per queue name
        """
        metric_data = []
        for queue_name in sorted(set(delivered) | set(failed)):
            dimensions = [{'Name': 'QueueName', 'Value': queue_name}]
            metric_data.append({
                'MetricName': DELIVERED_METRIC,
                'Dimensions': dimensions,
                'Value': delivered[queue_name],
                'Unit': 'Count'
            })
            if failed[queue_name]:
                metric_data.append({
                    'MetricName': FAILED_METRIC,
                    'Dimensions': dimensions,
                    'Value': failed[queue_name],
                    'Unit': 'Count'
                })

        if not metric_data:
            return

        try:
            self.cloudwatch.put_metric_data(Namespace=self.namespace, MetricData=metric_data)
            logger.debug(
                "Delivery metrics published",
                namespace=self.namespace,
                queues=sorted(set(delivered) | set(failed))
            )

        except (ClientError, BotoCoreError) as e:
            logger.warning(
                "Failed to publish delivery metrics",
                namespace=self.namespace,
                error=str(e)
            )

"""Resolves logical queue names to queue URLs."""

import logging

from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.schemas import QueueName

logger = logging.getLogger(__name__)


class QueueHandleResolver:
    """Resolves a queue name to its URL, optionally creating the queue."""

    def __init__(self, sqs_client: SQSClient):
        self._sqs_client = sqs_client

    def resolve(self, name: QueueName, create_if_missing: bool = False) -> str:
        """
        Resolve a queue name to its URL.

        Failures are fatal to the caller: nothing is cached and nothing is
        retried.

        Args:
            name: Logical queue name.
            create_if_missing: Create the queue when it does not exist.

        Returns:
            Queue URL.

        Raises:
            QueueUnavailable: The queue does not exist (lookup path only).
            ProviderError: Transport or auth failure.
        """
        if create_if_missing:
            queue_url = self._sqs_client.create_queue(name.name)
        else:
            queue_url = self._sqs_client.get_queue_url(name.name)
        logger.info("Resolved queue %s -> %s", name, queue_url)
        return queue_url

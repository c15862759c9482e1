"""Receives one bounded batch of messages from a queue."""

import asyncio
import logging
from datetime import timedelta
from typing import Generic, TypeVar

from typed_sqs.exceptions import ReceiveFailed
from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.codec import MessageCodec
from typed_sqs.models.envelope import ConsumeAction, MessageEnvelope
from typed_sqs.models.schemas import MessageId

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Most messages SQS returns from a single ReceiveMessage call
PROVIDER_BATCH_LIMIT = 10

# Long-poll wait for every receive call, in seconds
LONG_POLL_WAIT_SECONDS = 10


def lock_seconds(lock_duration: timedelta) -> int:
    """Convert a visibility lock to whole seconds, truncating fractions."""
    if lock_duration < timedelta(0):
        raise ValueError(f"lock duration must not be negative: {lock_duration}")
    return int(lock_duration.total_seconds())


class BatchReceiver(Generic[T]):
    """Issues single ReceiveMessage calls and wraps the records in envelopes."""

    def __init__(self, sqs_client: SQSClient, queue_url: str, codec: MessageCodec[T]):
        """
        Initialize receiver.

        Args:
            sqs_client: SQSClient instance.
            queue_url: Resolved queue URL.
            codec: Codec used to decode message bodies.
        """
        self._sqs_client = sqs_client
        self._queue_url = queue_url
        self._codec = codec

    async def receive_batch(
        self,
        max_count: int,
        lock_duration: timedelta = timedelta(0),
    ) -> list[MessageEnvelope[T]]:
        """
        Receive up to max_count messages in one call.

        Args:
            max_count: Messages to request, between 0 and PROVIDER_BATCH_LIMIT.
            lock_duration: Visibility lock applied to received messages.

        Returns:
            Envelopes for the received messages, empty when none arrived
            within the long-poll wait.

        Raises:
            ReceiveFailed: Transport failure, or any record failed to decode.
        """
        if not 0 <= max_count <= PROVIDER_BATCH_LIMIT:
            raise ValueError(
                f"max_count must be between 0 and {PROVIDER_BATCH_LIMIT}, got {max_count}"
            )
        visibility_timeout = lock_seconds(lock_duration)

        if max_count == 0:
            return []

        try:
            raw_messages = await asyncio.to_thread(
                self._sqs_client.receive_messages,
                queue_url=self._queue_url,
                max_messages=max_count,
                wait_time=LONG_POLL_WAIT_SECONDS,
                visibility_timeout=visibility_timeout,
            )
        except Exception as e:
            raise ReceiveFailed(f"Failed to receive from {self._queue_url}", cause=e) from e

        envelopes = [self._to_envelope(raw) for raw in raw_messages]
        logger.debug(
            "Received %d of %d requested message(s) (lock=%ds)",
            len(envelopes),
            max_count,
            visibility_timeout,
        )
        return envelopes

    def _to_envelope(self, raw: dict) -> MessageEnvelope[T]:
        message_id = raw.get("MessageId")
        if not message_id:
            raise ReceiveFailed("Received a message without a message id")

        receipt_handle = raw.get("ReceiptHandle")
        if not receipt_handle:
            raise ReceiveFailed(f"Message {message_id} has no receipt handle")

        try:
            body = self._codec.decode(raw.get("Body", ""))
        except Exception as e:
            raise ReceiveFailed(f"Failed to decode message {message_id}", cause=e) from e

        return MessageEnvelope(
            id=MessageId(id=message_id),
            body=body,
            consume=ConsumeAction(
                sqs_client=self._sqs_client,
                queue_url=self._queue_url,
                receipt_handle=receipt_handle,
            ),
            attributes=dict(raw.get("Attributes", {})),
        )

"""Sends typed messages to a queue."""

import asyncio
import logging
from typing import Generic, TypeVar

from typed_sqs.exceptions import SendFailed
from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.codec import MessageCodec
from typed_sqs.models.schemas import MessageId

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MessageSender(Generic[T]):
    """Encodes and submits outbound messages to one queue."""

    def __init__(self, sqs_client: SQSClient, queue_url: str, codec: MessageCodec[T]):
        """
        Initialize sender.

        Args:
            sqs_client: SQSClient instance.
            queue_url: Resolved queue URL.
            codec: Codec used to encode message bodies.
        """
        self._sqs_client = sqs_client
        self._queue_url = queue_url
        self._codec = codec

    async def send(self, body: T) -> MessageId:
        """
        Send one message.

        No retry is attempted; the caller decides what to do on failure.

        Args:
            body: Message body.

        Returns:
            MessageId assigned by SQS.

        Raises:
            SendFailed: Encoding or submission failed.
        """
        try:
            raw = self._codec.encode(body)
        except Exception as e:
            raise SendFailed("Failed to encode message body", cause=e) from e

        try:
            message_id = await asyncio.to_thread(
                self._sqs_client.send_message,
                queue_url=self._queue_url,
                message_body=raw,
            )
        except Exception as e:
            raise SendFailed(f"Failed to send message to {self._queue_url}", cause=e) from e

        logger.debug("Sent message %s", message_id)
        return MessageId(id=message_id)

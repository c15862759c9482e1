"""Typed queue bound to one SQS queue."""

import logging
from datetime import timedelta
from typing import AsyncIterator, Generic, TypeVar

from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.codec import MessageCodec
from typed_sqs.models.envelope import MessageEnvelope
from typed_sqs.models.schemas import MessageId, QueueName
from typed_sqs.services.batch_assembler import BatchAssembler
from typed_sqs.services.batch_receiver import BatchReceiver
from typed_sqs.services.message_sender import MessageSender
from typed_sqs.services.poll_stream import PollStream
from typed_sqs.services.queue_resolver import QueueHandleResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQSQueue(Generic[T]):
    """
    Typed send/receive API over a single SQS queue.

    The queue URL is resolved once, in the constructor, and kept for the
    lifetime of the instance. Received messages stay on the queue until their
    envelope is consumed.
    """

    def __init__(
        self,
        sqs_client: SQSClient,
        queue_name: QueueName | str,
        codec: MessageCodec[T],
        create_if_missing: bool = False,
    ):
        """
        Initialize queue and resolve its URL.

        Args:
            sqs_client: SQSClient instance.
            queue_name: Logical queue name.
            codec: Codec converting message bodies to and from strings.
            create_if_missing: Create the queue when it does not exist.

        Raises:
            QueueUnavailable: The queue does not exist.
            ProviderError: The lookup failed.
        """
        if isinstance(queue_name, str):
            queue_name = QueueName(name=queue_name)
        self._queue_name = queue_name
        self._queue_url = QueueHandleResolver(sqs_client).resolve(
            queue_name, create_if_missing
        )

        receiver = BatchReceiver(sqs_client, self._queue_url, codec)
        self._sender = MessageSender(sqs_client, self._queue_url, codec)
        self._assembler = BatchAssembler(receiver)
        self._poller = PollStream(receiver)

    @property
    def queue_name(self) -> QueueName:
        return self._queue_name

    @property
    def queue_url(self) -> str:
        return self._queue_url

    async def send(self, body: T) -> MessageId:
        """Send one message and return its id."""
        return await self._sender.send(body)

    async def next(self) -> MessageEnvelope[T] | None:
        """Receive one message without a visibility lock, or None."""
        return await self._poller.next()

    async def next_with_lock(self, lock_duration: timedelta) -> MessageEnvelope[T] | None:
        """Receive one message locked for lock_duration, or None."""
        return await self._poller.next_with_lock(lock_duration)

    async def next_batch(self, max_batch_size: int) -> list[MessageEnvelope[T]]:
        """Receive up to max_batch_size distinct messages without a lock."""
        return await self._assembler.fetch_up_to(max_batch_size, timedelta(0))

    async def next_batch_with_lock(
        self, max_batch_size: int, lock_duration: timedelta
    ) -> list[MessageEnvelope[T]]:
        """Receive up to max_batch_size distinct messages locked for lock_duration."""
        return await self._assembler.fetch_up_to(max_batch_size, lock_duration)

    def stream(self) -> AsyncIterator[MessageEnvelope[T]]:
        """Infinite stream of messages without a visibility lock."""
        return self._poller.stream_forever()

    def stream_with_lock(self, lock_duration: timedelta) -> AsyncIterator[MessageEnvelope[T]]:
        """Infinite stream of messages, each locked for lock_duration."""
        return self._poller.stream_forever_with_lock(lock_duration)

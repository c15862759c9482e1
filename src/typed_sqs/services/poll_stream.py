"""Continuous polling over single-message receives."""

import logging
from datetime import timedelta
from typing import AsyncIterator, Generic, TypeVar

from typed_sqs.models.envelope import MessageEnvelope
from typed_sqs.services.batch_receiver import BatchReceiver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PollStream(Generic[T]):
    """
    Single-message lookups and the infinite streams built on them.

    The streams hold no cursor: each new stream simply starts polling again.
    An empty poll is retried at once (the long-poll wait paces the loop); a
    failed poll ends the stream with the error.
    """

    def __init__(self, receiver: BatchReceiver[T]):
        self._receiver = receiver

    async def next(self) -> MessageEnvelope[T] | None:
        """Receive one message without extending its visibility."""
        return await self.next_with_lock(timedelta(0))

    async def next_with_lock(self, lock_duration: timedelta) -> MessageEnvelope[T] | None:
        """Receive one message, hiding it from other receivers for lock_duration."""
        envelopes = await self._receiver.receive_batch(1, lock_duration)
        return envelopes[0] if envelopes else None

    def stream_forever(self) -> AsyncIterator[MessageEnvelope[T]]:
        """Yield messages one at a time, forever, without a visibility lock."""
        return self.stream_forever_with_lock(timedelta(0))

    async def stream_forever_with_lock(
        self, lock_duration: timedelta
    ) -> AsyncIterator[MessageEnvelope[T]]:
        """Yield messages one at a time, forever, each locked for lock_duration."""
        while True:
            envelope = await self.next_with_lock(lock_duration)
            if envelope is None:
                logger.debug("Empty poll, polling again")
                continue
            yield envelope

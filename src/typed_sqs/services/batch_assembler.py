"""Fetches arbitrarily large batches as concurrent provider-sized requests."""

import asyncio
import logging
from datetime import timedelta
from typing import Generic, TypeVar

from typed_sqs.models.envelope import MessageEnvelope
from typed_sqs.models.schemas import MessageId
from typed_sqs.services.batch_receiver import PROVIDER_BATCH_LIMIT, BatchReceiver

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_batch_size(max_batch_size: int, limit: int = PROVIDER_BATCH_LIMIT) -> list[int]:
    """
    Split a batch size into sub-request sizes no larger than limit.

    Zero-sized remainders are dropped, so 20 gives [10, 10] and 0 gives [].
    """
    if max_batch_size < 0:
        raise ValueError(f"max_batch_size must not be negative, got {max_batch_size}")
    full, remainder = divmod(max_batch_size, limit)
    sizes = [limit] * full
    if remainder > 0:
        sizes.append(remainder)
    return sizes


class BatchAssembler(Generic[T]):
    """Issues concurrent sub-requests and merges them by message id."""

    def __init__(self, receiver: BatchReceiver[T]):
        self._receiver = receiver

    async def fetch_up_to(
        self,
        max_batch_size: int,
        lock_duration: timedelta = timedelta(0),
    ) -> list[MessageEnvelope[T]]:
        """
        Receive up to max_batch_size distinct messages.

        All sub-requests must succeed; the first failure is raised and no
        partial result is returned. Result order is not guaranteed.

        Args:
            max_batch_size: Upper bound on the number of messages.
            lock_duration: Visibility lock applied to every sub-request.

        Returns:
            Envelopes deduplicated by message id.
        """
        sizes = partition_batch_size(max_batch_size)
        if not sizes:
            return []

        batches = await asyncio.gather(
            *(self._receiver.receive_batch(size, lock_duration) for size in sizes)
        )

        distinct: dict[MessageId, MessageEnvelope[T]] = {}
        for batch in batches:
            for envelope in batch:
                distinct[envelope.id] = envelope

        received = sum(len(batch) for batch in batches)
        if received != len(distinct):
            logger.info("Dropped %d duplicate message(s)", received - len(distinct))
        logger.debug(
            "Fetched %d message(s) with %d sub-request(s)", len(distinct), len(sizes)
        )
        return list(distinct.values())

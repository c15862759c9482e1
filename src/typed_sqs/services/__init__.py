from .batch_assembler import BatchAssembler, partition_batch_size
from .batch_receiver import (
    LONG_POLL_WAIT_SECONDS,
    PROVIDER_BATCH_LIMIT,
    BatchReceiver,
    lock_seconds,
)
from .message_sender import MessageSender
from .poll_stream import PollStream
from .queue_resolver import QueueHandleResolver

__all__ = [
    "BatchAssembler",
    "partition_batch_size",
    "LONG_POLL_WAIT_SECONDS",
    "PROVIDER_BATCH_LIMIT",
    "BatchReceiver",
    "lock_seconds",
    "MessageSender",
    "PollStream",
    "QueueHandleResolver",
]

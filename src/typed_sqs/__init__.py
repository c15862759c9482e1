"""Typed client over Amazon SQS queues."""

from typed_sqs.exceptions import (
    DeletionFailed,
    ProviderError,
    QueueError,
    QueueUnavailable,
    ReceiveFailed,
    SendFailed,
)
from typed_sqs.models import (
    ConsumeAction,
    JsonCodec,
    MessageCodec,
    MessageEnvelope,
    MessageId,
    PydanticCodec,
    QueueName,
    StringCodec,
)
from typed_sqs.queue import SQSQueue

__all__ = [
    "SQSQueue",
    "MessageCodec",
    "StringCodec",
    "JsonCodec",
    "PydanticCodec",
    "ConsumeAction",
    "MessageEnvelope",
    "MessageId",
    "QueueName",
    "QueueError",
    "QueueUnavailable",
    "ProviderError",
    "SendFailed",
    "ReceiveFailed",
    "DeletionFailed",
]

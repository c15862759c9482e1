"""Models package."""

from typed_sqs.models.codec import JsonCodec, MessageCodec, PydanticCodec, StringCodec
from typed_sqs.models.envelope import ConsumeAction, MessageEnvelope
from typed_sqs.models.schemas import MessageId, QueueName

__all__ = [
    "MessageCodec",
    "StringCodec",
    "JsonCodec",
    "PydanticCodec",
    "ConsumeAction",
    "MessageEnvelope",
    "MessageId",
    "QueueName",
]

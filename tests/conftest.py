"""Shared fixtures and an in-memory stand-in for the boto3 SQS client."""

import threading
import time
import uuid
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.envelope import ConsumeAction, MessageEnvelope
from typed_sqs.models.schemas import MessageId

QUEUE_URL_PREFIX = "https://sqs.us-east-1.amazonaws.com/000000000000/"


class FakeSQSBotoClient:
    """Thread-safe in-memory queue speaking the boto3 SQS call signatures.

    Long-poll waits are not simulated: an empty receive returns at once.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._queues: dict[str, list[dict]] = {}
        self.receive_calls: list[dict] = []
        self.delete_calls: list[str] = []

    def _queue(self, queue_url: str) -> list[dict]:
        if queue_url not in self._queues:
            raise ClientError(
                {"Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue"}},
                "ReceiveMessage",
            )
        return self._queues[queue_url]

    def create_queue(self, QueueName: str) -> dict:
        with self._lock:
            url = QUEUE_URL_PREFIX + QueueName
            self._queues.setdefault(url, [])
            return {"QueueUrl": url}

    def get_queue_url(self, QueueName: str) -> dict:
        with self._lock:
            url = QUEUE_URL_PREFIX + QueueName
            if url not in self._queues:
                raise ClientError(
                    {"Error": {"Code": "AWS.SimpleQueueService.NonExistentQueue"}},
                    "GetQueueUrl",
                )
            return {"QueueUrl": url}

    def send_message(self, QueueUrl: str, MessageBody: str) -> dict:
        with self._lock:
            message_id = str(uuid.uuid4())
            self._queue(QueueUrl).append(
                {
                    "MessageId": message_id,
                    "Body": MessageBody,
                    "invisible_until": 0.0,
                    "receipt_handles": set(),
                    "receive_count": 0,
                }
            )
            return {"MessageId": message_id}

    def receive_message(
        self,
        QueueUrl: str,
        MaxNumberOfMessages: int = 1,
        WaitTimeSeconds: int = 0,
        VisibilityTimeout: int = 30,
        AttributeNames: list[str] | None = None,
    ) -> dict:
        with self._lock:
            self.receive_calls.append(
                {
                    "MaxNumberOfMessages": MaxNumberOfMessages,
                    "WaitTimeSeconds": WaitTimeSeconds,
                    "VisibilityTimeout": VisibilityTimeout,
                }
            )
            now = time.monotonic()
            delivered = []
            for record in self._queue(QueueUrl):
                if len(delivered) >= MaxNumberOfMessages:
                    break
                if record["invisible_until"] > now:
                    continue
                record["invisible_until"] = now + VisibilityTimeout
                record["receive_count"] += 1
                receipt_handle = str(uuid.uuid4())
                record["receipt_handles"].add(receipt_handle)
                delivered.append(
                    {
                        "MessageId": record["MessageId"],
                        "ReceiptHandle": receipt_handle,
                        "Body": record["Body"],
                        "Attributes": {
                            "ApproximateReceiveCount": str(record["receive_count"]),
                        },
                    }
                )
            if not delivered:
                return {}
            return {"Messages": delivered}

    def delete_message(self, QueueUrl: str, ReceiptHandle: str) -> dict:
        with self._lock:
            self.delete_calls.append(ReceiptHandle)
            records = self._queue(QueueUrl)
            for record in records:
                if ReceiptHandle in record["receipt_handles"]:
                    records.remove(record)
                    break
            return {}

    def pending(self, queue_url: str) -> int:
        with self._lock:
            return len(self._queue(queue_url))


@pytest.fixture
def fake_boto_client() -> FakeSQSBotoClient:
    return FakeSQSBotoClient()


@pytest.fixture
def sqs_client(fake_boto_client) -> SQSClient:
    return SQSClient(fake_boto_client)


@pytest.fixture
def make_envelope():
    """Factory for envelopes whose deletion goes to a mock SQSClient."""

    def _make(message_id: str, body="body", sqs_client=None) -> MessageEnvelope:
        return MessageEnvelope(
            id=MessageId(id=message_id),
            body=body,
            consume=ConsumeAction(
                sqs_client=sqs_client or MagicMock(spec=SQSClient),
                queue_url="https://sqs.test/queue",
                receipt_handle=f"receipt-{message_id}-{uuid.uuid4()}",
            ),
        )

    return _make

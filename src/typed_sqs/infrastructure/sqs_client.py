"""SQS client wrapper for AWS operations."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from typed_sqs.exceptions import ProviderError, QueueUnavailable

logger = logging.getLogger(__name__)

# Error codes SQS uses for a missing queue (JSON and legacy query protocols)
NON_EXISTENT_QUEUE_CODES = frozenset(
    {
        "AWS.SimpleQueueService.NonExistentQueue",
        "QueueDoesNotExist",
    }
)


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class SQSClient:
    """
    Handles SQS operations.

    Failures are raised as ProviderError (or QueueUnavailable for a missing
    queue) so callers can tell an empty response from a failed one.
    """

    def __init__(self, client: Any):
        """
        Initialize SQS client wrapper.

        Args:
            client: boto3 SQS client instance.
        """
        self._client = client

    def get_queue_url(self, queue_name: str) -> str:
        """
        Look up the URL of an existing queue.

        Args:
            queue_name: Queue name.

        Returns:
            Queue URL.
        """
        try:
            response = self._client.get_queue_url(QueueName=queue_name)
        except ClientError as e:
            if _error_code(e) in NON_EXISTENT_QUEUE_CODES:
                raise QueueUnavailable(queue_name) from e
            raise ProviderError("GetQueueUrl", str(e), _error_code(e)) from e
        except BotoCoreError as e:
            raise ProviderError("GetQueueUrl", str(e)) from e
        return response["QueueUrl"]

    def create_queue(self, queue_name: str) -> str:
        """
        Create a queue, or return the URL of an identical existing one.

        Args:
            queue_name: Queue name.

        Returns:
            Queue URL.
        """
        try:
            response = self._client.create_queue(QueueName=queue_name)
        except ClientError as e:
            raise ProviderError("CreateQueue", str(e), _error_code(e)) from e
        except BotoCoreError as e:
            raise ProviderError("CreateQueue", str(e)) from e
        logger.info("Created or found queue %s", queue_name)
        return response["QueueUrl"]

    def send_message(self, queue_url: str, message_body: str) -> str:
        """
        Send a message to SQS queue.

        Args:
            queue_url: SQS queue URL.
            message_body: Message body string.

        Returns:
            Message ID assigned by SQS.
        """
        try:
            response = self._client.send_message(
                QueueUrl=queue_url,
                MessageBody=message_body,
            )
        except ClientError as e:
            raise ProviderError("SendMessage", str(e), _error_code(e)) from e
        except BotoCoreError as e:
            raise ProviderError("SendMessage", str(e)) from e
        logger.info("Sent message to SQS: %s", queue_url)
        return response["MessageId"]

    def receive_messages(
        self,
        queue_url: str,
        max_messages: int = 1,
        wait_time: int = 10,
        visibility_timeout: int = 0,
    ) -> list[dict]:
        """
        Receive messages from SQS queue.

        Args:
            queue_url: SQS queue URL.
            max_messages: Maximum number of messages to receive.
            wait_time: Long polling wait time in seconds.
            visibility_timeout: Visibility timeout in seconds.

        Returns:
            List of raw message dictionaries (empty when none arrived).
        """
        try:
            response = self._client.receive_message(
                QueueUrl=queue_url,
                MaxNumberOfMessages=max_messages,
                WaitTimeSeconds=wait_time,
                VisibilityTimeout=visibility_timeout,
                AttributeNames=["All"],
            )
        except ClientError as e:
            raise ProviderError("ReceiveMessage", str(e), _error_code(e)) from e
        except BotoCoreError as e:
            raise ProviderError("ReceiveMessage", str(e)) from e
        messages = response.get("Messages", [])
        if messages:
            logger.info("Received %d message(s) from SQS", len(messages))
        return messages

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        """
        Delete a message from SQS queue.

        Args:
            queue_url: SQS queue URL.
            receipt_handle: Message receipt handle.
        """
        try:
            self._client.delete_message(
                QueueUrl=queue_url,
                ReceiptHandle=receipt_handle,
            )
        except ClientError as e:
            raise ProviderError("DeleteMessage", str(e), _error_code(e)) from e
        except BotoCoreError as e:
            raise ProviderError("DeleteMessage", str(e)) from e
        logger.info("Deleted message from SQS")

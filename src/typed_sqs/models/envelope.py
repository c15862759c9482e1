"""Envelope wrapping one received record and its deferred deletion."""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from typed_sqs.exceptions import DeletionFailed
from typed_sqs.models.schemas import MessageId

if TYPE_CHECKING:
    from typed_sqs.infrastructure.sqs_client import SQSClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


class ConsumeAction:
    """
    One-shot deletion of a single delivery of a record.

    Bound to the receipt handle of the delivery it was created for. The first
    call issues the delete, later calls do nothing. Deletion is best effort:
    a failed delete is logged and the record becomes visible again once its
    visibility lock expires.
    """

    def __init__(self, sqs_client: "SQSClient", queue_url: str, receipt_handle: str):
        self._sqs_client = sqs_client
        self._queue_url = queue_url
        self._receipt_handle = receipt_handle
        self._lock = threading.Lock()
        self._invoked = False

    @property
    def receipt_handle(self) -> str:
        """Receipt handle of the delivery this action deletes."""
        return self._receipt_handle

    @property
    def invoked(self) -> bool:
        """Whether the deletion has already been requested."""
        return self._invoked

    def __call__(self) -> "asyncio.Future[None] | None":
        """
        Delete the record from the queue.

        Returns:
            Inside a running event loop, an awaitable that never raises: the
            future of the delete scheduled on the default executor, or an
            already completed future for repeated calls. Outside a loop the
            delete runs inline and None is returned.
        """
        with self._lock:
            repeated = self._invoked
            self._invoked = True

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if repeated:
            logger.debug("Record already consumed, skipping delete")
            if loop is None:
                return None
            done = loop.create_future()
            done.set_result(None)
            return done

        if loop is None:
            self._delete()
            return None
        return loop.run_in_executor(None, self._delete)

    def _delete(self) -> None:
        try:
            self._sqs_client.delete_message(
                queue_url=self._queue_url,
                receipt_handle=self._receipt_handle,
            )
        except Exception as e:
            error = DeletionFailed("Failed to delete consumed record", cause=e)
            logger.warning(
                "%s (it will be redelivered after its visibility lock expires)",
                error,
            )


@dataclass(frozen=True, eq=False)
class MessageEnvelope(Generic[T]):
    """
    A received record: identity, decoded body, attributes and deletion.

    Envelopes compare and hash by identity; each one stands for a single
    delivery.
    """

    id: MessageId
    body: T
    consume: ConsumeAction
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def receipt_handle(self) -> str:
        return self.consume.receipt_handle

    def consume_with(self, block: Callable[[T], K]) -> K:
        """
        Apply block to the body, then consume the record.

        If block raises, the record is left on the queue.

        Args:
            block: Function processing the message body.

        Returns:
            The value returned by block.
        """
        result = block(self.body)
        self.consume()
        return result

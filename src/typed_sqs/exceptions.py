"""Error taxonomy for queue operations."""


class QueueError(Exception):
    """Base class for all queue errors."""


class QueueUnavailable(QueueError):
    """Queue name could not be resolved to a queue URL."""

    def __init__(self, queue_name: str, message: str | None = None):
        self.queue_name = queue_name
        super().__init__(message or f"Queue does not exist: {queue_name}")


class ProviderError(QueueError):
    """Transport, auth or throttling failure reported by the provider."""

    def __init__(self, operation: str, message: str, code: str | None = None):
        self.operation = operation
        self.code = code
        super().__init__(f"{operation} failed: {message}")


class _CausedError(QueueError):
    """Error wrapping the underlying cause of a failed operation."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SendFailed(_CausedError):
    """Encoding or submission of an outbound message failed."""


class ReceiveFailed(_CausedError):
    """Receive call failed, either in transport or while decoding a record."""


class DeletionFailed(_CausedError):
    """Deferred deletion of a received record failed.

    Never raised to callers. The record becomes visible again once its
    visibility lock expires.
    """

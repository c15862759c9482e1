"""Command line entry point for sending to and reading from a queue."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta

from typed_sqs.infrastructure.dependency_injection import DependenciesContainer
from typed_sqs.models.envelope import MessageEnvelope
from typed_sqs.queue import SQSQueue

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)


def format_envelope(envelope: MessageEnvelope[str]) -> str:
    """Render an envelope as one JSON line."""
    return json.dumps(
        {
            "id": str(envelope.id),
            "body": envelope.body,
            "attributes": envelope.attributes,
        },
        ensure_ascii=False,
    )


async def send_messages(queue: SQSQueue[str], bodies: list[str]) -> None:
    for body in bodies:
        message_id = await queue.send(body)
        print(message_id)


async def receive_messages(
    queue: SQSQueue[str], max_messages: int, lock: timedelta, consume: bool
) -> int:
    """
    Receive one batch and print it.

    Args:
        queue: Queue to read from.
        max_messages: Upper bound on messages to receive.
        lock: Visibility lock for received messages.
        consume: Delete messages after printing them.

    Returns:
        Number of messages received.
    """
    envelopes = await queue.next_batch_with_lock(max_messages, lock)
    for envelope in envelopes:
        print(format_envelope(envelope))
        if consume:
            await envelope.consume()
    logger.info("Received %d message(s)", len(envelopes))
    return len(envelopes)


async def tail_messages(
    queue: SQSQueue[str], lock: timedelta, consume: bool, limit: int | None = None
) -> int:
    """Print messages as they arrive, stopping after limit messages if given."""
    count = 0
    async for envelope in queue.stream_with_lock(lock):
        print(format_envelope(envelope))
        if consume:
            await envelope.consume()
        count += 1
        if limit is not None and count >= limit:
            break
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send to and read from the SQS queue named by SQS_QUEUE_NAME"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    send_parser = subparsers.add_parser("send", help="Send messages")
    send_parser.add_argument("bodies", nargs="+", help="Message bodies to send")

    receive_parser = subparsers.add_parser("receive", help="Receive one batch")
    receive_parser.add_argument("--max", type=int, default=10, dest="max_messages")
    receive_parser.add_argument("--lock", type=int, default=0, help="Visibility lock in seconds")
    receive_parser.add_argument("--consume", action="store_true", help="Delete received messages")

    tail_parser = subparsers.add_parser("tail", help="Stream messages as they arrive")
    tail_parser.add_argument("--lock", type=int, default=0, help="Visibility lock in seconds")
    tail_parser.add_argument("--consume", action="store_true", help="Delete received messages")
    tail_parser.add_argument("--limit", type=int, default=None, help="Stop after N messages")

    return parser


def run(args: argparse.Namespace, queue: SQSQueue[str]) -> None:
    if args.command == "send":
        asyncio.run(send_messages(queue, args.bodies))
    elif args.command == "receive":
        asyncio.run(
            receive_messages(
                queue, args.max_messages, timedelta(seconds=args.lock), args.consume
            )
        )
    elif args.command == "tail":
        asyncio.run(
            tail_messages(queue, timedelta(seconds=args.lock), args.consume, args.limit)
        )


def main():
    """Entry point with CLI argument parsing."""
    args = build_parser().parse_args()

    try:
        container = DependenciesContainer()
        queue = container.queue()
        logger.info("Using queue %s (%s)", queue.queue_name, queue.queue_url)
        run(args, queue)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

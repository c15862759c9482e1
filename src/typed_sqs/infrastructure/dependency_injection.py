"""Dependency injection container for the queue client."""

import boto3
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer

from typed_sqs.config import Config
from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.codec import StringCodec


def _create_session(config: Config) -> boto3.Session:
    """Create boto3 session.

    Uses AWS_PROFILE when set, otherwise the default credential chain.
    """
    if config.aws_profile:
        return boto3.Session(profile_name=config.aws_profile, region_name=config.aws_region)
    return boto3.Session(region_name=config.aws_region)


def _create_sqs_boto_client(session: boto3.Session, config: Config):
    """Create the boto3 SQS client, pointed at SQS_ENDPOINT_URL when set."""
    return session.client("sqs", endpoint_url=config.sqs_endpoint_url or None)


def _create_queue(sqs_client: SQSClient, config: Config, codec):
    """Factory for SQSQueue to avoid circular import."""
    from typed_sqs.queue import SQSQueue

    config.validate()
    return SQSQueue(
        sqs_client=sqs_client,
        queue_name=config.sqs_queue_name,
        codec=codec,
        create_if_missing=config.sqs_create_if_missing,
    )


class DependenciesContainer(DeclarativeContainer):
    """DI container for the queue client."""

    config = providers.Singleton(Config)

    session = providers.Singleton(_create_session, config=config)

    # SQS dependency chain
    sqs_boto_client = providers.Singleton(
        _create_sqs_boto_client,
        session=session,
        config=config,
    )

    sqs_client = providers.Singleton(
        SQSClient,
        client=sqs_boto_client,
    )

    # Override to change the message body type
    codec = providers.Singleton(StringCodec)

    queue = providers.Singleton(
        _create_queue,
        sqs_client=sqs_client,
        config=config,
        codec=codec,
    )

"""Infrastructure package."""

from typed_sqs.infrastructure.dependency_injection import DependenciesContainer
from typed_sqs.infrastructure.sqs_client import SQSClient

__all__ = ["DependenciesContainer", "SQSClient"]

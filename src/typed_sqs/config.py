"""Configuration management for the queue client."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


def _get_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if not value:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Client configuration loaded from environment variables."""

    # AWS
    aws_region: str = field(default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"))
    aws_profile: str = field(default_factory=lambda: os.getenv("AWS_PROFILE", ""))

    # SQS
    sqs_endpoint_url: str = field(default_factory=lambda: os.getenv("SQS_ENDPOINT_URL", ""))
    sqs_queue_name: str = field(default_factory=lambda: os.getenv("SQS_QUEUE_NAME", ""))
    sqs_create_if_missing: bool = field(
        default_factory=lambda: _get_bool("SQS_CREATE_IF_MISSING")
    )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.sqs_queue_name:
            raise ValueError("SQS_QUEUE_NAME environment variable is required")

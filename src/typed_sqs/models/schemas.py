"""Pydantic models for queue identity and message identity."""

from pydantic import BaseModel, ConfigDict, field_validator


class QueueName(BaseModel):
    """Logical, human-assigned queue name."""

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("queue name must not be empty")
        return value

    def __str__(self) -> str:
        return self.name


class MessageId(BaseModel):
    """Provider-assigned message identifier. Hashable, used for deduplication."""

    model_config = ConfigDict(frozen=True)

    id: str

    def __str__(self) -> str:
        return self.id

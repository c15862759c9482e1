"""Codecs converting message bodies to and from their wire string."""

import json
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class MessageCodec(ABC, Generic[T]):
    """Abstract base class for message body codecs."""

    @abstractmethod
    def encode(self, body: T) -> str:
        """Convert a message body to its wire string."""
        pass

    @abstractmethod
    def decode(self, raw: str) -> T:
        """Convert a wire string back to a message body."""
        pass


class StringCodec(MessageCodec[str]):
    """Passes string bodies through unchanged."""

    def encode(self, body: str) -> str:
        if not isinstance(body, str):
            raise TypeError(f"expected str body, got {type(body).__name__}")
        return body

    def decode(self, raw: str) -> str:
        return raw


class JsonCodec(MessageCodec[Any]):
    """Serializes JSON-compatible values (dicts, lists, scalars)."""

    def encode(self, body: Any) -> str:
        return json.dumps(body, ensure_ascii=False)

    def decode(self, raw: str) -> Any:
        return json.loads(raw)


class PydanticCodec(MessageCodec[ModelT]):
    """Serializes instances of a single pydantic model class as JSON."""

    def __init__(self, model: type[ModelT]):
        """
        Initialize codec.

        Args:
            model: Pydantic model class used to validate decoded bodies.
        """
        self._model = model

    def encode(self, body: ModelT) -> str:
        return body.model_dump_json()

    def decode(self, raw: str) -> ModelT:
        return self._model.model_validate_json(raw)

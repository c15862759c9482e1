"""Tests for models: identities, codecs and envelopes."""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, ValidationError

from typed_sqs.exceptions import ProviderError
from typed_sqs.infrastructure.sqs_client import SQSClient
from typed_sqs.models.codec import JsonCodec, PydanticCodec, StringCodec
from typed_sqs.models.envelope import ConsumeAction
from typed_sqs.models.schemas import MessageId, QueueName

# SQS accepts bodies up to 256 KiB
LARGE_PAYLOAD = "x" * (256 * 1024 - 16)


class Order(BaseModel):
    order_id: int
    note: str


class TestQueueName:
    """Tests for QueueName model."""

    def test_create_queue_name(self):
        """Test creating a queue name."""
        name = QueueName(name="orders")

        assert name.name == "orders"
        assert str(name) == "orders"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_queue_name_rejected(self, value):
        """Test empty queue names fail validation."""
        with pytest.raises(ValidationError):
            QueueName(name=value)

    def test_queue_name_is_immutable(self):
        """Test queue name cannot be reassigned."""
        name = QueueName(name="orders")

        with pytest.raises(ValidationError):
            name.name = "other"


class TestMessageId:
    """Tests for MessageId model."""

    def test_equal_ids_hash_equal(self):
        """Test ids with the same value collapse in a dict."""
        ids = {MessageId(id="m-1"): 1, MessageId(id="m-1"): 2, MessageId(id="m-2"): 3}

        assert len(ids) == 2
        assert ids[MessageId(id="m-1")] == 2


class TestCodecs:
    """Tests for message codecs."""

    @pytest.mark.parametrize("body", ["", "order-42", "שלום עולם ✓", LARGE_PAYLOAD])
    def test_string_codec_round_trip(self, body):
        """Test string codec returns the body unchanged."""
        codec = StringCodec()

        assert codec.decode(codec.encode(body)) == body

    def test_string_codec_rejects_non_string(self):
        """Test string codec refuses non-string bodies."""
        with pytest.raises(TypeError):
            StringCodec().encode(42)

    @pytest.mark.parametrize(
        "body",
        ["", "ünïcödé ✓", {"order": 42, "items": ["a", "b"]}, [1, 2, 3], None],
    )
    def test_json_codec_round_trip(self, body):
        """Test JSON codec round trips JSON-compatible values."""
        codec = JsonCodec()

        assert codec.decode(codec.encode(body)) == body

    def test_json_codec_keeps_unicode_readable(self):
        """Test JSON codec does not escape non-ASCII characters."""
        assert JsonCodec().encode("שלום") == '"שלום"'

    def test_json_codec_decode_error(self):
        """Test JSON codec raises on invalid input."""
        with pytest.raises(ValueError):
            JsonCodec().decode("{not json")

    def test_pydantic_codec_round_trip(self):
        """Test pydantic codec round trips a model instance."""
        codec = PydanticCodec(Order)
        order = Order(order_id=42, note="ünïcödé")

        assert codec.decode(codec.encode(order)) == order

    def test_pydantic_codec_validation_error(self):
        """Test pydantic codec raises on a body missing fields."""
        with pytest.raises(ValidationError):
            PydanticCodec(Order).decode('{"order_id": 1}')


class TestConsumeAction:
    """Tests for ConsumeAction."""

    def test_consume_deletes_by_receipt_handle(self):
        """Test consume issues one delete for its own receipt handle."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        result = action()

        assert result is None
        assert action.invoked is True
        mock_sqs_client.delete_message.assert_called_once_with(
            queue_url="https://sqs.test/queue",
            receipt_handle="receipt-1",
        )

    def test_consume_twice_deletes_once(self):
        """Test repeated consume is a no-op."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        action()
        action()

        mock_sqs_client.delete_message.assert_called_once()

    def test_consume_failure_is_logged_not_raised(self, caplog):
        """Test a failed delete never reaches the caller."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        mock_sqs_client.delete_message.side_effect = ProviderError(
            "DeleteMessage", "throttled"
        )
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        with caplog.at_level(logging.WARNING):
            action()
            action()

        assert "Failed to delete consumed record" in caplog.text
        mock_sqs_client.delete_message.assert_called_once()

    def test_consume_in_event_loop_returns_awaitable(self):
        """Test consume inside a loop schedules the delete off the loop."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        mock_sqs_client.delete_message.side_effect = RuntimeError("network down")
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        async def consume_once():
            pending = action()
            assert pending is not None
            await pending

        asyncio.run(consume_once())
        mock_sqs_client.delete_message.assert_called_once()

    def test_consume_awaited_twice_in_event_loop(self):
        """Test awaiting a repeated consume completes without deleting again."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        async def consume_twice():
            await action()
            repeated = action()
            assert repeated is not None
            await repeated
            return repeated.result()

        assert asyncio.run(consume_twice()) is None
        mock_sqs_client.delete_message.assert_called_once()

    def test_consume_outside_loop_then_awaited_inside(self):
        """Test a record consumed synchronously can still be awaited later."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        action = ConsumeAction(mock_sqs_client, "https://sqs.test/queue", "receipt-1")

        assert action() is None

        async def consume_again():
            await action()

        asyncio.run(consume_again())
        mock_sqs_client.delete_message.assert_called_once()


class TestMessageEnvelope:
    """Tests for MessageEnvelope."""

    def test_envelope_defaults(self, make_envelope):
        """Test envelope exposes id, body and an empty attribute map."""
        envelope = make_envelope("m-1", body="order-42")

        assert envelope.id == MessageId(id="m-1")
        assert envelope.body == "order-42"
        assert envelope.attributes == {}
        assert envelope.receipt_handle.startswith("receipt-m-1")

    def test_envelopes_hash_by_identity(self, make_envelope):
        """Test envelopes with attributes can be hashed and kept in sets."""
        first = make_envelope("m-1")
        redelivered = make_envelope("m-1")

        assert isinstance(hash(first), int)
        assert len({first, redelivered, first}) == 2
        assert first != redelivered

    def test_consume_with_returns_block_result(self, make_envelope):
        """Test consume_with applies the block then deletes the record."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        envelope = make_envelope("m-1", body="order-42", sqs_client=mock_sqs_client)

        result = envelope.consume_with(str.upper)

        assert result == "ORDER-42"
        mock_sqs_client.delete_message.assert_called_once()

    def test_consume_with_keeps_record_when_block_raises(self, make_envelope):
        """Test a failing block leaves the record on the queue."""
        mock_sqs_client = MagicMock(spec=SQSClient)
        envelope = make_envelope("m-1", body="order-42", sqs_client=mock_sqs_client)

        def fail(body):
            raise ValueError(body)

        with pytest.raises(ValueError):
            envelope.consume_with(fail)

        mock_sqs_client.delete_message.assert_not_called()
        assert envelope.consume.invoked is False

"""Tests for the webhook workflow (validate -> cancel -> notify)."""

from __future__ import annotations

import pytest

from factories import order_payload, print_item
from order_validator.clients import DryRunCanceller
from order_validator.models import CancellationResult, Order
from order_validator.notifications import LoggingNotifier, format_notification
from order_validator.validation import OrderValidator
from order_validator.workflow import process_order_webhook


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    async def notify(self, order, reason):
        self.calls.append((order.id, reason))


class BrokenNotifier:
    async def notify(self, order, reason):
        raise RuntimeError("smtp down")


class BrokenCanceller:
    def __init__(self):
        self.calls = 0

    async def cancel(self, order_id, reason):
        self.calls += 1
        raise RuntimeError("unexpected")


class RejectingCanceller:
    async def cancel(self, order_id, reason):
        return CancellationResult(order_id=order_id, cancelled=False, status_code=422)


@pytest.fixture()
def validator():
    return OrderValidator(product_name="tirage")


class TestProcessOrderWebhook:

    @pytest.mark.asyncio
    async def test_valid_order_touches_nothing(self, validator):
        canceller, notifier = DryRunCanceller(), RecordingNotifier()
        order = Order.model_validate(order_payload(print_item(quantity=2, photos=2)))

        outcome = await process_order_webhook(order, validator, canceller, notifier)

        assert outcome.validation.is_valid
        assert outcome.cancellation is None
        assert canceller.calls == []
        assert notifier.calls == []
        assert outcome.response_body() == {"message": "Order valid"}

    @pytest.mark.asyncio
    async def test_invalid_order_cancels_once_and_notifies(self, validator):
        canceller, notifier = DryRunCanceller(), RecordingNotifier()
        order = Order.model_validate(order_payload(print_item(quantity=3, photos=2), order_id=99))

        outcome = await process_order_webhook(order, validator, canceller, notifier)

        reason = "Incorrect quantity detected. Photos: 2, Ordered: 3"
        assert canceller.calls == [(99, reason)]
        assert notifier.calls == [(99, reason)]
        assert outcome.response_body() == {
            "message": "Order cancelled",
            "reason": reason,
            "cancelled": False,
        }

    @pytest.mark.asyncio
    async def test_failed_cancellation_still_notifies(self, validator):
        notifier = RecordingNotifier()
        order = Order.model_validate(order_payload(print_item(quantity=3, photos=0)))

        outcome = await process_order_webhook(order, validator, RejectingCanceller(), notifier)

        assert outcome.cancellation.status_code == 422
        assert len(notifier.calls) == 1

    @pytest.mark.asyncio
    async def test_canceller_exception_is_contained(self, validator):
        canceller = BrokenCanceller()
        order = Order.model_validate(order_payload(print_item(quantity=3, photos=0)))

        outcome = await process_order_webhook(order, validator, canceller, RecordingNotifier())

        assert canceller.calls == 1
        assert outcome.cancellation.cancelled is False
        assert outcome.cancellation.detail == "unexpected"

    @pytest.mark.asyncio
    async def test_notifier_exception_is_contained(self, validator):
        canceller = DryRunCanceller()
        order = Order.model_validate(order_payload(print_item(quantity=3, photos=0)))

        outcome = await process_order_webhook(order, validator, canceller, BrokenNotifier())

        assert len(canceller.calls) == 1
        assert outcome.validation.is_valid is False


class TestLoggingNotifier:

    def test_format(self):
        order = Order.model_validate(order_payload(print_item(quantity=1, photos=0)))
        subject, text = format_notification(order, "Incorrect quantity detected. Photos: 0, Ordered: 1")
        assert subject == "Fraudulent order detected - 1042"
        assert "Reason: Incorrect quantity detected. Photos: 0, Ordered: 1" in text
        assert "Amount: 24.90 EUR" in text

    def test_format_without_order_number(self):
        order = Order.model_validate({"id": 7, "line_items": []})
        subject, text = format_notification(order, "r")
        assert subject == "Fraudulent order detected - 7"
        assert text.endswith("Amount: ?")

    @pytest.mark.asyncio
    async def test_notify_logs_recipient(self, caplog):
        order = Order.model_validate(order_payload(print_item(quantity=1, photos=0)))
        with caplog.at_level("INFO", logger="order_validator.notifications"):
            await LoggingNotifier("admin@example.com").notify(order, "reason")
        assert "admin@example.com" in caplog.text
        assert "Fraudulent order detected - 1042" in caplog.text

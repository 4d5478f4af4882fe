"""
workflow.py — Orchestration of One orders/create Webhook

Workflow Overview:
1. Validate the photo-print line items of the order
2. If invalid, cancel the order via the configured canceller
3. Notify the administrator about the cancellation
4. Report the outcome back to the HTTP layer

A failed cancellation or notification is logged and reported, but never
turns into an error for the webhook caller: Shopify would only redeliver the
same webhook, which does not help.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from .clients import OrderCanceller
from .models import CancellationResult, Order, ValidationResult
from .notifications import AdminNotifier
from .validation import OrderValidator

log = logging.getLogger(__name__)


class WebhookOutcome(BaseModel):
    validation: ValidationResult
    cancellation: Optional[CancellationResult] = None

    def response_body(self) -> dict:
        if self.validation.is_valid:
            return {"message": "Order valid"}
        return {
            "message": "Order cancelled",
            "reason": self.validation.reason,
            "cancelled": bool(self.cancellation and self.cancellation.cancelled),
        }


async def process_order_webhook(
    order: Order,
    validator: OrderValidator,
    canceller: OrderCanceller,
    notifier: AdminNotifier,
) -> WebhookOutcome:
    """
    Executes the validation workflow for a single order.

    Args:
        order (Order): The parsed webhook payload.
        validator (OrderValidator): The photo quantity rule.
        canceller (OrderCanceller): Cancels invalid orders; called at most once.
        notifier (AdminNotifier): Informs the administrator about cancellations.

    Returns:
        WebhookOutcome: The validation result and, for invalid orders, the
        cancellation result.

    Raises:
        Exception: Only errors raised by the validator itself propagate.
        Canceller and notifier errors are logged and swallowed here.
    """
    log_prefix = f"[Order: {order.id}]"
    log.info(f"{log_prefix} Order #{order.order_number} received.")

    validation = validator.validate(order)

    if validation.is_valid:
        log.info(f"{log_prefix} Order valid.")
        return WebhookOutcome(validation=validation)

    log.warning(f"{log_prefix} Invalid order detected: {validation.reason}")

    try:
        cancellation = await canceller.cancel(order.id, validation.reason)
    except Exception as e:
        log.error(f"{log_prefix} Canceller failed unexpectedly: {e}", exc_info=True)
        cancellation = CancellationResult(order_id=order.id, cancelled=False, detail=str(e))

    try:
        await notifier.notify(order, validation.reason)
    except Exception as e:
        log.error(f"{log_prefix} Admin notification failed: {e}", exc_info=True)

    return WebhookOutcome(validation=validation, cancellation=cancellation)

"""
notifications.py — Admin Notifications for Cancelled Orders

The administrator is told about every order cancelled for a photo/quantity
mismatch. The default sink writes the notification to the service log,
addressed to ADMIN_EMAIL; other sinks (mail provider, chat) implement the
same AdminNotifier interface.
"""

import logging
from typing import Optional, Protocol

from .config import Settings
from .models import Order

log = logging.getLogger(__name__)


class AdminNotifier(Protocol):
    async def notify(self, order: Order, reason: str) -> None:
        ...


def format_notification(order: Order, reason: str):
    """Returns (subject, text) of the admin notification for a cancelled order."""
    number = order.order_number if order.order_number is not None else order.id
    subject = f"Fraudulent order detected - {number}"
    amount = order.total_price or "?"
    currency = order.currency or ""
    text = (
        f"Order {number} was cancelled automatically.\n"
        f"Reason: {reason}\n"
        f"Amount: {amount} {currency}".rstrip()
    )
    return subject, text


class LoggingNotifier:
    """Emits admin notifications to the service log."""

    def __init__(self, admin_email: Optional[str] = None):
        self.admin_email = admin_email

    async def notify(self, order: Order, reason: str) -> None:
        subject, text = format_notification(order, reason)
        recipient = self.admin_email or "<ADMIN_EMAIL not set>"
        log.info(f"[Order: {order.id}] Admin notification to {recipient}: {subject}\n{text}")


def build_notifier(settings: Settings) -> AdminNotifier:
    return LoggingNotifier(admin_email=settings.ADMIN_EMAIL)

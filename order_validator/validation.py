"""
validation.py — Photo Quantity Validation Rule

An order line for a photo print product is valid only if the customer
uploaded exactly as many photos as prints ordered. Lines for other products
are not checked.
"""

import logging
from typing import List, Sequence

from .config import PhotoCountPolicy, Settings
from .models import InvalidItem, Order, ValidationResult
from .photos import DEFAULT_UPLOAD_MARKERS, count_uploaded_photos

log = logging.getLogger(__name__)


def describe_mismatches(items: List[InvalidItem]) -> str:
    """Builds the reason text for a list of mismatching items (at least one)."""
    if len(items) == 1:
        item = items[0]
        return f"Incorrect quantity detected. Photos: {item.photo_count}, Ordered: {item.ordered_quantity}"
    details = "; ".join(
        f"'{item.title}' Photos: {item.photo_count}, Ordered: {item.ordered_quantity}"
        for item in items
    )
    return f"Incorrect quantity detected on {len(items)} items. {details}"


class OrderValidator:
    """
    Checks photo-print line items of an order against their uploaded photos.

    The validator only reads the order; it never modifies it.
    """

    def __init__(
        self,
        product_name: str,
        policy: PhotoCountPolicy = PhotoCountPolicy.DEDUPLICATED,
        markers: Sequence[str] = DEFAULT_UPLOAD_MARKERS,
    ):
        self.product_name = product_name.lower()
        self.policy = policy
        self.markers = tuple(markers)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrderValidator":
        return cls(product_name=settings.PRODUCT_NAME, policy=settings.PHOTO_COUNT_POLICY)

    def applies_to(self, title: str) -> bool:
        return self.product_name in title.lower()

    def validate(self, order: Order) -> ValidationResult:
        """
        Validates every matching line item of the order.

        Args:
            order (Order): The parsed webhook payload.

        Returns:
            ValidationResult: Invalid as soon as one checked line item has a
            photo count different from its quantity. All mismatching items are
            listed in `invalid_items` and in the reason.
        """
        log_prefix = f"[Order: {order.id}]"
        invalid_items = []

        for line_item in order.line_items:
            if not self.applies_to(line_item.title):
                continue

            photo_count = count_uploaded_photos(line_item.properties, self.policy, self.markers)
            ordered_quantity = line_item.quantity
            log.info(
                f"{log_prefix} Checking '{line_item.title}': "
                f"{photo_count} photo(s) uploaded, {ordered_quantity} ordered."
            )

            if photo_count != ordered_quantity:
                invalid_items.append(InvalidItem(
                    title=line_item.title,
                    photo_count=photo_count,
                    ordered_quantity=ordered_quantity,
                    difference=abs(photo_count - ordered_quantity),
                ))

        if invalid_items:
            return ValidationResult(
                is_valid=False,
                reason=describe_mismatches(invalid_items),
                invalid_items=invalid_items,
            )

        return ValidationResult(is_valid=True)

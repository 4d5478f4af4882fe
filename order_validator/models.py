"""
models.py — Data Models for Order Validation

This module defines the structures used while handling a single
orders/create webhook. The inbound models follow the subset of the Shopify
order payload the validator reads; everything else in the payload is ignored.

Models:
    - OrderProperty: A custom name/value pair attached to a line item.
    - LineItem: A single product entry of an order.
    - Order: The order payload received from Shopify.
    - InvalidItem: A line item whose photo count does not match its quantity.
    - ValidationResult: The outcome of validating one order.
    - CancellationResult: The outcome of one cancellation attempt.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderProperty(BaseModel):
    """
    Represents a line item property, e.g. an uploaded photo reference.

    Attributes:
        name (str, optional): Property name as configured in the storefront.
        value (str, optional): Property value, typically an upload URL.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    value: Optional[str] = None

    @field_validator("name", "value", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return v if isinstance(v, str) else str(v)


class LineItem(BaseModel):
    """
    Represents a single product line of an order.

    Attributes:
        title (str): Product title.
        quantity (int): Ordered quantity. Must not be negative.
        properties (List[OrderProperty], optional): Custom properties. Anything
            that is not a list is treated as "no properties".
    """
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    quantity: int = Field(0, ge=0)
    properties: Optional[List[OrderProperty]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("properties", mode="before")
    @classmethod
    def _properties_list(cls, v: Any) -> Optional[list]:
        if not isinstance(v, list):
            return None
        return [p for p in v if isinstance(p, (dict, OrderProperty))]


class Order(BaseModel):
    """
    Represents an order created in Shopify (orders/create webhook payload).

    Attributes:
        id (int | str): Shopify order ID, used for the cancellation call.
        order_number (int | str, optional): Human-facing order number.
        total_price (str, optional): Total amount as sent by Shopify.
        currency (str, optional): ISO 4217 currency code of the order.
        line_items (List[LineItem]): Product lines of the order.
    """
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    order_number: Optional[Union[int, str]] = None
    total_price: Optional[str] = None
    currency: Optional[str] = None
    line_items: List[LineItem] = Field(default_factory=list)

    @field_validator("total_price", mode="before")
    @classmethod
    def _price_as_text(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class InvalidItem(BaseModel):
    title: str
    photo_count: int
    ordered_quantity: int
    difference: int


class ValidationResult(BaseModel):
    """
    Result of validating an order.

    Attributes:
        is_valid (bool): False as soon as one checked line item mismatches.
        reason (str, optional): Human readable explanation for invalid orders.
        invalid_items (List[InvalidItem]): Every mismatching line item.
    """
    is_valid: bool
    reason: Optional[str] = None
    invalid_items: List[InvalidItem] = Field(default_factory=list)


class CancellationResult(BaseModel):
    order_id: Union[int, str]
    cancelled: bool
    dry_run: bool = False
    status_code: Optional[int] = None
    detail: Optional[str] = None

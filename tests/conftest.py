"""Shared fixtures for the order validator test suite."""

from __future__ import annotations

import json

import pytest

from factories import SECRET
from order_validator.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        SHOPIFY_WEBHOOK_SECRET=SECRET,
        SHOPIFY_ACCESS_TOKEN="shpat_test",
        SHOPIFY_STORE_DOMAIN="test-shop.myshopify.com",
        PRODUCT_NAME="tirage",
        ADMIN_EMAIL="admin@example.com",
    )


@pytest.fixture()
def encode():
    """Serialize a payload the way Shopify sends it."""
    return lambda payload: json.dumps(payload).encode("utf-8")

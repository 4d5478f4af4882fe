"""Tests for the mock Shopify Admin API used in local end-to-end runs."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from mock_services.mock_shopify_admin import EXPECTED_TOKEN, app
from order_validator.clients import ShopifyAdminClient

client = TestClient(app)

CANCEL_BODY = {"amount": 0, "currency": "EUR", "reason": "fraud", "email": True, "refund": True}


def test_cancel_succeeds():
    response = client.post(
        "/admin/api/2023-10/orders/42/cancel.json",
        json=CANCEL_BODY,
        headers={"X-Shopify-Access-Token": EXPECTED_TOKEN},
    )
    assert response.status_code == 200
    order = response.json()["order"]
    assert order["id"] == 42
    assert order["cancel_reason"] == "fraud"
    assert order["financial_status"] == "refunded"
    assert order["cancelled_at"].endswith("Z")


def test_wrong_token_is_401():
    response = client.post(
        "/admin/api/2023-10/orders/42/cancel.json",
        json=CANCEL_BODY,
        headers={"X-Shopify-Access-Token": "nope"},
    )
    assert response.status_code == 401


def test_unknown_order_is_404():
    response = client.post(
        "/admin/api/2023-10/orders/404123/cancel.json",
        json=CANCEL_BODY,
        headers={"X-Shopify-Access-Token": EXPECTED_TOKEN},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_shopify_client_against_mock():
    shopify = ShopifyAdminClient(
        store_domain="mock-shop.myshopify.com",
        access_token=EXPECTED_TOKEN,
        transport=httpx.ASGITransport(app=app),
    )
    ok = await shopify.cancel(42, "reason")
    missing = await shopify.cancel("404777", "reason")
    await shopify.aclose()

    assert ok.cancelled is True
    assert missing.cancelled is False
    assert missing.status_code == 404

"""
mock_shopify_admin.py — Mock Implementation of the Shopify Admin API (REST)

This module provides a simulated Shopify Admin API for running the order
validator end to end without touching a real store. It exposes a small
FastAPI application that mimics the order cancellation endpoint.

Simulation Scenarios:
    • Successful cancellation
    • Missing or wrong access token (HTTP 401)
    • Unknown order: order IDs starting with "404" (HTTP 404)

Endpoints:
    POST /admin/api/{version}/orders/{order_id}/cancel.json — Cancels an order.

Port:
    Default: 8002 (HTTP)

Environment:
    MOCK_SHOPIFY_ACCESS_TOKEN: Token the mock accepts (default "shpat_mock").
"""

import logging
import os
import time
from typing import Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel

app = FastAPI(title="Mock Shopify Admin API")
logging.basicConfig(level=logging.INFO)

EXPECTED_TOKEN = os.environ.get("MOCK_SHOPIFY_ACCESS_TOKEN", "shpat_mock")


class CancelRequest(BaseModel):
    """
    Represents the body of an order cancellation request.

    Attributes:
        amount (float): Amount to refund. The validator always sends 0.
        currency (str): ISO 4217 currency code of the refund.
        reason (str): Shopify cancel reason code (customer, fraud, inventory, declined, other).
        email (bool): Whether Shopify e-mails the customer.
        refund (bool): Whether Shopify processes a refund.
    """
    amount: float = 0
    currency: Optional[str] = None
    reason: str = "other"
    email: bool = False
    refund: bool = False


@app.post("/admin/api/{version}/orders/{order_id}/cancel.json")
def cancel_order(
        version: str,
        order_id: str,
        request: CancelRequest,
        access_token: Optional[str] = Header(None, alias="X-Shopify-Access-Token")
):
    """
        Cancels an order.

        Args:
            version (str): Admin API version from the URL.
            order_id (str): Order ID from the URL.
            request (CancelRequest): Cancellation options.
            access_token (str): Value of the X-Shopify-Access-Token header.

        Returns:
            dict: {"order": {...}} with `cancelled_at` and `cancel_reason` set.

        Raises:
            HTTPException(401): If the access token is missing or wrong.
            HTTPException(404): If the order ID starts with "404".
    """
    logging.info(f"[SHOPIFY] Cancel request for {order_id} (API {version}, reason={request.reason})")

    if access_token != EXPECTED_TOKEN:
        logging.warning(f"[SHOPIFY] Rejected cancel for {order_id}: invalid access token.")
        raise HTTPException(
            status_code=401,
            detail={"errors": "[API] Invalid API key or access token (unrecognized login or wrong password)"}
        )

    if order_id.startswith("404"):
        logging.warning(f"[SHOPIFY] Order {order_id} not found.")
        raise HTTPException(status_code=404, detail={"errors": "Not Found"})

    logging.info(f"[SHOPIFY] Order {order_id} cancelled.")
    return {
        "order": {
            "id": int(order_id) if order_id.isdigit() else order_id,
            "cancelled_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "cancel_reason": request.reason,
            "financial_status": "refunded" if request.refund else "paid",
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)

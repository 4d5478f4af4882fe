"""
verification.py — Shopify Webhook Signature Verification

Shopify signs every webhook with a base64-encoded HMAC-SHA256 of the raw
request body, sent in the X-Shopify-Hmac-SHA256 header. The comparison uses
hmac.compare_digest() so it does not leak where a mismatch occurs.
"""

import base64
import hashlib
import hmac
import logging
from typing import Optional, Union

log = logging.getLogger(__name__)

SHOPIFY_HMAC_HEADER = "x-shopify-hmac-sha256"


def compute_shopify_signature(body: Union[bytes, str], secret: str) -> str:
    """Return base64(HMAC_SHA256(secret, body))."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_shopify_webhook(
    body: Union[bytes, str],
    signature: Optional[str],
    secret: Optional[str],
    allow_unsigned: bool = False,
) -> bool:
    """Verify a Shopify webhook HMAC-SHA256 signature.

    Args:
        body: Raw request body, exactly as received
        signature: Value of the X-Shopify-Hmac-SHA256 header
        secret: Shared webhook secret; None or empty when not configured
        allow_unsigned: Accept any request when no secret is configured

    Returns:
        True if the signature matches, or if no secret is configured and
        unsigned webhooks are explicitly allowed
    """
    if not secret:
        if allow_unsigned:
            log.warning("SHOPIFY_WEBHOOK_SECRET not set, accepting unsigned webhook (insecure mode)")
            return True
        log.error("SHOPIFY_WEBHOOK_SECRET not set, rejecting webhook")
        return False
    if not signature:
        return False

    expected = compute_shopify_signature(body, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))

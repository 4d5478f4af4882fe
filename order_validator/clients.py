"""
This module provides the clients used to cancel invalid orders:
- Shopify Admin API (REST), the production canceller
- Dry run canceller, which only records what would have been cancelled
Both implement the OrderCanceller interface, so the workflow never depends on
a concrete client. Cancellation failures are reported, never raised.
"""

import logging
from typing import List, Optional, Protocol, Tuple, Union

import httpx

from .config import Settings
from .models import CancellationResult

log = logging.getLogger(__name__)

OrderId = Union[int, str]


class OrderCanceller(Protocol):
    async def cancel(self, order_id: OrderId, reason: str) -> CancellationResult:
        ...


# --- Shopify Admin Client (REST) ---
class ShopifyAdminClient:
    """
    Client for the Shopify Admin REST API.
    Cancels orders through POST /admin/api/{version}/orders/{id}/cancel.json.
    """
    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = "2023-10",
        currency: str = "EUR",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initializes the HTTP client with a bounded timeout.

        Args:
            store_domain (str): Shop domain, e.g. "monstore.myshopify.com".
            access_token (str): Admin API access token.
            api_version (str): Admin API version segment of the URL.
            currency (str): Currency sent with the zero-amount refund.
            timeout (float): Timeout in seconds for connect and read.
            transport (httpx.AsyncBaseTransport, optional): Custom transport, used by tests.
        """
        self.api_version = api_version
        self.currency = currency
        self.client = httpx.AsyncClient(
            base_url=f"https://{store_domain}",
            headers={
                "X-Shopify-Access-Token": access_token,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShopifyAdminClient":
        return cls(
            store_domain=settings.SHOPIFY_STORE_DOMAIN,
            access_token=settings.SHOPIFY_ACCESS_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
            currency=settings.CANCEL_CURRENCY,
            timeout=settings.SHOPIFY_TIMEOUT_SECONDS,
        )

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    def cancel_path(self, order_id: OrderId) -> str:
        return f"/admin/api/{self.api_version}/orders/{order_id}/cancel.json"

    async def cancel(self, order_id: OrderId, reason: str) -> CancellationResult:
        """
        Cancels an order via the Shopify Admin REST API.

        The refund amount is always zero; Shopify notifies the customer by
        e-mail and processes the refund itself.

        Args:
            order_id (int | str): Shopify order ID.
            reason (str): Internal reason, only used for logging. Shopify
                receives the fixed reason code "fraud".

        Returns:
            CancellationResult: `cancelled` is True only for a 2xx response.
            HTTP errors and transport errors are logged and returned as a
            failed result.
        """
        log_prefix = f"[Order: {order_id}]"
        payload = {
            "amount": 0,
            "currency": self.currency,
            "reason": "fraud",
            "email": True,
            "refund": True,
        }

        log.info(f"{log_prefix} Cancelling order via Shopify ({reason}).")
        try:
            response = await self.client.post(self.cancel_path(order_id), json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error(
                f"{log_prefix} Cancellation rejected by Shopify "
                f"(HTTP {e.response.status_code}): {e.response.text}"
            )
            return CancellationResult(
                order_id=order_id,
                cancelled=False,
                status_code=e.response.status_code,
                detail=e.response.text,
            )
        except httpx.TimeoutException as e:
            log.error(f"{log_prefix} Shopify timeout during cancellation. Order state unknown: {e!r}")
            return CancellationResult(order_id=order_id, cancelled=False, detail="timeout")
        except httpx.HTTPError as e:
            log.error(f"{log_prefix} Shopify unreachable during cancellation: {e!r}")
            return CancellationResult(order_id=order_id, cancelled=False, detail=str(e) or type(e).__name__)

        log.info(f"{log_prefix} Order cancelled successfully.")
        return CancellationResult(order_id=order_id, cancelled=True, status_code=response.status_code)


# --- Dry Run Canceller ---
class DryRunCanceller:
    """
    Canceller that never calls Shopify.
    Every call is recorded in `calls` and logged, for safe dry runs and tests.
    """
    def __init__(self):
        self.calls: List[Tuple[OrderId, str]] = []

    async def cancel(self, order_id: OrderId, reason: str) -> CancellationResult:
        self.calls.append((order_id, reason))
        log.warning(f"[Order: {order_id}] DRY RUN: would have cancelled the order ({reason}).")
        return CancellationResult(order_id=order_id, cancelled=False, dry_run=True)


def build_canceller(settings: Settings) -> OrderCanceller:
    """
    Chooses the canceller for the given settings.

    DRY_RUN always wins. Without a store domain or access token the service
    falls back to a dry run instead of calling an unconfigured shop.
    """
    if settings.DRY_RUN:
        log.info("DRY_RUN enabled: orders will not be cancelled in Shopify.")
        return DryRunCanceller()
    if not settings.shopify_configured:
        log.warning("SHOPIFY_STORE_DOMAIN or SHOPIFY_ACCESS_TOKEN missing: falling back to dry run.")
        return DryRunCanceller()
    return ShopifyAdminClient.from_settings(settings)

"""
main.py — FastAPI Entry Point for the Order Validator

This module exposes the Shopify orders/create webhook endpoint. Each call is
handled independently: verify the signature, parse the order, validate the
photo-print line items and cancel the order on mismatch.

Responsibilities:
    • Reject non-POST calls (405) and unsigned or tampered webhooks (401)
    • Hand the parsed order to the validation workflow
    • Map every unexpected error to a generic 500 without leaking details
    • Provide system health information
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .clients import OrderCanceller, build_canceller
from .config import Settings
from .logging_config import get_logger, setup_logging
from .models import Order
from .notifications import AdminNotifier, build_notifier
from .validation import OrderValidator
from .verification import SHOPIFY_HMAC_HEADER, verify_shopify_webhook
from .workflow import process_order_webhook

log = get_logger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
        settings: Optional[Settings] = None,
        canceller: Optional[OrderCanceller] = None,
        notifier: Optional[AdminNotifier] = None,
) -> FastAPI:
    """
    Builds the FastAPI application.

    Settings are read once here and passed to every component. Tests inject
    their own settings, canceller and notifier.

    Args:
        settings (Settings, optional): Defaults to the environment.
        canceller (OrderCanceller, optional): Defaults to `build_canceller(settings)`.
        notifier (AdminNotifier, optional): Defaults to `build_notifier(settings)`.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or Settings()
    canceller = canceller or build_canceller(settings)
    notifier = notifier or build_notifier(settings)
    validator = OrderValidator.from_settings(settings)

    if not settings.SHOPIFY_WEBHOOK_SECRET:
        if settings.ALLOW_UNSIGNED_WEBHOOKS:
            log.warning("No webhook secret configured: unsigned webhooks are ACCEPTED (insecure mode).")
        else:
            log.warning("No webhook secret configured: every webhook will be rejected with 401.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Order validator starting...")
        yield
        close = getattr(canceller, "aclose", None)
        if close is not None:
            await close()
        log.info("Order validator stopped.")

    app = FastAPI(title="Shopify Order Validator", lifespan=lifespan)
    app.state.settings = settings
    app.state.validator = validator
    app.state.canceller = canceller
    app.state.notifier = notifier

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        log.critical(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal error"})

    # Methods the router itself rejects (e.g. TRACE) get the same body as the webhook's 405
    @app.exception_handler(405)
    async def method_not_allowed(request: Request, exc: Exception):
        return JSONResponse(
            status_code=405,
            content={"error": "Method not allowed"},
            headers=getattr(exc, "headers", None),
        )

    # Webhook Endpoint: Shopify → Order Validator
    @app.api_route("/validate-order", methods=ALL_METHODS)
    async def validate_order(request: Request):
        """
        Receives an orders/create webhook from Shopify.

        Returns:
            JSONResponse:
                - 405 for any method other than POST
                - 401 if the HMAC signature does not match
                - 200 with "Order valid" or "Order cancelled" and the reason
                - 500 for malformed payloads or any unexpected error
        """
        log.info(f"Webhook received: {request.method}")

        if request.method != "POST":
            return JSONResponse(status_code=405, content={"error": "Method not allowed"})

        try:
            body = await request.body()
            signature = request.headers.get(SHOPIFY_HMAC_HEADER)

            if not verify_shopify_webhook(
                    body,
                    signature,
                    settings.SHOPIFY_WEBHOOK_SECRET,
                    allow_unsigned=settings.ALLOW_UNSIGNED_WEBHOOKS,
            ):
                log.warning("Invalid webhook signature.")
                return JSONResponse(status_code=401, content={"error": "Invalid signature"})

            order = Order.model_validate_json(body)

            outcome = await process_order_webhook(
                order,
                validator=request.app.state.validator,
                canceller=request.app.state.canceller,
                notifier=request.app.state.notifier,
            )
            return JSONResponse(status_code=200, content=outcome.response_body())

        except Exception as e:
            log.critical(f"Error while handling webhook: {e}", exc_info=True)
            return JSONResponse(status_code=500, content={"error": "Internal error"})

    # Health Check Endpoint
    @app.get("/health")
    def health_check():
        """Simple health check for monitoring and container orchestrators."""
        return {"status": "ok"}

    return app


def run():
    """Starts the service with uvicorn, configured from the environment."""
    import uvicorn

    settings = Settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()

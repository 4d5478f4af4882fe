"""
config.py — Runtime Settings for the Order Validator

All settings come from environment variables (or a local .env file) and are
loaded once when the application is created. The resulting Settings object is
handed explicitly to every component; nothing reads os.environ afterwards.
"""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class PhotoCountPolicy(str, Enum):
    """How uploaded-photo properties are counted on a line item."""
    NAIVE = "naive"
    DEDUPLICATED = "deduplicated"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment Variables:
        SHOPIFY_WEBHOOK_SECRET: Shared secret used to sign incoming webhooks
        SHOPIFY_ACCESS_TOKEN: Admin API access token used for cancellations
        SHOPIFY_STORE_DOMAIN: Store domain, e.g. "monstore.myshopify.com"
        SHOPIFY_API_VERSION: Admin API version (default 2023-10)
        SHOPIFY_TIMEOUT_SECONDS: Timeout of the cancellation call
        PRODUCT_NAME: Line item title substring that triggers validation
        ADMIN_EMAIL: Recipient of fraud notifications
        CANCEL_CURRENCY: Currency sent with the zero-amount cancellation refund
        PHOTO_COUNT_POLICY: "deduplicated" (default) or "naive"
        ALLOW_UNSIGNED_WEBHOOKS: Accept webhooks when no secret is set (test mode only)
        DRY_RUN: Log cancellations instead of calling Shopify
        LOG_LEVEL: Logging level (default INFO)
        LOG_FILE: Optional log file path
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Shopify
    SHOPIFY_WEBHOOK_SECRET: Optional[str] = None
    SHOPIFY_ACCESS_TOKEN: Optional[str] = None
    SHOPIFY_STORE_DOMAIN: Optional[str] = None
    SHOPIFY_API_VERSION: str = "2023-10"
    SHOPIFY_TIMEOUT_SECONDS: float = 10.0

    # Validation
    PRODUCT_NAME: str = "tirage"
    PHOTO_COUNT_POLICY: PhotoCountPolicy = PhotoCountPolicy.DEDUPLICATED

    # Cancellation / notification
    ADMIN_EMAIL: Optional[str] = None
    CANCEL_CURRENCY: str = "EUR"
    DRY_RUN: bool = False

    # Insecure mode: only for local testing against unsigned payloads
    ALLOW_UNSIGNED_WEBHOOKS: bool = False

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def shopify_configured(self) -> bool:
        """True when both the store domain and the access token are set."""
        return bool(self.SHOPIFY_STORE_DOMAIN and self.SHOPIFY_ACCESS_TOKEN)

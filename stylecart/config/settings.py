# stylecart/config/settings.py

"""Central configuration for the stylecart catalog engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str) -> bool:
    """Read a boolean flag such as ``1``/``true``/``yes`` from the env."""
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the stylecart catalog engine."""

    # --- Networking ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a provider call times out
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
    }

    # --- Provider endpoints (empty means disabled) ---
    SHOPIFY_STOREFRONT_URL: str = os.getenv("SHOPIFY_STOREFRONT_URL", "")
    SHOPIFY_STOREFRONT_TOKEN: str = os.getenv(
        "SHOPIFY_STOREFRONT_TOKEN", ""
    )
    FAKESTORE_BASE_URL: str = os.getenv(
        "FAKESTORE_BASE_URL", "https://fakestoreapi.com"
    )
    AMAZON_SEARCH_ENDPOINT: str = os.getenv("AMAZON_SEARCH_ENDPOINT", "")
    FLIPKART_SEARCH_ENDPOINT: str = os.getenv(
        "FLIPKART_SEARCH_ENDPOINT", ""
    )
    STATIC_CATALOG_ENABLED: bool = _env_flag("STATIC_CATALOG_ENABLED")

    # --- Search ---
    DEFAULT_LIMIT: int = 20
    FALLBACK_TEXT_MAX_LEN: int = 80     # Longer raw inputs are dropped

    # --- Outfits ---
    OUTFIT_BUCKET_CAP: int = 5          # Items per category considered
    OUTFIT_MAX_SUGGESTIONS: int = 5
    OUTFIT_LABEL: str = "Top + Jeans + Sneakers"

    # --- Pricing ---
    CURRENCY: str = "INR"
    FREE_SHIPPING_THRESHOLD: float = 2000.0
    SHIPPING_NUDGE_WINDOW: float = 250.0

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("STYLECART_LOG_LEVEL", "WARNING")

    # --- Providers (fan-out order: primary first, then registration order) ---
    AVAILABLE_PROVIDERS: list[dict[str, str]] = [
        {
            "id": "shopify",
            "label": "Shopify",
            "role": "primary",
            "provider": "stylecart.providers.shopify_provider.ShopifyProvider",
        },
        {
            "id": "fakestore",
            "label": "FakeStore",
            "role": "secondary",
            "provider": (
                "stylecart.providers.fakestore_provider.FakeStoreProvider"
            ),
        },
        {
            "id": "amazon",
            "label": "Amazon",
            "role": "secondary",
            "provider": (
                "stylecart.providers.marketplace_provider.AmazonProvider"
            ),
        },
        {
            "id": "flipkart",
            "label": "Flipkart",
            "role": "secondary",
            "provider": (
                "stylecart.providers.marketplace_provider.FlipkartProvider"
            ),
        },
        {
            "id": "static",
            "label": "Demo Catalog",
            "role": "secondary",
            "provider": "stylecart.providers.static_provider.StaticProvider",
        },
    ]

# stylecart/providers/marketplace_provider.py

"""Secondary providers for endpoint-configured marketplaces.

Amazon and Flipkart are reached through a search proxy that accepts
``q``, ``maxPrice`` and ``limit`` query parameters and answers with
``{"items": [...]}``.  Both share one adapter and differ only in their
endpoint and which native fields carry the item id.
"""

import uuid
from typing import Any

from stylecart.config.settings import Settings
from stylecart.filters.product_filter import ProductFilter
from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product, ProductVariant
from stylecart.providers.base_provider import BaseProvider


class MarketplaceProvider(BaseProvider):
    """Keyword-search marketplace behind a configurable HTTP endpoint."""

    ID_FIELDS: tuple[str, ...] = ("id", "sku")
    DEFAULT_TITLE: str = "Marketplace Product"

    def __init__(self, provider_id: str, endpoint: str) -> None:
        super().__init__(provider_id)
        self.endpoint = endpoint

    def enabled(self) -> bool:
        """Enabled only when a search endpoint is configured."""
        return bool(self.endpoint)

    def build_query(self, filters: ParsedFilters) -> str:
        """Concatenate text, type, colour and tags into a keyword string."""
        parts: list[str] = []
        if filters.text:
            parts.append(filters.text)
        if filters.product_type:
            parts.append(filters.product_type)
        if filters.color:
            parts.append(filters.color)
        parts.extend(filters.tags)
        return " ".join(parts)

    @staticmethod
    def _native_tags(item: dict[str, Any]) -> list[str]:
        """Tags as strings, whether sent as a list or a single value."""
        raw = item.get("tags")
        if raw is None or raw == "":
            return []
        if isinstance(raw, (list, tuple)):
            return [str(t) for t in raw if t is not None]
        return [str(raw)]

    def _native_id(self, item: dict[str, Any]) -> str:
        for key in self.ID_FIELDS:
            value = item.get(key)
            if value is not None and value != "":
                return str(value)
        return uuid.uuid4().hex[:10]

    def _parse_item(self, item: dict[str, Any]) -> Product:
        """Normalise a marketplace item, synthesising a default variant."""
        native_id = self._native_id(item)
        price = self.parse_price(item.get("price"))
        images_raw = item.get("images")
        if isinstance(images_raw, list):
            images = [str(i) for i in images_raw]
        elif item.get("image"):
            images = [str(item["image"])]
        else:
            images = []
        return Product(
            id=f"{self.provider_id}:{native_id}",
            title=str(item.get("title") or item.get("name") or self.DEFAULT_TITLE),
            description=str(item.get("description") or ""),
            price=price,
            images=images,
            category=str(item.get("category") or self.provider_id.title()),
            tags=[f"vendor:{self.provider_id}", *self._native_tags(item)],
            variants=[
                ProductVariant(
                    id=f"{self.provider_id}-variant:{native_id}",
                    title="Default",
                    price=price,
                )
            ],
        )

    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        params: dict[str, Any] = {
            "q": self.build_query(filters),
            "limit": limit,
        }
        if filters.max_price is not None:
            params["maxPrice"] = filters.max_price
        resp = self._fetch_get(self.endpoint, params=params)
        if resp is None:
            return []
        data = self._decode(resp)
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            self.logger.warning(
                "[%s] Response has no 'items' list", self.provider_id
            )
            return []
        products = [self._parse_item(item) for item in items]
        # The proxy may ignore maxPrice; enforce the ceiling here
        kept = [
            p
            for p in products
            if ProductFilter.within_price(p, filters.max_price)
        ]
        return kept[:limit]


class AmazonProvider(MarketplaceProvider):
    """Amazon search proxy (``AMAZON_SEARCH_ENDPOINT``)."""

    ID_FIELDS = ("asin", "id", "sku")
    DEFAULT_TITLE = "Amazon Product"

    def __init__(self, endpoint: str | None = None) -> None:
        super().__init__(
            "amazon",
            endpoint
            if endpoint is not None
            else Settings.AMAZON_SEARCH_ENDPOINT,
        )


class FlipkartProvider(MarketplaceProvider):
    """Flipkart search proxy (``FLIPKART_SEARCH_ENDPOINT``)."""

    DEFAULT_TITLE = "Flipkart Product"

    def __init__(self, endpoint: str | None = None) -> None:
        super().__init__(
            "flipkart",
            endpoint
            if endpoint is not None
            else Settings.FLIPKART_SEARCH_ENDPOINT,
        )

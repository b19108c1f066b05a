# stylecart/providers/fakestore_provider.py

"""Secondary provider for the public FakeStore demo API."""

from typing import Any
from urllib.parse import quote

from stylecart.filters.product_filter import ProductFilter
from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product, ProductVariant
from stylecart.providers.base_provider import BaseProvider


def normalise_category(value: str | None) -> str | None:
    """Map free text onto one of FakeStore's four category slugs."""
    if not value:
        return None
    lowered = value.lower()
    if "jewel" in lowered:
        return "jewelery"
    if "elect" in lowered:
        return "electronics"
    # "women" contains "men": test it first
    if "women" in lowered:
        return "women's clothing"
    if "men" in lowered:
        return "men's clothing"
    return None


class FakeStoreProvider(BaseProvider):
    """FakeStore REST API (https://fakestoreapi.com).

    The API only filters by category, so price ceiling and free-text
    containment are applied locally before truncation.
    """

    def __init__(self, base_url: str | None = None) -> None:
        super().__init__("fakestore")
        self.base_url = (
            base_url
            if base_url is not None
            else self.settings.FAKESTORE_BASE_URL
        ).rstrip("/")

    def enabled(self) -> bool:
        """Enabled when a base URL is configured."""
        return bool(self.base_url)

    def build_query(self, filters: ParsedFilters) -> str:
        """Return the listing URL, narrowed to a category when one fits."""
        category = normalise_category(filters.product_type or filters.text)
        if category:
            return f"{self.base_url}/products/category/{quote(category)}"
        return f"{self.base_url}/products"

    def _parse_item(self, item: dict[str, Any]) -> Product:
        """Normalise a FakeStore item, synthesising a default variant."""
        price = self.parse_price(item.get("price"))
        category = str(item.get("category") or "General")
        image = item.get("image")
        return Product(
            id=f"fakestore:{item['id']}",
            title=str(item.get("title", "")),
            description=str(item.get("description") or ""),
            price=price,
            images=[str(image)] if image else [],
            category=category,
            tags=[t for t in ("vendor:fakestore", item.get("category")) if t],
            variants=[
                ProductVariant(
                    id=f"fakestore-variant:{item['id']}",
                    title="Default",
                    price=price,
                )
            ],
        )

    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        url = self.build_query(filters)
        self.logger.debug("[fakestore] GET %s", url)
        resp = self._fetch_get(url)
        if resp is None:
            return []
        data = self._decode(resp)
        items: list[dict[str, Any]] = data if isinstance(data, list) else []
        products = [self._parse_item(item) for item in items]
        kept, _excluded = ProductFilter.apply_local_constraints(
            products, filters
        )
        return kept[:limit]

    def get_product(self, product_id: str) -> Product | None:
        """Fetch one item by ``fakestore:<n>`` or bare ``<n>``."""
        num_id = (
            product_id.split(":", 1)[1]
            if product_id.startswith("fakestore:")
            else product_id
        )
        try:
            resp = self._fetch_get(f"{self.base_url}/products/{num_id}")
            if resp is None:
                return None
            data = self._decode(resp)
            if not isinstance(data, dict):
                return None
            return self._parse_item(data)
        except Exception as exc:
            self.logger.error(
                "[fakestore] Product lookup failed for %s: %s",
                product_id,
                exc,
                exc_info=True,
            )
            return None

# stylecart/providers/shopify_provider.py

"""Primary catalog provider backed by the Shopify Storefront GraphQL API."""

from typing import Any

from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product, ProductVariant, SelectedOption
from stylecart.providers.base_provider import BaseProvider

_PRODUCT_FIELDS = """
    id
    title
    description
    handle
    tags
    productType
    availableForSale
    priceRange {
      minVariantPrice { amount currencyCode }
      maxVariantPrice { amount currencyCode }
    }
    images(first: 5) {
      edges { node { url altText } }
    }
    variants(first: 10) {
      edges {
        node {
          id
          title
          price { amount currencyCode }
          availableForSale
          selectedOptions { name value }
        }
      }
    }
"""

LIST_PRODUCTS_QUERY = (
    "query listProducts($first: Int!) {"
    "  products(first: $first) { edges { node { "
    + _PRODUCT_FIELDS
    + " } } }"
    "}"
)

SEARCH_PRODUCTS_QUERY = (
    "query searchProducts($query: String!, $first: Int!) {"
    "  products(first: $first, query: $query) { edges { node { "
    + _PRODUCT_FIELDS
    + " } } }"
    "}"
)

GET_PRODUCT_QUERY = (
    "query getProduct($id: ID!) {"
    "  product(id: $id) { "
    + _PRODUCT_FIELDS
    + " }"
    "}"
)


class ShopifyProvider(BaseProvider):
    """Primary store, queried with Storefront search syntax.

    Every filter is expressible natively, so no local post-filter is
    applied.  When the filters produce no query at all, the provider lists
    its first *limit* products instead of sending an empty search.
    """

    is_primary = True

    def __init__(
        self,
        storefront_url: str | None = None,
        access_token: str | None = None,
    ) -> None:
        super().__init__("shopify")
        self.storefront_url = (
            storefront_url
            if storefront_url is not None
            else self.settings.SHOPIFY_STOREFRONT_URL
        )
        self.access_token = (
            access_token
            if access_token is not None
            else self.settings.SHOPIFY_STOREFRONT_TOKEN
        )

    def enabled(self) -> bool:
        """Enabled when a Storefront endpoint is configured."""
        return bool(self.storefront_url)

    def build_query(self, filters: ParsedFilters) -> str:
        """Compose a Storefront query; all terms are joined with AND."""
        parts: list[str] = []
        if filters.text and filters.text.strip():
            parts.append(" ".join(filters.text.split()))
        if filters.product_type:
            parts.append(f"product_type:'{filters.product_type}'")
        if filters.color:
            parts.append(f"tag:'{filters.color}'")
        for tag in filters.tags:
            parts.append(f"tag:'{tag}'")
        if filters.max_price is not None:
            parts.append(f"variants.price:<{filters.max_price}")
        return " AND ".join(parts)

    # ── GraphQL plumbing ─────────────────────────────────

    def _graphql(
        self, query: str, variables: dict[str, Any],
    ) -> dict[str, Any] | None:
        """POST a GraphQL document and return its ``data`` block."""
        headers = {
            "X-Shopify-Storefront-Access-Token": self.access_token,
        }
        resp = self._fetch_post(
            self.storefront_url,
            headers,
            {"query": query, "variables": variables},
        )
        if resp is None:
            return None
        body: dict[str, Any] = self._decode(resp)
        if body.get("errors"):
            self.logger.warning(
                "[shopify] GraphQL errors: %s", body["errors"]
            )
            return None
        data: dict[str, Any] | None = body.get("data")
        return data

    def _parse_node(self, node: dict[str, Any]) -> Product:
        """Normalise a Storefront product node into a Product."""
        price_range = node.get("priceRange") or {}
        min_amount = (price_range.get("minVariantPrice") or {}).get("amount")
        max_amount = (price_range.get("maxVariantPrice") or {}).get("amount")
        price = self.parse_price(min_amount)
        compare_at = (
            self.parse_price(max_amount)
            if max_amount is not None and max_amount != min_amount
            else None
        )

        images = [
            edge["node"]["url"]
            for edge in (node.get("images") or {}).get("edges", [])
        ]
        variants: list[ProductVariant] = []
        for edge in (node.get("variants") or {}).get("edges", []):
            v = edge["node"]
            variants.append(
                ProductVariant(
                    id=str(v["id"]),
                    title=str(v.get("title", "Default")),
                    price=self.parse_price(v.get("price")),
                    available=bool(v.get("availableForSale", True)),
                    selected_options=[
                        SelectedOption(name=o["name"], value=o["value"])
                        for o in v.get("selectedOptions") or []
                    ],
                )
            )

        return Product(
            id=str(node["id"]),
            title=str(node.get("title", "")),
            description=str(node.get("description") or ""),
            price=price,
            compare_at_price=compare_at,
            images=images,
            category=str(node.get("productType") or "General"),
            tags=[str(t) for t in node.get("tags") or []],
            variants=variants,
            available=bool(node.get("availableForSale", True)),
        )

    def _nodes(self, data: dict[str, Any] | None) -> list[Product]:
        if not data:
            return []
        edges = data["products"]["edges"]
        return [self._parse_node(edge["node"]) for edge in edges]

    # ── Queries ──────────────────────────────────────────

    def top_products(self, limit: int) -> list[Product]:
        """List the first *limit* products without any filter."""
        data = self._graphql(LIST_PRODUCTS_QUERY, {"first": limit})
        return self._nodes(data)

    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        query = self.build_query(filters)
        if not query.strip():
            self.logger.info(
                "[shopify] Empty query, listing top %d products", limit
            )
            return self.top_products(limit)
        data = self._graphql(
            SEARCH_PRODUCTS_QUERY, {"query": query, "first": limit}
        )
        return self._nodes(data)

    def get_product(self, product_id: str) -> Product | None:
        """Fetch one product by its Storefront id; ``None`` on failure."""
        if not self.enabled():
            return None
        try:
            data = self._graphql(GET_PRODUCT_QUERY, {"id": product_id})
            node = (data or {}).get("product")
            if not node:
                return None
            return self._tag_vendor(self._parse_node(node))
        except Exception as exc:
            self.logger.error(
                "[shopify] Product lookup failed for %s: %s",
                product_id,
                exc,
                exc_info=True,
            )
            return None

# tests/test_catalog_aggregator.py

"""Tests for CatalogAggregator fan-out, merge and deduplication."""

import time
import unittest
from typing import Any

from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product
from stylecart.services.catalog_aggregator import (
    CatalogAggregator,
    SearchResult,
    build_providers,
)


def _make(title: str, price: float, vendor: str) -> Product:
    """Create a minimal Product tagged with a vendor."""
    return Product(
        id=f"{vendor}:{title}",
        title=title,
        price=price,
        tags=[f"vendor:{vendor}"],
    )


class StubProvider:
    """Duck-typed provider returning canned products."""

    def __init__(
        self,
        provider_id: str,
        products: list[Product] | None = None,
        is_primary: bool = False,
        is_enabled: bool = True,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.provider_id = provider_id
        self.products = products or []
        self.is_primary = is_primary
        self.is_enabled = is_enabled
        self.error = error
        self.delay = delay
        self.calls: list[tuple[ParsedFilters, int]] = []

    def enabled(self) -> bool:
        return self.is_enabled

    def search(self, filters: ParsedFilters, limit: int) -> list[Product]:
        self.calls.append((filters, limit))
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.products[:limit]


def _batch(vendor: str, n: int, start: float = 1.0) -> list[Product]:
    return [_make(f"{vendor} item {i}", start + i, vendor) for i in range(n)]


def _aggregator(*providers: StubProvider) -> CatalogAggregator:
    stubs: list[Any] = list(providers)
    return CatalogAggregator(stubs)


class TestLimits(unittest.IsolatedAsyncioTestCase):
    """Per-provider limits and final truncation."""

    async def test_primary_full_secondary_half(self) -> None:
        primary = StubProvider("shop", _batch("shop", 30), is_primary=True)
        secondary = StubProvider("fake", _batch("fake", 30))
        await _aggregator(primary, secondary).search(ParsedFilters(), 20)
        self.assertEqual(primary.calls[0][1], 20)
        self.assertEqual(secondary.calls[0][1], 10)

    async def test_secondary_limit_rounds_up(self) -> None:
        primary = StubProvider("shop", is_primary=True)
        secondary = StubProvider("fake")
        await _aggregator(primary, secondary).search(ParsedFilters(), 5)
        self.assertEqual(primary.calls[0][1], 5)
        self.assertEqual(secondary.calls[0][1], 3)

    async def test_default_limit(self) -> None:
        primary = StubProvider("shop", is_primary=True)
        await _aggregator(primary).search(ParsedFilters())
        self.assertEqual(primary.calls[0][1], 20)

    async def test_truncated_to_limit(self) -> None:
        primary = StubProvider("shop", _batch("shop", 4), is_primary=True)
        secondary = StubProvider("fake", _batch("fake", 4, start=100.0))
        products = await _aggregator(primary, secondary).search(
            ParsedFilters(), 4
        )
        self.assertEqual(len(products), 4)
        self.assertTrue(all(p.vendor == "shop" for p in products))

    async def test_zero_limit_queries_nothing(self) -> None:
        primary = StubProvider("shop", _batch("shop", 3), is_primary=True)
        result = await _aggregator(primary).search_with_stats(
            ParsedFilters(), 0
        )
        self.assertEqual(result.products, [])
        self.assertEqual(primary.calls, [])


class TestMerge(unittest.IsolatedAsyncioTestCase):
    """Launch-order merge, isolation and dedup."""

    async def test_primary_sorted_first(self) -> None:
        secondary = StubProvider("fake", _batch("fake", 2))
        primary = StubProvider("shop", _batch("shop", 2), is_primary=True)
        aggregator = _aggregator(secondary, primary)
        self.assertEqual(
            [p.provider_id for p in aggregator.providers], ["shop", "fake"]
        )

    async def test_launch_order_beats_completion_order(self) -> None:
        primary = StubProvider(
            "shop", _batch("shop", 2), is_primary=True, delay=0.05
        )
        secondary = StubProvider("fake", _batch("fake", 2, start=50.0))
        products = await _aggregator(primary, secondary).search(
            ParsedFilters(), 10
        )
        self.assertEqual(
            [p.vendor for p in products], ["shop", "shop", "fake", "fake"]
        )

    async def test_first_listing_wins_across_vendors(self) -> None:
        shop = StubProvider(
            "a", [_make("Denim Jeans", 79.99, "a")], is_primary=True
        )
        other = StubProvider("b", [_make("DENIM JEANS", 79.99, "b")])
        result = await _aggregator(shop, other).search_with_stats(
            ParsedFilters(), 10
        )
        self.assertEqual(len(result.products), 1)
        self.assertEqual(result.products[0].vendor, "a")
        self.assertEqual(result.total_before_dedup, 2)
        self.assertEqual(result.deduplicated_count, 1)

    async def test_failing_provider_isolated(self) -> None:
        first = StubProvider("one", _batch("one", 2), is_primary=True)
        broken = StubProvider("two", error=ConnectionError("timeout"))
        third = StubProvider("three", _batch("three", 2, start=10.0))
        result = await _aggregator(first, broken, third).search_with_stats(
            ParsedFilters(), 3
        )
        self.assertEqual(
            [p.id for p in result.products],
            ["one:one item 0", "one:one item 1", "three:three item 0"],
        )
        self.assertEqual(result.provider_counts["two"], 0)
        self.assertEqual(len(result.errors), 1)
        self.assertIn("two", result.errors[0])

    async def test_disabled_provider_skipped(self) -> None:
        primary = StubProvider("shop", _batch("shop", 1), is_primary=True)
        off = StubProvider("amazon", _batch("amazon", 1), is_enabled=False)
        result = await _aggregator(primary, off).search_with_stats(
            ParsedFilters(), 10
        )
        self.assertEqual(off.calls, [])
        self.assertEqual(result.skipped, ["amazon"])
        self.assertNotIn("amazon", result.provider_counts)

    async def test_no_providers(self) -> None:
        result = await _aggregator().search_with_stats(ParsedFilters(), 10)
        self.assertIsInstance(result, SearchResult)
        self.assertEqual(result.products, [])

    async def test_filters_forwarded(self) -> None:
        primary = StubProvider("shop", is_primary=True)
        filters = ParsedFilters(product_type="jeans", max_price=800)
        await _aggregator(primary).search(filters, 5)
        self.assertIs(primary.calls[0][0], filters)

    async def test_top_products_uses_empty_filters(self) -> None:
        primary = StubProvider("shop", _batch("shop", 3), is_primary=True)
        products = await _aggregator(primary).top_products(2)
        self.assertEqual(len(products), 2)
        self.assertTrue(primary.calls[0][0].is_empty)


class TestBuildProviders(unittest.TestCase):
    """build_providers registry loading."""

    def test_bad_path_skipped(self) -> None:
        providers = build_providers(
            [
                {"id": "missing", "provider": "stylecart.nope.Missing"},
                {
                    "id": "static",
                    "provider": (
                        "stylecart.providers.static_provider.StaticProvider"
                    ),
                },
            ]
        )
        self.assertEqual([p.provider_id for p in providers], ["static"])

    def test_default_registry(self) -> None:
        ids = [p.provider_id for p in build_providers()]
        self.assertEqual(
            ids, ["shopify", "fakestore", "amazon", "flipkart", "static"]
        )

    def test_default_registry_has_one_primary(self) -> None:
        primary = [p.provider_id for p in build_providers() if p.is_primary]
        self.assertEqual(primary, ["shopify"])

    def test_role_sets_primary(self) -> None:
        providers = build_providers(
            [
                {
                    "id": "static",
                    "provider": (
                        "stylecart.providers.static_provider.StaticProvider"
                    ),
                    "role": "primary",
                },
                {
                    "id": "shopify",
                    "provider": (
                        "stylecart.providers.shopify_provider.ShopifyProvider"
                    ),
                    "role": "secondary",
                },
            ]
        )
        self.assertEqual(
            [(p.provider_id, p.is_primary) for p in providers],
            [("static", True), ("shopify", False)],
        )

    def test_missing_role_keeps_class_default(self) -> None:
        providers = build_providers(
            [
                {
                    "id": "shopify",
                    "provider": (
                        "stylecart.providers.shopify_provider.ShopifyProvider"
                    ),
                },
            ]
        )
        self.assertTrue(providers[0].is_primary)


if __name__ == "__main__":
    unittest.main()

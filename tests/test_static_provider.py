# tests/test_static_provider.py

"""Tests for the offline demo catalog provider."""

import unittest
from unittest.mock import patch

from stylecart.config.settings import Settings
from stylecart.models.filters import ParsedFilters
from stylecart.providers.static_provider import StaticProvider, demo_catalog


class TestDemoCatalog(unittest.TestCase):
    """demo_catalog contents."""

    def test_ids_unique(self) -> None:
        ids = [p.id for p in demo_catalog()]
        self.assertEqual(len(ids), len(set(ids)))

    def test_fresh_copy(self) -> None:
        first = demo_catalog()
        first[0].tags.append("mutated")
        self.assertNotIn("mutated", demo_catalog()[0].tags)


class TestStaticProvider(unittest.TestCase):
    """StaticProvider search semantics."""

    def setUp(self) -> None:
        self.provider = StaticProvider(enabled=True)

    @patch.object(Settings, "STATIC_CATALOG_ENABLED", False)
    def test_disabled_by_setting(self) -> None:
        provider = StaticProvider()
        self.assertFalse(provider.enabled())
        self.assertEqual(provider.search(ParsedFilters(), 10), [])

    def test_empty_filters_return_catalog_order(self) -> None:
        products = self.provider.search(ParsedFilters(), 3)
        self.assertEqual(
            [p.id for p in products], ["static:1", "static:11", "static:12"]
        )

    def test_type_and_color(self) -> None:
        products = self.provider.search(
            ParsedFilters(product_type="jeans", color="blue"), 10
        )
        self.assertEqual([p.title for p in products], ["Denim Jeans"])

    def test_color_must_be_tag(self) -> None:
        products = self.provider.search(
            ParsedFilters(product_type="jeans", color="black"), 10
        )
        self.assertEqual(products, [])

    def test_style_tag_and_price(self) -> None:
        products = self.provider.search(
            ParsedFilters(tags=["casual"], max_price=80), 10
        )
        self.assertEqual(
            [p.title for p in products],
            ["Premium Cotton T-Shirt", "Denim Jeans"],
        )

    def test_results_tagged(self) -> None:
        products = self.provider.search(ParsedFilters(text="sneakers"), 10)
        self.assertEqual(products[0].vendor, "static")

    def test_repeated_search_is_stable(self) -> None:
        """Vendor tagging of results leaves the stored catalog untouched."""
        vendor_query = ParsedFilters(text="static")
        first = self.provider.search(vendor_query, 20)
        self.provider.search(ParsedFilters(), 20)
        second = self.provider.search(vendor_query, 20)
        self.assertEqual(first, [])
        self.assertEqual(second, [])

    def test_stored_tags_unchanged(self) -> None:
        self.provider.search(ParsedFilters(), 20)
        stored = self.provider.get_product("static:6")
        assert stored is not None
        self.assertNotIn("vendor:static", stored.tags)

    def test_get_product(self) -> None:
        product = self.provider.get_product("static:9")
        assert product is not None
        self.assertEqual(product.title, "Sneakers")
        self.assertIsNone(self.provider.get_product("static:404"))


if __name__ == "__main__":
    unittest.main()

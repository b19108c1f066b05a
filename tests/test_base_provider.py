# tests/test_base_provider.py

"""Tests for BaseProvider's never-raise contract and shared helpers."""

import unittest
from typing import Any
from unittest.mock import MagicMock

from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product
from stylecart.providers.base_provider import BaseProvider


class _StubProvider(BaseProvider):
    """Concrete provider returning canned products or raising."""

    def __init__(
        self,
        products: list[Product] | None = None,
        error: Exception | None = None,
        is_enabled: bool = True,
    ) -> None:
        super().__init__("stub")
        self.products = products or []
        self.error = error
        self.is_enabled = is_enabled
        self.search_calls = 0

    def enabled(self) -> bool:
        return self.is_enabled

    def build_query(self, filters: ParsedFilters) -> Any:
        return filters.text or ""

    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        self.search_calls += 1
        if self.error:
            raise self.error
        return self.products

    def fetch_get(self, url: str) -> Any:
        """Public wrapper for _fetch_get."""
        return self._fetch_get(url)


def _products(n: int) -> list[Product]:
    return [Product(id=f"stub:{i}", title=f"P{i}", price=float(i)) for i in range(n)]


class TestSearchContract(unittest.TestCase):
    """BaseProvider.search wrapping behaviour."""

    def test_disabled_returns_empty_without_calling(self) -> None:
        provider = _StubProvider(_products(3), is_enabled=False)
        self.assertEqual(provider.search(ParsedFilters(), 10), [])
        self.assertEqual(provider.search_calls, 0)

    def test_exception_becomes_empty(self) -> None:
        provider = _StubProvider(error=ConnectionError("boom"))
        self.assertEqual(provider.search(ParsedFilters(), 10), [])
        self.assertEqual(provider.search_calls, 1)

    def test_value_error_becomes_empty(self) -> None:
        provider = _StubProvider(error=ValueError("bad json"))
        self.assertEqual(provider.search(ParsedFilters(), 10), [])

    def test_truncates_to_limit(self) -> None:
        provider = _StubProvider(_products(8))
        self.assertEqual(len(provider.search(ParsedFilters(), 3)), 3)

    def test_tags_vendor(self) -> None:
        provider = _StubProvider(_products(2))
        results = provider.search(ParsedFilters(), 10)
        self.assertTrue(all(p.vendor == "stub" for p in results))
        self.assertEqual(results[0].tags[0], "vendor:stub")

    def test_vendor_tag_not_duplicated(self) -> None:
        product = Product(
            id="stub:1", title="P", price=1.0, tags=["vendor:stub"]
        )
        provider = _StubProvider([product])
        results = provider.search(ParsedFilters(), 10)
        self.assertEqual(results[0].tags.count("vendor:stub"), 1)


class TestFetchGet(unittest.TestCase):
    """BaseProvider._fetch_get single-attempt behaviour."""

    def setUp(self) -> None:
        self.provider = _StubProvider()
        self.session = MagicMock()
        self.provider.session = self.session

    def test_ok_response_returned(self) -> None:
        resp = MagicMock(status_code=200)
        self.session.get.return_value = resp
        self.assertIs(self.provider.fetch_get("https://x"), resp)

    def test_non_200_returns_none(self) -> None:
        self.session.get.return_value = MagicMock(status_code=503)
        self.assertIsNone(self.provider.fetch_get("https://x"))

    def test_exception_returns_none_without_retry(self) -> None:
        self.session.get.side_effect = TimeoutError("slow")
        self.assertIsNone(self.provider.fetch_get("https://x"))
        self.assertEqual(self.session.get.call_count, 1)

    def test_timeout_passed(self) -> None:
        self.session.get.return_value = MagicMock(status_code=200)
        self.provider.fetch_get("https://x")
        kwargs = self.session.get.call_args.kwargs
        self.assertEqual(
            kwargs["timeout"], self.provider.settings.REQUEST_TIMEOUT
        )


class TestParsePrice(unittest.TestCase):
    """BaseProvider.parse_price."""

    def test_number(self) -> None:
        self.assertEqual(BaseProvider.parse_price(12), 12.0)
        self.assertEqual(BaseProvider.parse_price(9.5), 9.5)

    def test_string(self) -> None:
        self.assertEqual(BaseProvider.parse_price("1,299.00"), 1299.0)

    def test_amount_dict(self) -> None:
        self.assertEqual(BaseProvider.parse_price({"amount": "19.99"}), 19.99)

    def test_garbage(self) -> None:
        self.assertEqual(BaseProvider.parse_price("n/a"), 0.0)
        self.assertEqual(BaseProvider.parse_price(None), 0.0)
        self.assertEqual(BaseProvider.parse_price({}), 0.0)


if __name__ == "__main__":
    unittest.main()

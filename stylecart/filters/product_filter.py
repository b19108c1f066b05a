# stylecart/filters/product_filter.py

"""Local product filtering for constraints a provider cannot express."""

import logging

from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product

logger = logging.getLogger("stylecart.filters")


class ProductFilter:
    """Apply parsed filters to already-normalised products."""

    @staticmethod
    def within_price(product: Product, max_price: float | None) -> bool:
        """True when no ceiling is set or the price is at or under it."""
        return max_price is None or product.price <= max_price

    @staticmethod
    def matches_text(
        product: Product,
        text: str | None,
        include_tags: bool = False,
    ) -> bool:
        """True when every whitespace token of *text* is in the haystack."""
        query = (text or "").strip().lower()
        if not query:
            return True
        hay = product.haystack(include_tags=include_tags)
        return all(token in hay for token in query.split())

    @staticmethod
    def apply_local_constraints(
        products: list[Product],
        filters: ParsedFilters,
    ) -> tuple[list[Product], int]:
        """Keep products within the price ceiling that contain the text.

        Returns the kept list and the count of excluded products.
        """
        kept = [
            p
            for p in products
            if ProductFilter.within_price(p, filters.max_price)
            and ProductFilter.matches_text(p, filters.text)
        ]
        excluded = len(products) - len(kept)
        if excluded:
            logger.info(
                "Local filter excluded %d of %d products",
                excluded,
                len(products),
            )
        return kept, excluded

    @staticmethod
    def matches_all(product: Product, filters: ParsedFilters) -> bool:
        """Full in-memory match used by catalogs with no query engine.

        Colour must be an exact tag, the type may appear anywhere in
        category/tags/title/description, every style tag must be a tag,
        and every text token must appear in the tagged haystack.
        """
        tags_lower = [t.lower() for t in product.tags]

        if not ProductFilter.within_price(product, filters.max_price):
            return False
        if filters.color and filters.color.lower() not in tags_lower:
            return False
        if filters.product_type:
            wanted = filters.product_type.lower()
            if not (
                wanted in product.category.lower()
                or any(wanted in t for t in tags_lower)
                or wanted in product.title.lower()
                or wanted in product.description.lower()
            ):
                return False
        if filters.tags and not all(
            tag.lower() in tags_lower for tag in filters.tags
        ):
            return False
        return ProductFilter.matches_text(
            product, filters.text, include_tags=True
        )

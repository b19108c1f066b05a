# stylecart/filters/deduplicator.py

"""Product deduplication across multiple catalog providers."""

import logging

from stylecart.models.product import Product

logger = logging.getLogger("stylecart.filters")


class ProductDeduplicator:
    """Drop repeated listings of the same real-world item.

    Two products are treated as the same item when their lower-cased
    titles and prices are equal.  This is a heuristic: distinct items that
    happen to share both will be merged.
    """

    @staticmethod
    def deduplicate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Keep the first occurrence of every ``(title, price)`` key.

        Input order decides which listing survives, so callers control
        provider precedence by how they concatenate.

        Returns the deduplicated list and the count of removed dupes.
        """
        if not products:
            return [], 0

        seen: set[tuple[str, float]] = set()
        kept: list[Product] = []
        removed = 0

        for product in products:
            key = product.dedup_key
            if key in seen:
                logger.debug(
                    "Duplicate dropped: '%s' @ %s (vendor=%s)",
                    product.title,
                    product.price,
                    product.vendor,
                )
                removed += 1
                continue
            seen.add(key)
            kept.append(product)

        if removed:
            logger.info(
                "Deduplication removed %d duplicate products",
                removed,
            )

        return kept, removed

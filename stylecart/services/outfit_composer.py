# stylecart/services/outfit_composer.py

"""Assemble top + bottom + footwear bundles under an optional budget."""

import logging

from stylecart.config.settings import Settings
from stylecart.models.outfit import OutfitSuggestion
from stylecart.models.product import Product

logger = logging.getLogger("stylecart.outfits")

TOP_KEYWORDS: tuple[str, ...] = ("t-shirt", "tee", "shirt", "hoodie", "top")
BOTTOM_KEYWORDS: tuple[str, ...] = ("jeans", "pants", "trousers", "denim")
FOOTWEAR_KEYWORDS: tuple[str, ...] = ("sneakers", "shoes", "footwear")


def matches_any(product: Product, keywords: tuple[str, ...]) -> bool:
    """Keyword hit anywhere in title, description, category or tags."""
    hay = product.haystack()
    return any(kw in hay for kw in keywords)


class OutfitComposer:
    """Build ranked outfit bundles from a product list."""

    @staticmethod
    def bucket(
        products: list[Product],
        keywords: tuple[str, ...],
    ) -> list[Product]:
        """Products matching *keywords*, in input order, capped."""
        matched = [p for p in products if matches_any(p, keywords)]
        return matched[: Settings.OUTFIT_BUCKET_CAP]

    @staticmethod
    def compose(
        products: list[Product],
        max_budget: float | None = None,
    ) -> list[OutfitSuggestion]:
        """Return the cheapest complete outfits, ascending by total.

        Buckets are not exclusive: one product may serve as both a top
        and a bottom.  An empty bucket means no outfits at all.  The sort
        is stable, so equal totals keep top-major generation order.
        """
        tops = OutfitComposer.bucket(products, TOP_KEYWORDS)
        bottoms = OutfitComposer.bucket(products, BOTTOM_KEYWORDS)
        footwear = OutfitComposer.bucket(products, FOOTWEAR_KEYWORDS)

        suggestions: list[OutfitSuggestion] = []
        for top in tops:
            for bottom in bottoms:
                for shoe in footwear:
                    total = top.price + bottom.price + shoe.price
                    if max_budget is not None and total > max_budget:
                        continue
                    suggestions.append(
                        OutfitSuggestion(
                            items=(top, bottom, shoe),
                            total_price=total,
                            label=Settings.OUTFIT_LABEL,
                        )
                    )

        suggestions.sort(key=lambda s: s.total_price)
        ranked = suggestions[: Settings.OUTFIT_MAX_SUGGESTIONS]
        logger.info(
            "Composed %d outfits (%d tops, %d bottoms, %d footwear, "
            "budget=%s)",
            len(ranked),
            len(tops),
            len(bottoms),
            len(footwear),
            max_budget,
        )
        return ranked

# stylecart/models/outfit.py

"""Bundled outfit suggestion model."""

from dataclasses import dataclass

from stylecart.models.product import Product


@dataclass(frozen=True)
class OutfitSuggestion:
    """One top, one bottom and one footwear item with their summed price."""

    items: tuple[Product, Product, Product]
    total_price: float
    label: str

    @property
    def top(self) -> Product:
        return self.items[0]

    @property
    def bottom(self) -> Product:
        return self.items[1]

    @property
    def footwear(self) -> Product:
        return self.items[2]

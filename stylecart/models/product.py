# stylecart/models/product.py

"""Product data model shared by every catalog provider."""

from dataclasses import dataclass, field

VENDOR_TAG_PREFIX = "vendor:"


@dataclass
class SelectedOption:
    """A named option pair on a variant, e.g. ``Size=M``."""

    name: str
    value: str


@dataclass
class ProductVariant:
    """A purchasable option of a product."""

    id: str
    title: str
    price: float
    available: bool = True
    selected_options: list[SelectedOption] = field(
        default_factory=lambda: list[SelectedOption]()
    )


@dataclass
class Product:
    """A normalised catalog entry from any provider.

    ``id`` is provider-prefixed (``"fakestore:17"``) so it is unique
    across providers by construction.
    """

    id: str
    title: str
    price: float
    description: str = ""
    category: str = ""
    images: list[str] = field(default_factory=lambda: list[str]())
    tags: list[str] = field(default_factory=lambda: list[str]())
    variants: list[ProductVariant] = field(
        default_factory=lambda: list[ProductVariant]()
    )
    available: bool = True
    compare_at_price: float | None = None

    @property
    def vendor(self) -> str:
        """Return the provider named by the ``vendor:`` tag, if any."""
        for tag in self.tags:
            if tag.startswith(VENDOR_TAG_PREFIX):
                return tag[len(VENDOR_TAG_PREFIX):]
        return ""

    @property
    def is_discounted(self) -> bool:
        """True when a compare-at price above the current price is set."""
        return (
            self.compare_at_price is not None
            and self.compare_at_price > self.price
        )

    @property
    def dedup_key(self) -> tuple[str, float]:
        """Cross-provider identity heuristic: lower-cased title and price."""
        return (self.title.lower(), self.price)

    def haystack(self, include_tags: bool = True) -> str:
        """Lower-cased searchable text for keyword matching."""
        parts = [self.title, self.description, self.category]
        if include_tags:
            parts.extend(self.tags)
        return " ".join(parts).lower()

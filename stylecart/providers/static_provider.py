# stylecart/providers/static_provider.py

"""Offline demo catalog exposed through the regular provider interface."""

import dataclasses

from stylecart.filters.product_filter import ProductFilter
from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product, ProductVariant, SelectedOption
from stylecart.providers.base_provider import BaseProvider

_IMG = "https://images.unsplash.com/photo-{}?w=500"


def _variant(
    vid: int, title: str, price: float, **options: str,
) -> ProductVariant:
    return ProductVariant(
        id=f"static-variant:{vid}",
        title=title,
        price=price,
        selected_options=[
            SelectedOption(name=name, value=value)
            for name, value in options.items()
        ],
    )


def demo_catalog() -> list[Product]:
    """Build a fresh copy of the demo product list."""
    return [
        Product(
            id="static:1",
            title="Premium Cotton T-Shirt",
            description=(
                "Comfortable, breathable cotton t-shirt perfect for "
                "everyday wear. Available in multiple colors and sizes."
            ),
            price=29.99,
            compare_at_price=39.99,
            images=[
                _IMG.format("1521572163474-6864f9cf17ab"),
                _IMG.format("1503341504253-dff4815485f1"),
            ],
            category="Clothing",
            tags=["cotton", "casual", "comfortable", "t-shirt", "shirt", "black"],
            variants=[
                _variant(1, "Small / Black", 29.99, Size="S", Color="Black"),
                _variant(2, "Medium / Black", 29.99, Size="M", Color="Black"),
            ],
        ),
        Product(
            id="static:11",
            title='14" Lightweight Laptop',
            description=(
                "Portable notebook with 8GB RAM, 256GB SSD, ideal for "
                "students and work."
            ),
            price=49999.0,
            images=[_IMG.format("1517336714731-489689fd1ca8")],
            category="Electronics",
            tags=["laptop", "notebook", "computer", "portable"],
            variants=[_variant(12, "8GB/256GB", 49999.0)],
        ),
        Product(
            id="static:12",
            title='Gaming Laptop 15"',
            description=(
                "High-performance gaming laptop with dedicated GPU and "
                "fast refresh display."
            ),
            price=89999.0,
            images=[_IMG.format("1511707171634-5f897ff02aa9")],
            category="Electronics",
            tags=["laptop", "gaming", "computer"],
            variants=[_variant(13, "16GB/512GB", 89999.0)],
        ),
        Product(
            id="static:2",
            title="Wireless Bluetooth Headphones",
            description=(
                "High-quality wireless headphones with noise cancellation "
                "and long battery life."
            ),
            price=89.99,
            images=[
                _IMG.format("1505740420928-5e560c06d30e"),
                _IMG.format("1484704849700-f032a568e944"),
            ],
            category="Electronics",
            tags=["wireless", "bluetooth", "noise-cancelling", "headphones", "audio"],
            variants=[_variant(3, "Black", 89.99, Color="Black")],
        ),
        Product(
            id="static:3",
            title="Leather Crossbody Bag",
            description=(
                "Stylish and practical leather crossbody bag with multiple "
                "compartments."
            ),
            price=59.99,
            compare_at_price=79.99,
            images=[
                _IMG.format("1548036328-c9fa89d128fa"),
                _IMG.format("1591561954557-26941169b49e"),
            ],
            category="Accessories",
            tags=["leather", "crossbody", "stylish", "bag", "purse", "brown"],
            variants=[_variant(4, "Brown", 59.99, Color="Brown")],
        ),
        Product(
            id="static:4",
            title="Smart Fitness Watch",
            description=(
                "Track your fitness goals with this advanced smartwatch "
                "featuring heart rate monitoring and GPS."
            ),
            price=199.99,
            images=[
                _IMG.format("1523275335684-37898b6baf30"),
                _IMG.format("1579586337278-3befd40fd17a"),
            ],
            category="Electronics",
            tags=["fitness", "smartwatch", "health", "watch", "tracker"],
            variants=[
                _variant(5, "Black / 42mm", 199.99, Color="Black", Size="42mm"),
            ],
        ),
        Product(
            id="static:5",
            title="Organic Cotton Hoodie",
            description=(
                "Warm and cozy organic cotton hoodie perfect for cooler "
                "weather."
            ),
            price=49.99,
            images=[
                _IMG.format("1556821840-3a63f95609a7"),
                _IMG.format("1576871337622-98d48d1cf531"),
            ],
            category="Clothing",
            tags=["organic", "cotton", "hoodie", "warm", "sweatshirt", "gray"],
            variants=[
                _variant(6, "Medium / Gray", 49.99, Size="M", Color="Gray"),
            ],
        ),
        Product(
            id="static:6",
            title="Denim Jeans",
            description="Classic blue denim jeans with perfect fit and durability.",
            price=79.99,
            images=[
                _IMG.format("1542272604-787c3835535d"),
                _IMG.format("1541099649105-f69ad21f3246"),
            ],
            category="Clothing",
            tags=["denim", "jeans", "blue", "casual", "pants"],
            variants=[_variant(7, "32 / Blue", 79.99, Size="32", Color="Blue")],
        ),
        Product(
            id="static:7",
            title="Laptop Backpack",
            description=(
                "Spacious laptop backpack with multiple compartments and "
                "comfortable straps."
            ),
            price=69.99,
            images=[
                _IMG.format("1553062407-98eeb64c6a62"),
                _IMG.format("1547949003-9792a18c2601"),
            ],
            category="Accessories",
            tags=["backpack", "laptop", "bag", "school", "work", "black"],
            variants=[_variant(8, "Black", 69.99, Color="Black")],
        ),
        Product(
            id="static:8",
            title="Wireless Mouse",
            description=(
                "Ergonomic wireless mouse with precision tracking and long "
                "battery life."
            ),
            price=34.99,
            images=[
                _IMG.format("1527864550417-7fd91fc51a46"),
                _IMG.format("1563297007-0686b7003af7"),
            ],
            category="Electronics",
            tags=["wireless", "mouse", "computer", "ergonomic", "gaming"],
            variants=[_variant(9, "Black", 34.99, Color="Black")],
        ),
        Product(
            id="static:9",
            title="Sneakers",
            description=(
                "Comfortable and stylish sneakers perfect for everyday wear "
                "and light exercise."
            ),
            price=89.99,
            images=[
                _IMG.format("1549298916-b41d114d2c36"),
                _IMG.format("1608231387042-66d1773070a5"),
            ],
            category="Footwear",
            tags=["sneakers", "shoes", "comfortable", "casual", "athletic", "white"],
            variants=[
                _variant(10, "US 9 / White", 89.99, Size="US 9", Color="White"),
            ],
        ),
        Product(
            id="static:10",
            title="Sunglasses",
            description=(
                "Trendy sunglasses with UV protection and modern frame "
                "design."
            ),
            price=129.99,
            images=[
                _IMG.format("1511499767150-a48a237f0083"),
                _IMG.format("1572635196237-14b3f281503f"),
            ],
            category="Accessories",
            tags=["sunglasses", "eyewear", "fashion", "uv-protection", "trendy"],
            variants=[_variant(11, "Black Frame", 129.99, Frame="Black")],
        ),
    ]


class StaticProvider(BaseProvider):
    """Hard-coded demo catalog for offline use.

    Registered like any other provider and enabled with
    ``STATIC_CATALOG_ENABLED``.  With no query engine behind it, every
    filter is evaluated in memory.
    """

    def __init__(
        self,
        products: list[Product] | None = None,
        enabled: bool | None = None,
    ) -> None:
        super().__init__("static")
        self._products = products if products is not None else demo_catalog()
        self._enabled = (
            enabled
            if enabled is not None
            else self.settings.STATIC_CATALOG_ENABLED
        )

    def enabled(self) -> bool:
        """Enabled by ``STATIC_CATALOG_ENABLED`` or the constructor flag."""
        return self._enabled

    def build_query(self, filters: ParsedFilters) -> ParsedFilters:
        """The in-memory catalog consumes the filters as they are."""
        return filters

    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        query = self.build_query(filters)
        # Copies: the caller tags results, the stored catalog must not change
        return [
            dataclasses.replace(p, tags=list(p.tags))
            for p in self._products
            if ProductFilter.matches_all(p, query)
        ][:limit]

    def get_product(self, product_id: str) -> Product | None:
        """Look up a demo product by id."""
        for product in self._products:
            if product.id == product_id:
                return product
        return None

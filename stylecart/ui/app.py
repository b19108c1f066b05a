# stylecart/ui/app.py

"""Terminal UI for stylecart catalog search and outfit building."""

import logging
from typing import cast

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from stylecart.config.settings import Settings
from stylecart.filters.filter_parser import FilterParser
from stylecart.models.filters import ParsedFilters
from stylecart.models.outfit import OutfitSuggestion
from stylecart.models.product import Product
from stylecart.providers.base_provider import BaseProvider
from stylecart.services.catalog_aggregator import (
    CatalogAggregator,
    build_providers,
)
from stylecart.services.outfit_composer import OutfitComposer
from stylecart.services.pricing_advisor import shipping_nudge

logger = logging.getLogger("stylecart.ui")


class StyleCartApp(App[object]):
    """Terminal UI for stylecart catalog search and outfit building."""

    CSS = """
    #search_bar { height: auto; }
    #search_input { width: 1fr; }
    #provider_toggles { height: auto; }
    #status { height: 1; margin: 0 1; }
    #results_table { height: 2fr; }
    #outfits_table { height: 1fr; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("o", "outfits", "Outfits"),
        Binding("p", "sort_price", "Price Sort"),
        Binding("a", "add_to_cart", "Add to Cart"),
    ]

    def __init__(
        self, providers: list[BaseProvider] | None = None,
    ) -> None:
        super().__init__()
        self.settings = Settings()
        self.providers: list[BaseProvider] = (
            providers if providers is not None else build_providers()
        )
        self.products: list[Product] = []
        self.outfits: list[OutfitSuggestion] = []
        self.filters: ParsedFilters = ParsedFilters()
        self.cart_total: float = 0.0

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        toggles = [
            Checkbox(
                p.provider_id,
                value=p.enabled(),
                disabled=not p.enabled(),
                id=f"check_{p.provider_id}",
            )
            for p in self.providers
        ]

        yield Header()
        yield Container(
            Horizontal(
                Input(
                    placeholder="e.g. black oversized tee under 800",
                    id="search_input",
                ),
                Button("Search", variant="primary", id="search_btn"),
                Button("Outfits", id="outfits_btn"),
                id="search_bar",
            ),
            Horizontal(*toggles, id="provider_toggles"),
            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            cast(
                DataTable[str | Text],
                DataTable(id="outfits_table", cursor_type="row"),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table columns on startup."""
        results = self._table("#results_table")
        results.add_columns("Title", "Price", "Category", "Vendor")
        outfits = self._table("#outfits_table")
        outfits.add_columns("Top", "Bottom", "Footwear", "Total")

    def _table(self, selector: str) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one(selector, DataTable),
        )

    def _status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)

    def selected_providers(self) -> list[BaseProvider]:
        """Providers whose toggle is checked."""
        return [
            p
            for p in self.providers
            if self.query_one(f"#check_{p.provider_id}", Checkbox).value
        ]

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "search_btn":
            await self.perform_search()
        elif event.button.id == "outfits_btn":
            self.action_outfits()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the search input."""
        if event.input.id == "search_input":
            await self.perform_search()

    async def perform_search(self) -> None:
        """Parse the request and run a merged search."""
        query = self.query_one("#search_input", Input).value.strip()
        if not query:
            self.notify("Please enter a search term", severity="warning")
            return

        providers = self.selected_providers()
        if not providers:
            self.notify("Select at least one provider!", severity="error")
            return

        self.filters = FilterParser.parse(query)
        self.products = []
        self.outfits = []
        self._table("#results_table").clear()
        self._table("#outfits_table").clear()
        self._status(f"🔍 Searching '{escape(query)}'...")

        aggregator = CatalogAggregator(providers)
        try:
            result = await aggregator.search_with_stats(self.filters)
        except Exception as exc:
            logger.error(
                "Search failed for '%s': %s", query, exc, exc_info=True
            )
            self.notify(
                "Something went wrong, please try again",
                severity="error",
            )
            self._status("❌ Search failed")
            return

        for error in result.errors:
            self.notify(f"Error: {escape(error)}", severity="error")

        self.products = result.products
        self.populate_results()

        if not self.products:
            self._status("❌ No products found, try broadening your search")
        else:
            self._status(
                f"✅ {len(self.products)} products "
                f"({result.deduplicated_count} duplicates merged)"
            )

    def populate_results(self) -> None:
        """Fill the results table with the merged products."""
        table = self._table("#results_table")
        table.clear()
        for p in self.products:
            price_style = "bold green" if p.is_discounted else ""
            table.add_row(
                p.title[:60],
                Text(
                    f"{self.settings.CURRENCY} {p.price:,.2f}",
                    style=price_style,
                ),
                p.category,
                p.vendor,
            )

    def populate_outfits(self) -> None:
        """Fill the outfits table with the current suggestions."""
        table = self._table("#outfits_table")
        table.clear()
        for o in self.outfits:
            table.add_row(
                o.top.title[:30],
                o.bottom.title[:30],
                o.footwear.title[:30],
                f"{self.settings.CURRENCY} {o.total_price:,.2f}",
            )

    def action_outfits(self) -> None:
        """Compose outfits from the current results."""
        if not self.products:
            self.notify("Search for products first", severity="warning")
            return
        self.outfits = OutfitComposer.compose(
            self.products, self.filters.max_price
        )
        self.populate_outfits()
        if not self.outfits:
            self.notify(
                "No complete outfit in these results", severity="warning"
            )

    def action_sort_price(self) -> None:
        """Sort products by price, ascending."""
        self.products.sort(key=lambda p: p.price)
        self.populate_results()

    def action_add_to_cart(self) -> None:
        """Add the highlighted product's price to a running cart total."""
        if not self.products:
            return
        row = self._table("#results_table").cursor_row
        if not 0 <= row < len(self.products):
            return
        product = self.products[row]
        self.cart_total += product.price
        nudge = shipping_nudge(self.cart_total)
        message = (
            f"Added '{escape(product.title[:30])}', cart total "
            f"{self.settings.CURRENCY} {self.cart_total:,.2f}"
        )
        self.notify(f"{message}. {nudge}" if nudge else message)

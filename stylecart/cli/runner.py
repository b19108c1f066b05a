# stylecart/cli/runner.py

"""Headless CLI runner, reusing the async catalog aggregator."""

import json
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stylecart.config.settings import Settings
from stylecart.filters.filter_parser import FilterParser
from stylecart.models.outfit import OutfitSuggestion
from stylecart.models.product import Product
from stylecart.services.catalog_aggregator import CatalogAggregator
from stylecart.services.outfit_composer import OutfitComposer
from stylecart.services.pricing_advisor import (
    amount_until_free_shipping,
    shipping_nudge,
)

logger = logging.getLogger("stylecart.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def format_price(amount: float) -> str:
    """Render an amount with the store currency for display."""
    return f"{Settings.CURRENCY} {amount:,.2f}"


def _products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "title": p.title,
            "price": p.price,
            "compare_at_price": p.compare_at_price,
            "category": p.category,
            "vendor": p.vendor,
            "available": p.available,
            "image": p.images[0] if p.images else "",
        }
        for p in products
    ]


def _outfits_to_dicts(
    outfits: list[OutfitSuggestion],
) -> list[dict[str, object]]:
    """Serialise outfit suggestions to plain dicts for JSON output."""
    return [
        {
            "label": o.label,
            "total_price": o.total_price,
            "items": _products_to_dicts(list(o.items)),
        }
        for o in outfits
    ]


def _print_products_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout, in merge order."""
    table = Table(
        title="Search Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Category")
    table.add_column("Vendor", style="magenta")

    for idx, p in enumerate(products, 1):
        price_str = format_price(p.price)
        if p.is_discounted and p.compare_at_price is not None:
            price_str += f" [dim strike]{p.compare_at_price:,.2f}[/]"
        table.add_row(
            str(idx),
            p.title[:60],
            price_str,
            p.category or "—",
            p.vendor or "—",
        )

    Console().print(table)


def _print_outfits_table(outfits: list[OutfitSuggestion]) -> None:
    """Render a Rich table of outfit suggestions to stdout."""
    table = Table(
        title="Outfit Suggestions",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Top", max_width=30)
    table.add_column("Bottom", max_width=30)
    table.add_column("Footwear", max_width=30)
    table.add_column("Total", justify="right", style="green")

    for idx, o in enumerate(outfits, 1):
        table.add_row(
            str(idx),
            o.top.title[:30],
            o.bottom.title[:30],
            o.footwear.title[:30],
            format_price(o.total_price),
        )

    Console().print(table)


def _emit_json(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


async def cli_search(
    query: str | None,
    limit: int,
    output_format: str,
    outfits: bool = False,
    budget: float | None = None,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=none).

    With no *query* the unfiltered top listing is shown.  With
    *outfits* the merged products are composed into bundles.
    """
    aggregator = CatalogAggregator()
    filters = FilterParser.parse(query or "")

    if query:
        _err.print(f"[bold]Searching:[/bold] {escape(query)}")
    else:
        _err.print("[bold]Listing top products[/bold]")
    _err.print(f"[dim]Filters: {escape(str(filters))}[/dim]")

    result = await aggregator.search_with_stats(filters, limit)

    for error_msg in result.errors:
        _err.print(f"[red]Error: {escape(error_msg)}[/red]")

    if not result.products:
        _err.print(
            "[yellow]No products found. "
            "Try broadening your search.[/yellow]"
        )
        return 1

    detail = (
        f" ({result.deduplicated_count} deduped)"
        if result.deduplicated_count
        else ""
    )
    _err.print(
        f"[green]✓ {len(result.products)} products"
        f" of {result.total_before_dedup}{detail}[/green]"
    )

    if not outfits:
        if output_format == "table":
            _print_products_table(result.products)
        else:
            _emit_json(_products_to_dicts(result.products))
        return 0

    # An explicit budget wins over a price ceiling parsed from the text
    max_budget = budget if budget is not None else filters.max_price
    suggestions = OutfitComposer.compose(result.products, max_budget)
    if not suggestions:
        _err.print(
            "[yellow]No complete outfit fits. "
            "Try a larger budget or a broader search.[/yellow]"
        )
        return 1

    if output_format == "table":
        _print_outfits_table(suggestions)
    else:
        _emit_json(_outfits_to_dicts(suggestions))
    return 0


def run_list_providers() -> int:
    """Print every registered provider with its enabled state."""
    aggregator = CatalogAggregator()
    table = Table(
        title="Catalog Providers",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Order", style="dim", width=6)
    table.add_column("Provider", style="bold")
    table.add_column("Role")
    table.add_column("Status", justify="center")

    for idx, provider in enumerate(aggregator.providers, 1):
        status = (
            "[green]enabled[/green]"
            if provider.enabled()
            else "[dim]disabled[/dim]"
        )
        table.add_row(
            str(idx),
            provider.provider_id,
            "primary" if provider.is_primary else "secondary",
            status,
        )

    Console().print(table)
    return 0


def run_cart_check(total: float) -> int:
    """Report the distance to free shipping for a cart total."""
    remaining = amount_until_free_shipping(total)
    nudge = shipping_nudge(total)
    if remaining == 0:
        _err.print("[green]✓ Free shipping unlocked[/green]")
    elif nudge:
        _err.print(f"[yellow]{nudge}[/yellow]")
    else:
        _err.print(
            f"[dim]{format_price(remaining)} until free shipping[/dim]"
        )
    _emit_json(
        {
            "total": total,
            "amount_until_free_shipping": remaining,
            "nudge": nudge,
        }
    )
    return 0

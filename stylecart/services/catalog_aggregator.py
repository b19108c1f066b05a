# stylecart/services/catalog_aggregator.py

"""Fans a parsed query out to every enabled catalog provider and merges."""

import asyncio
import importlib
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from stylecart.config.settings import Settings
from stylecart.filters.deduplicator import ProductDeduplicator
from stylecart.models.filters import ParsedFilters
from stylecart.models.product import Product
from stylecart.providers.base_provider import BaseProvider

logger = logging.getLogger("stylecart.aggregator")


@dataclass
class SearchResult:
    """Container for one merged search across all providers."""

    filters: ParsedFilters
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    total_before_dedup: int = 0
    deduplicated_count: int = 0
    provider_counts: dict[str, int] = field(
        default_factory=lambda: dict[str, int]()
    )
    skipped: list[str] = field(
        default_factory=lambda: list[str]()
    )
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )


def _load_provider_class(dotted_path: str) -> type[Any]:
    """Dynamically import a provider class from its dotted module path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[Any] = getattr(module, class_name)
    return cls


def build_providers(
    registry: list[dict[str, str]] | None = None,
) -> list[BaseProvider]:
    """Instantiate every registered provider.

    The entry's ``role`` decides which provider is primary.  A provider
    whose class cannot be loaded is logged and left out; it must not take
    the rest of the catalog down with it.
    """
    entries = (
        registry if registry is not None else Settings.AVAILABLE_PROVIDERS
    )
    providers: list[BaseProvider] = []
    for entry in entries:
        try:
            provider_cls = _load_provider_class(entry["provider"])
            provider = provider_cls()
            if "role" in entry:
                provider.is_primary = entry["role"] == "primary"
            providers.append(provider)
        except Exception as exc:
            logger.error(
                "Could not load provider '%s': %s",
                entry.get("id", "?"),
                exc,
                exc_info=True,
            )
    return providers


class CatalogAggregator:
    """Launch all, await all, merge in launch order.

    The primary provider is asked for the full limit and each secondary
    for ``ceil(limit / 2)``.  Outcomes are read back in launch order, so
    deduplication's first-wins rule always favours the primary and then
    the secondaries in registration order, whichever call finishes first.
    """

    def __init__(
        self, providers: list[BaseProvider] | None = None,
    ) -> None:
        self.settings = Settings()
        loaded = providers if providers is not None else build_providers()
        # Stable: primary first, secondaries keep registration order
        self.providers: list[BaseProvider] = sorted(
            loaded, key=lambda p: not p.is_primary
        )

    # ── Private helpers ──────────────────────────────────

    def _partition(
        self,
    ) -> tuple[list[BaseProvider], list[str]]:
        """Split providers into enabled ones and skipped ids."""
        active: list[BaseProvider] = []
        skipped: list[str] = []
        for provider in self.providers:
            if provider.enabled():
                active.append(provider)
            else:
                skipped.append(provider.provider_id)
        return active, skipped

    async def _fan_out(
        self,
        filters: ParsedFilters,
        limit: int,
        result: SearchResult,
    ) -> list[Product]:
        """Query every enabled provider concurrently.

        Returns the concatenation of their results in launch order.
        A provider that raises contributes nothing and is recorded in
        ``result.errors``.
        """
        active, result.skipped = self._partition()
        if result.skipped:
            logger.debug(
                "Skipping disabled providers: %s",
                ", ".join(result.skipped),
            )

        secondary_limit = math.ceil(limit / 2)
        tasks = [
            asyncio.to_thread(
                provider.search,
                filters,
                limit if provider.is_primary else secondary_limit,
            )
            for provider in active
        ]
        batches = await asyncio.gather(*tasks, return_exceptions=True)

        merged: list[Product] = []
        for provider, batch in zip(active, batches):
            if isinstance(batch, BaseException):
                result.errors.append(
                    f"{provider.provider_id}: {batch}"
                )
                result.provider_counts[provider.provider_id] = 0
                logger.error(
                    "Provider %s raised for %s: %s",
                    provider.provider_id,
                    filters,
                    batch,
                    exc_info=batch,
                )
                continue
            result.provider_counts[provider.provider_id] = len(batch)
            merged.extend(batch)
        return merged

    # ── Public API ───────────────────────────────────────

    async def search_with_stats(
        self,
        filters: ParsedFilters,
        limit: int | None = None,
    ) -> SearchResult:
        """Run a merged search and keep the bookkeeping."""
        limit = self.settings.DEFAULT_LIMIT if limit is None else limit
        result = SearchResult(filters=filters)
        if limit <= 0:
            return result

        merged = await self._fan_out(filters, limit, result)
        result.total_before_dedup = len(merged)
        unique, result.deduplicated_count = (
            ProductDeduplicator.deduplicate(merged)
        )
        result.products = unique[:limit]

        logger.info(
            "Merged %d products (%d raw, %d deduped) from %s",
            len(result.products),
            result.total_before_dedup,
            result.deduplicated_count,
            result.provider_counts,
        )
        return result

    async def search(
        self,
        filters: ParsedFilters,
        limit: int | None = None,
    ) -> list[Product]:
        """Return the merged, deduplicated, truncated product list."""
        result = await self.search_with_stats(filters, limit)
        return result.products

    async def top_products(
        self, limit: int | None = None,
    ) -> list[Product]:
        """Unfiltered listing across all providers."""
        return await self.search(ParsedFilters(), limit)

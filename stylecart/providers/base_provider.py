# stylecart/providers/base_provider.py

"""Abstract base class for all catalog providers."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from curl_cffi import requests as curl_requests

from stylecart.config.settings import Settings
from stylecart.models.filters import ParsedFilters
from stylecart.models.product import VENDOR_TAG_PREFIX, Product


class BaseProvider(ABC):
    """Abstract base class for all catalog providers.

    Subclasses implement :meth:`enabled`, :meth:`build_query` and
    :meth:`_search`.  The public :meth:`search` wraps them so that a
    provider never raises: a disabled provider, a transport error, a bad
    status or an unparsable payload all come back as an empty list.
    Each call is a single attempt bounded by ``REQUEST_TIMEOUT``.
    """

    is_primary: bool = False

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        self.logger = logging.getLogger(f"stylecart.{provider_id}")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    # ── HTTP helpers ─────────────────────────────────────

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> curl_requests.Response | None:
        """GET once; return the response on HTTP 200, else ``None``."""
        try:
            resp = self.session.get(
                url,
                headers={**self.settings.DEFAULT_HEADERS, **(headers or {})},
                params=params,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] GET %s failed: %s",
                self.provider_id,
                url,
                exc,
                exc_info=True,
            )
            return None
        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d from %s",
                self.provider_id,
                resp.status_code,
                url,
            )
            return None
        return resp

    def _fetch_post(
        self,
        url: str,
        headers: dict[str, str],
        payload: dict[str, Any],
    ) -> curl_requests.Response | None:
        """POST JSON once; return the response on HTTP 200, else ``None``."""
        try:
            resp = self.session.post(
                url,
                headers={**self.settings.DEFAULT_HEADERS, **headers},
                json=payload,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] POST %s failed: %s",
                self.provider_id,
                url,
                exc,
                exc_info=True,
            )
            return None
        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d from %s",
                self.provider_id,
                resp.status_code,
                url,
            )
            return None
        return resp

    @staticmethod
    def _decode(resp: curl_requests.Response) -> Any:
        """Decode a JSON response body."""
        return json.loads(resp.text)

    # ── Normalisation helpers ────────────────────────────

    @staticmethod
    def parse_price(value: Any) -> float:
        """Read a price given as a number, a string, or ``{"amount": ...}``.

        Anything unparsable becomes ``0.0``.
        """
        if isinstance(value, dict):
            value = value.get("amount")
        if isinstance(value, bool) or value is None:
            return 0.0
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return float(str(value).replace(",", "").strip())
        except ValueError:
            return 0.0

    def _tag_vendor(self, product: Product) -> Product:
        """Make sure the product carries this provider's vendor tag."""
        marker = f"{VENDOR_TAG_PREFIX}{self.provider_id}"
        if marker not in product.tags:
            product.tags.insert(0, marker)
        return product

    # ── Public API ───────────────────────────────────────

    def search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        """Search this provider; never raises.

        Returns at most *limit* products, each tagged ``vendor:<id>``.
        """
        if not self.enabled():
            self.logger.debug(
                "[%s] Provider disabled, skipping", self.provider_id
            )
            return []
        try:
            products = self._search(filters, limit)
        except Exception as exc:
            self.logger.error(
                "[%s] Search failed: %s",
                self.provider_id,
                exc,
                exc_info=True,
            )
            return []

        tagged = [self._tag_vendor(p) for p in products[:limit]]
        self.logger.info(
            "[%s] %d products for %s",
            self.provider_id,
            len(tagged),
            filters,
        )
        return tagged

    @abstractmethod
    def enabled(self) -> bool:
        """Return True when the provider is configured."""
        ...

    @abstractmethod
    def build_query(self, filters: ParsedFilters) -> Any:
        """Translate shared filters into this provider's query form."""
        ...

    @abstractmethod
    def _search(
        self, filters: ParsedFilters, limit: int,
    ) -> list[Product]:
        """Provider-specific search; may raise."""
        ...

# stylecart/filters/filter_parser.py

"""Free-text shopping request parser.

Turns an utterance such as ``"black oversized tee under 800"`` into a
:class:`ParsedFilters` value.  Parsing is a fixed, ordered table of
independent rules, each a pure function over the lower-cased input:

    1. price      → ``max_price``     (first match only)
    2. color      → ``color``         (first colour in list order)
    3. type       → ``product_type``  (first canonical in table order)
    4. style tags → ``tags``          (fixed check order, at most 4)
    5. residual   → ``text``          (only when no type matched)
    6. fallback   → ``text``          (raw input, if short enough)

Rules 5 and 6 read the partial result built by the earlier rules; all
others see only the text.
"""

import logging
import re
from collections.abc import Callable
from typing import Any

from stylecart.config.settings import Settings
from stylecart.models.filters import ParsedFilters

logger = logging.getLogger("stylecart.filter_parser")


# ── Vocabulary ───────────────────────────────────────────

# "under 800", "below ₹800", "less than 800", "< 800", or a bare "₹800"
_PRICE_RE = re.compile(
    r"(?:under|below|less than|<)\s*₹?\s*(\d{2,6})|₹\s*(\d{2,6})"
)

KNOWN_COLORS: list[str] = [
    "black",
    "white",
    "blue",
    "red",
    "green",
    "yellow",
    "brown",
    "gray",
    "grey",
    "purple",
    "pink",
    "beige",
    "navy",
]

# Insertion order is the match precedence
TYPE_SYNONYMS: dict[str, list[str]] = {
    "t-shirt": ["tshirt", "tee", "t-shirt", "shirt", "top"],
    "hoodie": ["hoodie", "sweatshirt"],
    "jeans": ["jeans", "denim", "trousers", "pants"],
    "shoes": ["shoes", "sneakers", "footwear", "trainers"],
    "bag": ["bag", "backpack", "purse", "handbag"],
    "laptop": ["laptop", "notebook", "ultrabook", "macbook", "gaming laptop"],
}

# tag → keywords that imply it, in output order
STYLE_TAGS: list[tuple[str, tuple[str, ...]]] = [
    ("oversized", ("oversized",)),
    ("slim", ("slim",)),
    ("casual", ("casual",)),
    ("formal", ("formal", "office")),
]

RESIDUAL_WORDS: list[str] = [
    "t-shirt",
    "shirt",
    "hoodie",
    "jeans",
    "shoes",
    "bag",
]


# ── Individual rules ─────────────────────────────────────


def extract_price(lowered: str) -> int | None:
    """Return the first price ceiling mentioned, as an integer."""
    match = _PRICE_RE.search(lowered)
    if not match:
        return None
    value = match.group(1) or match.group(2)
    return int(value) if value else None


def extract_color(lowered: str) -> str | None:
    """Return the first known colour (in list order) present in the text."""
    for color in KNOWN_COLORS:
        if color in lowered:
            return color
    return None


def extract_product_type(lowered: str) -> str | None:
    """Return the first canonical type with a synonym present."""
    for canonical, synonyms in TYPE_SYNONYMS.items():
        if any(syn in lowered for syn in synonyms):
            return canonical
    return None


def extract_style_tags(lowered: str) -> list[str]:
    """Return the style tags present, in fixed check order."""
    return [
        tag
        for tag, keywords in STYLE_TAGS
        if any(kw in lowered for kw in keywords)
    ]


def extract_residual_text(
    lowered: str, product_type: str | None,
) -> str | None:
    """Join literal category words when no canonical type was found."""
    if product_type:
        return None
    found = [word for word in RESIDUAL_WORDS if word in lowered]
    return " ".join(found) if found else None


def fallback_text(
    raw: str,
    text: str | None,
    product_type: str | None,
) -> str | None:
    """Use the raw trimmed input as text when nothing else matched.

    Inputs longer than ``FALLBACK_TEXT_MAX_LEN`` are dropped, not
    truncated, so provider queries stay short.
    """
    if text or product_type:
        return text
    minimal = raw.strip()
    if not minimal or len(minimal) > Settings.FALLBACK_TEXT_MAX_LEN:
        return None
    return minimal


# ── Rule table ───────────────────────────────────────────

# Each rule receives (lowered, raw, partial) and returns field updates.
FilterRule = Callable[[str, str, ParsedFilters], dict[str, Any]]

FILTER_RULES: list[tuple[str, FilterRule]] = [
    ("price", lambda low, _raw, _pf: {"max_price": extract_price(low)}),
    ("color", lambda low, _raw, _pf: {"color": extract_color(low)}),
    (
        "type",
        lambda low, _raw, _pf: {"product_type": extract_product_type(low)},
    ),
    ("tags", lambda low, _raw, _pf: {"tags": extract_style_tags(low)}),
    (
        "residual",
        lambda low, _raw, pf: {
            "text": extract_residual_text(low, pf.product_type)
        },
    ),
    (
        "fallback",
        lambda _low, raw, pf: {
            "text": fallback_text(raw, pf.text, pf.product_type)
        },
    ),
]


class FilterParser:
    """Parse free-text shopping requests into structured filters."""

    @staticmethod
    def parse(text: str) -> ParsedFilters:
        """Apply every rule in order to the lower-cased input."""
        lowered = text.lower()
        parsed = ParsedFilters()
        for _name, rule in FILTER_RULES:
            for attr, value in rule(lowered, text, parsed).items():
                setattr(parsed, attr, value)

        logger.debug("Parsed '%s' → %s", text, parsed)
        return parsed

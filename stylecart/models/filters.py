# stylecart/models/filters.py

"""Structured search filters derived from a single user utterance."""

from dataclasses import dataclass, field


@dataclass
class ParsedFilters:
    """Filters parsed from free text; built per query and then discarded."""

    text: str | None = None
    max_price: int | None = None
    color: str | None = None
    product_type: str | None = None
    tags: list[str] = field(default_factory=lambda: list[str]())

    @property
    def is_empty(self) -> bool:
        """True when no constraint at all was extracted."""
        return (
            not self.text
            and self.max_price is None
            and not self.color
            and not self.product_type
            and not self.tags
        )

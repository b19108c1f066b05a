# stylecart/services/pricing_advisor.py

"""Free-shipping threshold helpers."""

from stylecart.config.settings import Settings


def amount_until_free_shipping(total: float) -> float:
    """Distance to the free-shipping threshold, never negative."""
    return max(0.0, Settings.FREE_SHIPPING_THRESHOLD - total)


def is_close_to_threshold(
    total: float,
    window: float = Settings.SHIPPING_NUDGE_WINDOW,
) -> bool:
    """True when still short of the threshold, by at most *window*."""
    delta = amount_until_free_shipping(total)
    return 0 < delta <= window


def shipping_nudge(total: float) -> str | None:
    """A one-line nudge when the cart is close to free shipping."""
    if not is_close_to_threshold(total):
        return None
    delta = amount_until_free_shipping(total)
    return (
        f"Add {Settings.CURRENCY} {delta:,.2f} more for free shipping"
    )

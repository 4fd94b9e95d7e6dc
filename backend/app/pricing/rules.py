"""Per-item pricing: cost-plus-markup sell price and input coercion."""

import math
from typing import Any


def round2(value: float) -> float:
    """Round half up to two decimals (matches the storefront's Math.round based rounding)."""
    return math.floor(value * 100 + 0.5) / 100


def compute_sell_price(
    net_cost: float,
    base_markup_percent: float,
    extra_markup_flat: float,
    quantity: int = 1,
) -> float:
    """
    Sell price for one line item.

    The per-unit price is rounded before it is scaled by quantity; reversing
    that order gives different cents on multi-unit lines.
    """
    unit_price = net_cost * (1 + base_markup_percent / 100) + extra_markup_flat
    return round2(unit_price) * quantity


def coerce_amount(value: Any) -> float:
    """Cost and markup inputs: anything that is not a finite number becomes 0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_quantity(value: Any) -> int:
    """Quantity inputs: truncated to an integer, anything unusable becomes 1."""
    number = coerce_amount(value)
    quantity = int(number)
    return quantity if quantity >= 1 else 1

from __future__ import annotations

from typing import Iterable

from app.models.domain import ItineraryItem, TaxConfig
from app.pricing.rules import round2


def margin_sum(items: Iterable[ItineraryItem]) -> float:
    return sum(item.sell_price - item.net_cost * item.quantity for item in items)


def taxable_base(subtotal: float, items: Iterable[ItineraryItem], config: TaxConfig) -> float:
    if config.gst_on_total:
        return subtotal
    return margin_sum(items)


def compute_tax(subtotal: float, items: Iterable[ItineraryItem], config: TaxConfig) -> float:
    """
    GST (cgst + sgst + igst) applies to the subtotal or, with ``gst_on_total``
    off, to the aggregate margin only. TCS always applies to the full
    subtotal. A negative margin is taxed as-is.
    """
    base = taxable_base(subtotal, items, config)
    gst_amount = base * config.gst_percent / 100
    tcs_amount = subtotal * config.tcs_percent / 100
    return round2(gst_amount + tcs_amount)

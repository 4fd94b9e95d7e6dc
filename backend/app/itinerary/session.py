from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import uuid4

from app.core.config import settings
from app.itinerary.item_store import ItineraryItemStore
from app.itinerary.trip_store import TripMetadataStore, default_trip_details
from app.itinerary.wizard import WizardController
from app.models.domain import (
    Currency,
    DayMeta,
    ItineraryItem,
    PackageMarkup,
    PricingTotals,
    TaxConfig,
    TripDetails,
    WizardStep,
)
from app.pricing import currency as fx
from app.pricing.rules import coerce_amount

logger = logging.getLogger(__name__)


def default_tax_config() -> TaxConfig:
    return TaxConfig(
        cgst_percent=settings.default_cgst_percent,
        sgst_percent=settings.default_sgst_percent,
        igst_percent=settings.default_igst_percent,
        tcs_percent=settings.default_tcs_percent,
        gst_on_total=settings.default_gst_on_total,
    )


class ItinerarySession:
    """
    Everything one author is editing: trip details, line items, tax and
    currency choices, day covers and the package markup used at Review.

    All item changes go through the item store so prices stay derived.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        trip: Optional[TripDetails] = None,
        items: Optional[Iterable[ItineraryItem]] = None,
        tax_config: Optional[TaxConfig] = None,
    ) -> None:
        self.session_id = session_id or str(uuid4())
        self.created_at = datetime.now(timezone.utc)
        self.trip = TripMetadataStore(trip or default_trip_details(date_today()))
        self.items = ItineraryItemStore(items)
        self.wizard = WizardController(self.trip, self.items)
        self.tax_config = tax_config or default_tax_config()
        self.currency = Currency.INR
        self.package_markup = PackageMarkup()
        self.source_package_id: Optional[str] = None
        self._day_meta: Dict[int, DayMeta] = {}

    @property
    def step(self) -> WizardStep:
        return self.wizard.step

    # Trip

    def update_trip(self, **changes: Any) -> TripDetails:
        details = self.trip.update(**changes)
        orphaned = self.orphaned_items()
        if "duration" in changes and orphaned:
            logger.info(
                "Session %s: %d item(s) now fall after day %d",
                self.session_id,
                len(orphaned),
                details.duration,
            )
        return details

    def orphaned_items(self) -> List[ItineraryItem]:
        """Items whose day is past the current duration. They are kept, only flagged."""
        duration = self.trip.duration
        return [item for item in self.items if item.day > duration]

    # Items

    def add_item(self, item: ItineraryItem) -> ItineraryItem:
        return self.items.add_item(item)

    def update_item(self, item_id: str, **updates: Any) -> Optional[ItineraryItem]:
        return self.items.update_item(item_id, **updates)

    def remove_item(self, item_id: str) -> bool:
        return self.items.remove_item(item_id)

    def replace_all_items(self, new_items: Iterable[ItineraryItem]) -> None:
        self.items.replace_all_items(new_items)

    def reorder_items(self, day: int, ordered_ids: Sequence[str]) -> None:
        self.items.reorder_items(day, ordered_ids)

    def move_item(self, item_id: str, direction: str) -> bool:
        return self.items.move_item(item_id, direction)

    def get_items_for_day(self, day: int) -> List[ItineraryItem]:
        return self.items.get_items_for_day(day)

    # Day covers

    def get_day_meta(self, day: int) -> DayMeta:
        return dataclasses.replace(self._day_meta.get(day, DayMeta()))

    def update_day_meta(self, day: int, **changes: Any) -> DayMeta:
        meta = dataclasses.replace(self._day_meta.get(day, DayMeta()), **changes)
        self._day_meta[day] = meta
        return dataclasses.replace(meta)

    # Pricing settings

    def set_currency(self, currency: Currency | str) -> Currency:
        self.currency = Currency(currency)
        return self.currency

    def update_tax_config(self, **changes: Any) -> TaxConfig:
        for key in ("cgst_percent", "sgst_percent", "igst_percent", "tcs_percent"):
            if key in changes:
                changes[key] = coerce_amount(changes[key])
        if "gst_on_total" in changes:
            changes["gst_on_total"] = bool(changes["gst_on_total"])
        self.tax_config = dataclasses.replace(self.tax_config, **changes)
        return self.tax_config

    def set_package_markup(self, percent: Any = 0, flat: Any = 0) -> PackageMarkup:
        self.package_markup = PackageMarkup(
            percent=coerce_amount(percent), flat=coerce_amount(flat)
        )
        return self.package_markup

    # Aggregates, always computed from current items in base currency

    def totals(self) -> PricingTotals:
        subtotal = self.items.subtotal()
        tax_amount = self.items.tax_amount(self.tax_config)
        total_cost = self.items.total_cost()
        return PricingTotals(
            subtotal=subtotal,
            tax_amount=tax_amount,
            grand_total=subtotal + tax_amount,
            total_cost=total_cost,
            margin=subtotal - total_cost,
        )

    def display_totals(self, currency: Optional[Currency | str] = None) -> Dict[str, str]:
        code = Currency(currency) if currency else self.currency
        totals = self.totals()
        return {
            "subtotal": fx.format_currency(totals.subtotal, code),
            "tax_amount": fx.format_currency(totals.tax_amount, code),
            "grand_total": fx.format_currency(totals.grand_total, code),
        }

    def format_currency(self, amount_base: float) -> str:
        return fx.format_currency(amount_base, self.currency)


def date_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()

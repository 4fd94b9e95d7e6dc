from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from app.models.domain import ItineraryItem, TaxConfig
from app.pricing.tax import compute_tax

logger = logging.getLogger(__name__)

# Fields a caller may never write through update_item.
_PROTECTED_FIELDS = {"id", "sell_price"}
_UPDATABLE_FIELDS = {
    f.name for f in dataclasses.fields(ItineraryItem) if f.init
} - _PROTECTED_FIELDS


def day_sort_key(item: ItineraryItem) -> Tuple[int, str]:
    """
    Within-day order: explicit ``order`` first, then ``time``; missing values sort lowest.

    An item added after a manual reorder has no ``order`` and sorts as 0, so it
    lands among the reordered items by time rather than after them.
    """
    return (item.order or 0, item.time or "")


def sort_day_items(items: Iterable[ItineraryItem]) -> List[ItineraryItem]:
    return sorted(items, key=day_sort_key)


class ItineraryItemStore:
    """
    Mutable collection of line items for one trip.

    Items are immutable values; every mutation swaps in a rebuilt instance,
    which reprices it. Unknown ids are ignored on update, remove and move.
    """

    def __init__(self, items: Optional[Iterable[ItineraryItem]] = None) -> None:
        self._items: List[ItineraryItem] = []
        if items:
            self.replace_all_items(items)

    @property
    def items(self) -> Tuple[ItineraryItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    def get(self, item_id: str) -> Optional[ItineraryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _index_of(self, item_id: str) -> Optional[int]:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return idx
        return None

    def add_item(self, item: ItineraryItem) -> ItineraryItem:
        # Rebuilding reprices from the item's own inputs.
        priced = dataclasses.replace(item)
        self._items.append(priced)
        return priced

    def update_item(self, item_id: str, **updates: Any) -> Optional[ItineraryItem]:
        idx = self._index_of(item_id)
        if idx is None:
            logger.debug("update_item ignored unknown id %s", item_id)
            return None
        unknown = set(updates) - _UPDATABLE_FIELDS - _PROTECTED_FIELDS
        if unknown:
            raise TypeError(f"Unknown item fields: {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in updates.items() if k not in _PROTECTED_FIELDS}
        updated = dataclasses.replace(self._items[idx], **changes)
        self._items[idx] = updated
        return updated

    def remove_item(self, item_id: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) != before

    def replace_all_items(self, new_items: Iterable[ItineraryItem]) -> None:
        self._items = [dataclasses.replace(item) for item in new_items]

    def get_items_for_day(self, day: int) -> List[ItineraryItem]:
        return sort_day_items(item for item in self._items if item.day == day)

    def reorder_items(self, day: int, ordered_ids: Sequence[str]) -> None:
        """Assign ``order`` by position in ``ordered_ids``; ids not on ``day`` are skipped."""
        positions: Dict[str, int] = {}
        for item_id in ordered_ids:
            if item_id not in positions:
                positions[item_id] = len(positions)
        for idx, item in enumerate(self._items):
            if item.day == day and item.id in positions:
                self._items[idx] = dataclasses.replace(item, order=positions[item.id])

    def move_item(self, item_id: str, direction: str) -> bool:
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
        item = self.get(item_id)
        if item is None:
            return False
        day_items = self.get_items_for_day(item.day)
        position = next(i for i, candidate in enumerate(day_items) if candidate.id == item_id)
        target = position - 1 if direction == "up" else position + 1
        if target < 0 or target >= len(day_items):
            return False
        day_items[position], day_items[target] = day_items[target], day_items[position]
        self.reorder_items(item.day, [candidate.id for candidate in day_items])
        return True

    # Aggregates are recomputed on every read so they always reflect current items.

    def subtotal(self) -> float:
        return sum(item.sell_price for item in self._items)

    def total_cost(self) -> float:
        return sum(item.net_cost * item.quantity for item in self._items)

    def tax_amount(self, config: TaxConfig) -> float:
        return compute_tax(self.subtotal(), self._items, config)

    def grand_total(self, config: TaxConfig) -> float:
        return self.subtotal() + self.tax_amount(config)

    def items_by_category(self) -> Dict[str, List[ItineraryItem]]:
        groups: Dict[str, List[ItineraryItem]] = {}
        for item in self._items:
            groups.setdefault(item.type.value.capitalize(), []).append(item)
        return groups

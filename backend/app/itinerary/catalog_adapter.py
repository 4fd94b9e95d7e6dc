"""Turn master catalog records into itinerary items with default pricing."""

from __future__ import annotations

import dataclasses
from uuid import uuid4

from app.models.domain import (
    ITEM_TYPE_PROFILES,
    CatalogRecord,
    ItemType,
    ItineraryItem,
    MasterActivity,
    MasterHotel,
    MasterTransport,
    RecordStatus,
)

_ID_PREFIXES = {
    ItemType.hotel: "hotel",
    ItemType.activity: "act",
    ItemType.transport: "trans",
    ItemType.flight: "flight",
    ItemType.note: "note",
}


def new_item_id(item_type: ItemType) -> str:
    prefix = _ID_PREFIXES.get(item_type, item_type.value)
    return f"{prefix}-{uuid4().hex[:12]}"


def _default_markup(item_type: ItemType) -> float:
    return ITEM_TYPE_PROFILES[item_type].default_markup_percent


def _ensure_active(record: CatalogRecord) -> None:
    if record.status is not RecordStatus.active:
        raise ValueError(f"Catalog record {record.id} is not active")


def _snapshot(record: CatalogRecord) -> CatalogRecord:
    # Copy taken at selection time; later catalog edits do not flow into the item.
    return dataclasses.replace(record)


def item_from_hotel(hotel: MasterHotel, day: int) -> ItineraryItem:
    _ensure_active(hotel)
    return ItineraryItem(
        id=new_item_id(ItemType.hotel),
        type=ItemType.hotel,
        day=day,
        title=hotel.name,
        description=f"{hotel.rating:g}★ Hotel",
        time="14:00",
        net_cost=hotel.price_per_night,
        base_markup_percent=_default_markup(ItemType.hotel),
        extra_markup_flat=0,
        quantity=1,
        master_id=hotel.id,
        master_data=_snapshot(hotel),
    )


def item_from_activity(activity: MasterActivity, day: int) -> ItineraryItem:
    _ensure_active(activity)
    return ItineraryItem(
        id=new_item_id(ItemType.activity),
        type=ItemType.activity,
        day=day,
        title=activity.name,
        description=activity.category,
        time="10:00",
        duration=activity.duration,
        net_cost=activity.cost,
        base_markup_percent=_default_markup(ItemType.activity),
        extra_markup_flat=0,
        quantity=1,
        master_id=activity.id,
        master_data=_snapshot(activity),
    )


def item_from_transport(transport: MasterTransport, day: int) -> ItineraryItem:
    _ensure_active(transport)
    return ItineraryItem(
        id=new_item_id(ItemType.transport),
        type=ItemType.transport,
        day=day,
        title=transport.name,
        description=f"{transport.type} (Capacity: {transport.capacity})",
        time="09:00",
        net_cost=transport.base_rate,
        base_markup_percent=_default_markup(ItemType.transport),
        extra_markup_flat=0,
        quantity=1,
        master_id=transport.id,
        master_data=_snapshot(transport),
    )


def item_from_record(record: CatalogRecord, day: int) -> ItineraryItem:
    if isinstance(record, MasterHotel):
        return item_from_hotel(record, day)
    if isinstance(record, MasterActivity):
        return item_from_activity(record, day)
    if isinstance(record, MasterTransport):
        return item_from_transport(record, day)
    raise TypeError(f"Unsupported catalog record: {type(record).__name__}")


def flight_placeholder(day: int) -> ItineraryItem:
    return ItineraryItem(
        id=new_item_id(ItemType.flight),
        type=ItemType.flight,
        day=day,
        title="New Flight",
        description="Flight Details",
        time="10:00",
        duration="2h",
        net_cost=0,
        base_markup_percent=_default_markup(ItemType.flight),
    )


def note_placeholder(day: int, text: str = "Add details here...") -> ItineraryItem:
    return ItineraryItem(
        id=new_item_id(ItemType.note),
        type=ItemType.note,
        day=day,
        title="Note",
        description=text,
        net_cost=0,
        base_markup_percent=_default_markup(ItemType.note),
    )


def placeholder_item(item_type: ItemType, day: int) -> ItineraryItem:
    """Blank item for types without a catalog source (flight, note, visa, guide, other)."""
    item_type = ItemType(item_type)
    if item_type is ItemType.flight:
        return flight_placeholder(day)
    if item_type is ItemType.note:
        return note_placeholder(day)
    if item_type in (ItemType.hotel, ItemType.activity, ItemType.transport):
        raise ValueError(f"{item_type.value} items are created from catalog records")
    return ItineraryItem(
        id=new_item_id(item_type),
        type=item_type,
        day=day,
        title=f"New {ITEM_TYPE_PROFILES[item_type].label}",
        net_cost=0,
        base_markup_percent=_default_markup(item_type),
    )

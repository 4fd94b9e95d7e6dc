import dataclasses

import pytest

from app.itinerary.catalog_adapter import (
    item_from_activity,
    item_from_hotel,
    item_from_record,
    item_from_transport,
    placeholder_item,
)
from app.models.domain import ItemType, RecordStatus
from app.storage.catalog import MasterCatalog


@pytest.fixture
def catalog() -> MasterCatalog:
    return MasterCatalog.seeded()


def test_hotel_defaults(catalog):
    item = item_from_hotel(catalog.hotels["htl-goa-01"], day=1)
    assert item.id.startswith("hotel-")
    assert item.title == "Seaside Palms Resort"
    assert item.description == "4.5★ Hotel"
    assert item.time == "14:00"
    assert item.net_cost == 6500.0
    assert item.base_markup_percent == 15.0
    assert item.sell_price == 7475.0
    assert item.master_id == "htl-goa-01"


def test_activity_and_transport_defaults(catalog):
    activity = item_from_activity(catalog.activities["act-goa-01"], day=2)
    assert activity.description == "Adventure"
    assert activity.time == "10:00"
    assert activity.duration == "6 Hours"
    assert activity.net_cost == 2800.0

    transport = item_from_transport(catalog.transports["trn-sedan-01"], day=1)
    assert transport.description == "Sedan (Capacity: 4)"
    assert transport.time == "09:00"
    assert transport.net_cost == 1800.0


def test_snapshot_is_not_affected_by_catalog_changes(catalog):
    item = item_from_record(catalog.find("act-mnl-01"), day=1)
    catalog.activities["act-mnl-01"] = dataclasses.replace(
        catalog.activities["act-mnl-01"], cost=9999.0
    )
    assert item.master_data.cost == 3500.0
    assert item.net_cost == 3500.0


def test_inactive_records_are_rejected(catalog):
    hotel = catalog.hotels["htl-jpr-01"]
    assert hotel.status is RecordStatus.inactive
    with pytest.raises(ValueError):
        item_from_hotel(hotel, day=1)


def test_catalog_lists_active_records_only(catalog):
    names = [h.name for h in catalog.active_hotels()]
    assert "Pink City Haveli" not in names
    assert [a.id for a in catalog.active_activities(search="PARA")] == ["act-mnl-01"]


def test_placeholders():
    flight = placeholder_item(ItemType.flight, day=1)
    assert flight.title == "New Flight"
    assert flight.base_markup_percent == 10.0
    note = placeholder_item("note", day=2)
    assert note.base_markup_percent == 0.0
    assert note.sell_price == 0.0
    assert placeholder_item(ItemType.visa, day=1).title == "New Visa"
    with pytest.raises(ValueError):
        placeholder_item(ItemType.hotel, day=1)

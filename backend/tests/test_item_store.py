import pytest

from app.itinerary.item_store import ItineraryItemStore
from app.models.domain import ItemType, ItineraryItem, TaxConfig
from app.pricing.rules import compute_sell_price


def _item(item_id: str, day: int = 1, **overrides) -> ItineraryItem:
    data = dict(
        id=item_id,
        type=ItemType.activity,
        day=day,
        title=f"Activity {item_id}",
        net_cost=10000,
        base_markup_percent=15,
    )
    data.update(overrides)
    return ItineraryItem(**data)


def _assert_prices_derived(store: ItineraryItemStore) -> None:
    for item in store:
        assert item.sell_price == compute_sell_price(
            item.net_cost, item.base_markup_percent, item.extra_markup_flat, item.quantity
        )


def test_add_item_computes_sell_price():
    store = ItineraryItemStore()
    item = store.add_item(_item("a"))
    assert item.sell_price == 11500.0
    assert len(store) == 1


def test_sell_price_cannot_be_passed_in():
    with pytest.raises(TypeError):
        ItineraryItem(id="x", type="hotel", day=1, title="Hotel", sell_price=1)


def test_duplicates_are_allowed():
    store = ItineraryItemStore()
    store.add_item(_item("a", title="Snorkelling"))
    store.add_item(_item("b", title="Snorkelling"))
    assert [i.title for i in store.get_items_for_day(1)] == ["Snorkelling", "Snorkelling"]


def test_update_reprices_and_ignores_sell_price():
    store = ItineraryItemStore([_item("a"), _item("b")])
    updated = store.update_item("a", net_cost=2000, quantity=2, sell_price=1.0)
    assert updated.sell_price == 4600.0
    store.update_item("b", title="Renamed")
    store.update_item("a", extra_markup_flat=100)
    _assert_prices_derived(store)


def test_update_coerces_junk_numbers():
    store = ItineraryItemStore([_item("a")])
    updated = store.update_item("a", net_cost="abc", quantity="0")
    assert updated.net_cost == 0.0
    assert updated.quantity == 1
    assert updated.sell_price == 0.0


def test_update_unknown_field_raises():
    store = ItineraryItemStore([_item("a")])
    with pytest.raises(TypeError):
        store.update_item("a", colour="blue")


def test_update_and_remove_unknown_id_are_noops():
    store = ItineraryItemStore([_item("a"), _item("b")])
    config = TaxConfig(cgst_percent=9, sgst_percent=9)
    before = (store.items, store.subtotal(), store.tax_amount(config))
    assert store.update_item("missing", net_cost=5) is None
    assert store.remove_item("missing") is False
    assert (store.items, store.subtotal(), store.tax_amount(config)) == before


def test_remove_item():
    store = ItineraryItemStore([_item("a"), _item("b")])
    assert store.remove_item("a") is True
    assert [i.id for i in store] == ["b"]


def test_replace_all_reprices_every_item():
    store = ItineraryItemStore([_item("old")])
    store.replace_all_items([_item("n1", net_cost=100), _item("n2", day=2, net_cost=200)])
    assert [i.id for i in store] == ["n1", "n2"]
    assert store.get("n1").sell_price == 115.0
    _assert_prices_derived(store)


def test_day_ordering_uses_order_then_time():
    store = ItineraryItemStore(
        [
            _item("late", time="18:00"),
            _item("early", time="08:00"),
            _item("pinned", time="07:00", order=5),
            _item("untimed"),
            _item("other-day", day=2, time="06:00"),
        ]
    )
    assert [i.id for i in store.get_items_for_day(1)] == ["untimed", "early", "late", "pinned"]


def test_move_item_swaps_neighbours():
    store = ItineraryItemStore(
        [_item("a", time="09:00"), _item("b", time="10:00"), _item("c", time="11:00")]
    )
    assert store.move_item("b", "up") is True
    assert [i.id for i in store.get_items_for_day(1)] == ["b", "a", "c"]
    assert store.move_item("b", "down") is True
    assert [i.id for i in store.get_items_for_day(1)] == ["a", "b", "c"]


def test_move_at_boundaries_is_idempotent():
    store = ItineraryItemStore(
        [_item("a", time="09:00"), _item("b", time="10:00", net_cost=500), _item("z", day=2)]
    )
    before = store.items
    for _ in range(3):
        assert store.move_item("a", "up") is False
        assert store.move_item("b", "down") is False
    assert store.items == before


def test_move_does_not_touch_day_or_pricing():
    store = ItineraryItemStore([_item("a", time="09:00"), _item("b", time="10:00", net_cost=700)])
    store.move_item("b", "up")
    moved = store.get("b")
    assert moved.day == 1
    assert moved.net_cost == 700
    assert moved.sell_price == 805.0


def test_move_rejects_bad_direction():
    store = ItineraryItemStore([_item("a")])
    with pytest.raises(ValueError):
        store.move_item("a", "sideways")


def test_reorder_only_affects_given_day():
    store = ItineraryItemStore([_item("a"), _item("b"), _item("c", day=2)])
    store.reorder_items(1, ["b", "a", "c"])
    assert [i.id for i in store.get_items_for_day(1)] == ["b", "a"]
    assert store.get("c").order is None


def test_aggregates_match_example():
    store = ItineraryItemStore([_item("a"), _item("b")])
    on_total = TaxConfig(cgst_percent=9, sgst_percent=9, gst_on_total=True)
    on_margin = TaxConfig(cgst_percent=9, sgst_percent=9, gst_on_total=False)
    assert store.subtotal() == 23000.0
    assert store.tax_amount(on_total) == 4140.0
    assert store.grand_total(on_total) == 27140.0
    assert store.tax_amount(on_margin) == 540.0
    assert store.grand_total(on_margin) == 23540.0
    assert store.total_cost() == 20000.0


def test_items_by_category():
    store = ItineraryItemStore([_item("a"), _item("h", type=ItemType.hotel)])
    groups = store.items_by_category()
    assert sorted(groups) == ["Activity", "Hotel"]


def test_item_added_after_reorder_sorts_by_time_among_ordered():
    store = ItineraryItemStore(
        [_item("a", time="09:00"), _item("b", time="10:00"), _item("c", time="11:00")]
    )
    store.move_item("c", "up")
    store.add_item(_item("d", time="23:00"))
    # unordered items count as order 0, so "d" is not appended at the end
    assert [i.id for i in store.get_items_for_day(1)] == ["a", "d", "c", "b"]

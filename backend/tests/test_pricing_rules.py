import pytest

from app.pricing.rules import coerce_amount, coerce_quantity, compute_sell_price, round2


def test_sell_price_applies_percent_then_flat():
    assert compute_sell_price(10000, 15, 0, 1) == 11500.0
    assert compute_sell_price(2000, 10, 250, 1) == 2450.0


def test_sell_price_scales_rounded_unit_price_by_quantity():
    # 0.333 rounds to 0.33 per unit before scaling; rounding after would give 1.00
    assert compute_sell_price(0.333, 0, 0, 3) == pytest.approx(0.99)
    assert compute_sell_price(1000, 12.5, 0, 3) == 3375.0


def test_sell_price_is_deterministic():
    args = (1234.56, 17.5, 99.99, 4)
    assert compute_sell_price(*args) == compute_sell_price(*args)


def test_negative_inputs_are_not_rejected():
    assert compute_sell_price(-100, 10, 0) == -110.0
    assert compute_sell_price(1000, -10, 0) == 900.0


def test_round2_rounds_half_up():
    assert round2(0.125) == 0.13
    assert round2(2.5) == 2.5
    assert round2(-0.125) == -0.12


@pytest.mark.parametrize(
    "raw, expected",
    [("12.5", 12.5), ("abc", 0.0), (None, 0.0), ("", 0.0), (float("nan"), 0.0), (7, 7.0)],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3), ("2.7", 2), ("x", 1), (0, 1), (-4, 1), (None, 1), (5, 5)],
)
def test_coerce_quantity(raw, expected):
    assert coerce_quantity(raw) == expected

import pytest

from app.models.domain import Currency
from app.pricing.currency import (
    CURRENCY_RATES,
    format_amount,
    format_currency,
    from_display,
    parse_display,
    to_display,
)


def test_base_currency_is_identity():
    assert to_display(27140, Currency.INR) == 27140.0


def test_to_display_converts_and_rounds():
    assert to_display(10000, Currency.USD) == 120.0
    assert to_display(10000, "eur") == 110.0


def test_format_uses_symbol_and_grouping():
    assert format_currency(1_000_000, Currency.USD) == "$12,000"
    assert format_currency(27140, Currency.INR) == "₹27,140"
    assert format_amount(1234.5, Currency.EUR) == "1,234.5"


def test_inr_uses_lakh_grouping():
    assert format_currency(1234567.5, Currency.INR) == "₹12,34,567.5"
    assert format_amount(100, Currency.INR) == "100"


def test_negative_amounts_keep_sign():
    assert format_currency(-1500, Currency.INR) == "₹-1,500"
    assert parse_display("₹-1,500", Currency.INR) == -1500.0


@pytest.mark.parametrize("currency", list(Currency))
@pytest.mark.parametrize("amount", [0, 1, 99.99, 11500, 27140, 123456.78])
def test_format_then_parse_recovers_amount(currency, amount):
    shown = format_currency(amount, currency)
    recovered = from_display(parse_display(shown, currency), currency)
    # one display-currency cent, expressed in base, plus base rounding
    tolerance = 0.01 / CURRENCY_RATES[currency] + 0.01
    assert abs(recovered - amount) <= tolerance

"""
Display-currency conversion.

Every stored amount is in the base currency (INR). Totals are computed once
in base and converted here only for display; converted values are never fed
back into pricing.
"""

from __future__ import annotations

import re
from typing import Dict, Union

from app.models.domain import Currency
from app.pricing.rules import round2

BASE_CURRENCY = Currency.INR

# Units of the display currency per one unit of base currency
CURRENCY_RATES: Dict[Currency, float] = {
    Currency.INR: 1.0,
    Currency.USD: 0.012,
    Currency.AED: 0.044,
    Currency.EUR: 0.011,
    Currency.GBP: 0.0095,
}

CURRENCY_SYMBOLS: Dict[Currency, str] = {
    Currency.INR: "₹",
    Currency.USD: "$",
    Currency.AED: "د.إ",
    Currency.EUR: "€",
    Currency.GBP: "£",
}

CurrencyLike = Union[Currency, str]


def _currency(value: CurrencyLike) -> Currency:
    return value if isinstance(value, Currency) else Currency(str(value).upper())


def to_display(amount_base: float, currency: CurrencyLike) -> float:
    return round2(amount_base * CURRENCY_RATES[_currency(currency)])


def from_display(amount_display: float, currency: CurrencyLike) -> float:
    return round2(amount_display / CURRENCY_RATES[_currency(currency)])


def _group_digits(integer_part: str, indian: bool) -> str:
    if not indian or len(integer_part) <= 3:
        return f"{int(integer_part):,}"
    # en-IN grouping: last three digits, then pairs (12,34,567)
    head, tail = integer_part[:-3], integer_part[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount_display: float, currency: CurrencyLike) -> str:
    """Group thousands and keep at most two fraction digits, dropping trailing zeros."""
    code = _currency(currency)
    negative = amount_display < 0
    integer_part, fraction = f"{abs(amount_display):.2f}".split(".")
    fraction = fraction.rstrip("0")
    grouped = _group_digits(integer_part, indian=code is Currency.INR)
    text = f"{grouped}.{fraction}" if fraction else grouped
    return f"-{text}" if negative else text


def format_currency(amount_base: float, currency: CurrencyLike) -> str:
    code = _currency(currency)
    return f"{CURRENCY_SYMBOLS[code]}{format_amount(to_display(amount_base, code), code)}"


_NUMBER_CHARS = re.compile(r"[^0-9.\-]")


def parse_display(text: str, currency: CurrencyLike) -> float:
    """Inverse of :func:`format_currency` for the display value (still in display units)."""
    code = _currency(currency)
    stripped = text.strip()
    symbol = CURRENCY_SYMBOLS[code]
    negative = stripped.startswith("-")
    stripped = stripped.lstrip("-")
    if stripped.startswith(symbol):
        stripped = stripped[len(symbol):]
    value = float(_NUMBER_CHARS.sub("", stripped) or 0)
    return -value if negative else value

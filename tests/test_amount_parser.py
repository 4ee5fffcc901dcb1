"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerlens.utils.amount_parser import parse_amount


def test_parse_plain_amount():
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_with_currency_and_separators():
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount("25_000_000₫") == Decimal("25000000")
    assert parse_amount(" €10 ") == Decimal("10")


@pytest.mark.parametrize("value", ["", "   ", "abc", "NaN", "Infinity"])
def test_rejects_unparseable(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_rejects_negative():
    with pytest.raises(ValueError, match="negative"):
        parse_amount("-5")

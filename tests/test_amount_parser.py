"""Tests for amount parsing utilities."""

from decimal import Decimal

import pytest

from doublebook.utils.amount_parser import parse_amount, parse_posting


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("€ 1,234.56", Decimal("1234.56")),
        ("1,000", Decimal("1000")),
        (" 0.01 ", Decimal("0.01")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12.3.4", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


@pytest.mark.parametrize("text", ["0", "-5", "0.00"])
def test_parse_amount_must_be_positive(text):
    with pytest.raises(ValueError, match="must be positive"):
        parse_amount(text)


def test_parse_posting():
    assert parse_posting("1000=$1,500.25") == ("1000", Decimal("1500.25"))
    assert parse_posting(" 4000 = 20 ") == ("4000", Decimal("20"))


@pytest.mark.parametrize("text", ["1000", "=100", "1000:100"])
def test_parse_posting_malformed(text):
    with pytest.raises(ValueError, match="CODE=AMOUNT"):
        parse_posting(text)


@pytest.mark.parametrize("text", ["0.335", "1.001", "10000000000000"])
def test_parse_amount_rejects_unstorable_precision(text):
    with pytest.raises(ValueError, match="at most two decimal places"):
        parse_amount(text)


def test_parse_amount_accepts_trailing_zeros():
    assert parse_amount("12.500") == Decimal("12.5")

"""Tests for amount parsing and formatting."""

from decimal import Decimal

import pytest

from buyin_ledger.domain.errors import ValidationError
from buyin_ledger.domain.money import (
    MAX_AMOUNT_CENTS,
    format_money,
    parse_amount,
    to_cents,
)


def test_parse_amount_takes_first_number() -> None:
    assert parse_amount("buy in for 12.50 then 3") == Decimal("12.50")
    assert parse_amount("fifty") is None
    assert parse_amount(None) is None


def test_to_cents_rounds_half_to_even() -> None:
    assert to_cents(Decimal("0.125")) == 12
    assert to_cents(Decimal("0.135")) == 14
    assert to_cents(Decimal("50")) == 5000


def test_format_money() -> None:
    assert format_money(5000) == "50.00"
    assert format_money(1234) == "12.34"
    assert format_money(0) == "0.00"


@pytest.mark.parametrize(
    "amount",
    [Decimal("1" * 30), Decimal("30000000"), Decimal("21474836.48")],
)
def test_to_cents_rejects_amounts_beyond_column_range(amount: Decimal) -> None:
    with pytest.raises(ValidationError, match="at most 21474836.47"):
        to_cents(amount)


def test_to_cents_accepts_largest_storable_amount() -> None:
    assert to_cents(Decimal("21474836.47")) == MAX_AMOUNT_CENTS

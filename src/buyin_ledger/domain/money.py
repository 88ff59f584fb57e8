"""Amount parsing and formatting in minor currency units."""

import re
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from buyin_ledger.domain.errors import ValidationError

_AMOUNT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)")
_CENTS = Decimal(100)

# Largest value the integer amount columns accept.
MAX_AMOUNT_CENTS = 2**31 - 1


def parse_amount(text: str | None) -> Decimal | None:
    """Return the first decimal number found in the text, if any."""
    if not text:
        return None
    match = _AMOUNT_PATTERN.search(text)
    if match is None:
        return None
    return Decimal(match.group(1))


def to_cents(amount: Decimal) -> int:
    """Scale a decimal amount to integer cents, rounding half to even.

    Raises ValidationError for amounts above MAX_AMOUNT_CENTS.
    """
    scaled = amount * _CENTS
    if scaled > MAX_AMOUNT_CENTS:
        raise ValidationError(
            f"Amount must be at most {format_money(MAX_AMOUNT_CENTS)}."
        )
    try:
        return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))
    except InvalidOperation as exc:
        raise ValidationError("Amount is not a valid number.") from exc


def format_money(cents: int) -> str:
    """Format integer cents as units with two decimals."""
    return f"{Decimal(cents) / _CENTS:.2f}"

"""Conversion between human decimal amounts and the RGS fixed-point integers."""

from __future__ import annotations

from decimal import MAX_EMAX, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final, TypeAlias

from rgsclient.engine.errors import InvalidAmount

# In API payloads, amount 1000000 is 1 currency unit.
API_AMOUNT_MULTIPLIER: Final = 1_000_000

# In books, amount 100 is 1 currency unit.
# Only used by downstream reporting; never sent on the wire.
BOOK_AMOUNT_MULTIPLIER: Final = 100

DAPI: Final = Decimal(API_AMOUNT_MULTIPLIER)

Amount: TypeAlias = int | float | Decimal | str


def _asDecimal(value: Amount) -> Decimal:
    # bool is an int subclass, but True is never a bet amount
    if isinstance(value, bool):
        raise InvalidAmount(value, "not a number")

    if isinstance(value, Decimal):
        return value

    if isinstance(value, float):
        # repr() gives the shortest round-tripping form, so 2.3 becomes Decimal("2.3")
        # instead of Decimal(2.29999999999999982236431605997495353221893310546875)
        return Decimal(repr(value))

    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation:
            raise InvalidAmount(value, "not a number") from None

    raise InvalidAmount(value, "not a number")


def toWireAmount(value: Amount) -> int:
    """Convert a currency amount (1.00 == one unit) into the API integer format.

    Rounds to the nearest integer with ties away from zero (amounts are never
    negative, so this is plain ROUND_HALF_UP).
    """
    amount = _asDecimal(value)

    if not amount.is_finite():
        raise InvalidAmount(value, "not finite")

    if amount < 0:
        raise InvalidAmount(value, "negative")

    # room for every integer digit of the scaled result, so the product is exact
    _, digits, exponent = amount.as_tuple()
    with localcontext() as ctx:
        ctx.prec = len(digits) + max(exponent, 0) + 7
        ctx.Emax = MAX_EMAX
        return int((amount * DAPI).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def fromWireAmount(value: int | float | Decimal) -> float:
    """Convert an API integer amount back to currency units as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmount(value, "not a number")

    if isinstance(value, Decimal):
        return float(value / DAPI)

    return value / API_AMOUNT_MULTIPLIER


def fromWireAmountDecimal(value: int | Decimal) -> Decimal:
    """Exact variant of fromWireAmount() for callers doing money math."""
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise InvalidAmount(value, "not an integer amount")

    return Decimal(value) / DAPI

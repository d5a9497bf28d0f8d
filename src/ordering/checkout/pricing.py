"""Pricing calculator — subtotal, tax and total for a set of priced lines.

All arithmetic is decimal. Floats are converted through ``str`` so a stored
price of ``5.005`` is priced as the literal 5.005, not its binary neighbour.
Rounding is half-up to two places, applied once to the subtotal and once to
the tax; the total is the sum of the two rounded amounts.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ordering.config import tax_rate as configured_tax_rate

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    def as_floats(self) -> dict:
        return {
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "total": float(self.total),
        }


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_amount(unit_price, quantity: int) -> Decimal:
    """Unrounded extended amount of one line."""
    return to_decimal(unit_price) * quantity


def price_lines(lines: Iterable[tuple], tax_rate=None) -> Totals:
    """Price ``(unit_price, quantity)`` pairs.

    The result depends only on the lines and the rate, so pricing the same
    cart twice always yields identical totals.
    """
    rate = configured_tax_rate() if tax_rate is None else to_decimal(tax_rate)

    raw_subtotal = sum((line_amount(price, qty) for price, qty in lines), Decimal("0"))
    subtotal = round2(raw_subtotal)
    tax = round2(subtotal * rate)
    total = round2(subtotal + tax)
    return Totals(subtotal=subtotal, tax=tax, total=total)

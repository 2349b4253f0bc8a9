"""Currency arithmetic on two-decimal amounts.

Prices are stored as floats on aggregates; every calculation converts them
to ``Decimal`` through their string form so totals do not drift.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a price-like value to a ``Decimal`` rounded to cents."""
    if isinstance(value, Decimal):
        amount = value
    else:
        amount = Decimal(str(value))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity) -> Decimal:
    return to_money(to_money(unit_price) * quantity)


def sum_lines(lines) -> Decimal:
    """Total of ``(unit_price, quantity)`` pairs."""
    return to_money(sum((line_total(price, qty) for price, qty in lines), Decimal("0")))


def format_money(value) -> str:
    return f"{to_money(value):.2f}"

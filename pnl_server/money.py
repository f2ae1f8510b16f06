"""Exact decimal arithmetic helpers shared by the accounting core.

Every quantity and price entering the core goes through ``to_decimal``,
which keeps binary floating point out of cost-basis and PnL math and
bounds each value to ``MAX_INTEGER_DIGITS`` integer digits and
``MAX_SCALE`` fractional digits. Within those bounds, sums and products
of trade values fit ``ACCOUNTING_CONTEXT`` without rounding. The only
rounding happens when an average cost is divided out; values computed
from that average carry its rounding at the context precision.
"""

from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation, localcontext
from typing import Union

from pnl_server.errors import InvalidInput

DecimalLike = Union[Decimal, int, float, str]

MAX_INTEGER_DIGITS = 16
MAX_SCALE = 18
MAX_AMOUNT = Decimal(10) ** MAX_INTEGER_DIGITS

ACCOUNTING_CONTEXT = Context(prec=100, rounding=ROUND_HALF_EVEN)

ZERO = Decimal(0)


def _scale(value: Decimal) -> int:
    """Count fractional digits, ignoring trailing zeros."""
    _, digits, exponent = value.as_tuple()
    digits = list(digits)
    while exponent < 0 and digits and digits[-1] == 0:
        digits.pop()
        exponent += 1
    return max(0, -exponent)


def to_decimal(value: DecimalLike) -> Decimal:
    """Normalize a number or numeric string to a bounded, finite ``Decimal``."""
    if isinstance(value, bool):
        raise InvalidInput(f"Not a decimal value: {value!r}")
    if isinstance(value, float):
        # repr gives the shortest round-tripping literal, so 0.1 -> "0.1"
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInput(f"Not a decimal value: {value!r}") from None
    if not result.is_finite():
        raise InvalidInput(f"Not a finite decimal value: {value!r}")
    if abs(result) >= MAX_AMOUNT:
        raise InvalidInput(f"Decimal value out of range: {value!r}")
    if _scale(result) > MAX_SCALE:
        raise InvalidInput(f"Too many decimal places: {value!r}")
    return result


def accounting_context():
    """Context manager running decimal math under the accounting precision."""
    return localcontext(ACCOUNTING_CONTEXT)


def format_decimal(value: Decimal) -> str:
    """Render a decimal as a plain string without exponent or trailing zeros.

    No rounding is applied; every stored digit is kept.
    """
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

"""Display formatting for USD/INR amounts.

Amounts are rounded here and only here. USD shows two decimals with
thousands grouping; INR shows whole rupees with lakh/crore grouping
(12,34,567). The exchange rate is applied once, in ``to_inr``.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from jinja2 import Environment

_CENT = Decimal("0.01")
_RUPEE = Decimal("1")
_STRIKE = Decimal("0.001")


def to_inr(usd: Decimal, dollar_rate: Decimal) -> Decimal:
    return usd * dollar_rate


def _quantize(value: Decimal, exp: Decimal) -> Decimal:
    # quantize needs room for every integer digit plus the decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exp.adjusted() + 2)
        return value.quantize(exp, rounding=ROUND_HALF_UP)


def _indian_grouping(digits: str) -> str:
    """Group an unsigned integer string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_usd(value: Decimal) -> str:
    rounded = _quantize(value, _CENT)
    return f"${rounded:,.2f}"


def format_inr(value: Decimal) -> str:
    rounded = _quantize(value, _RUPEE)
    sign = "-" if rounded < 0 else ""
    return f"₹{sign}{_indian_grouping(str(abs(int(rounded))))}"


def format_quantity(value: int) -> str:
    sign = "-" if value < 0 else ""
    return sign + _indian_grouping(str(abs(value)))


def format_dual(usd: Decimal, dollar_rate: Decimal) -> str:
    """USD amount with its INR equivalent, e.g. ``$133.00 / ₹11,305``."""
    return f"{format_usd(usd)} / {format_inr(to_inr(usd, dollar_rate))}"


def format_strike(value: Decimal) -> str:
    return f"${_quantize(value, _STRIKE)}"


def format_percent(fraction: Decimal) -> str:
    """Fraction to percent text: 0.4274 -> 42.74%."""
    return f"{(fraction * 100).normalize():f}%"


def register_filters(env: Environment) -> Environment:
    env.filters["usd"] = format_usd
    env.filters["inr"] = format_inr
    env.filters["qty"] = format_quantity
    env.filters["dual"] = format_dual
    env.filters["strike"] = format_strike
    env.filters["pct"] = format_percent
    return env

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

Number = Union[int, float, str, Decimal]

# Wide enough for uint256 amounts scaled by 10 ** 18.
PRECISION = 100


def _to_decimal(amount: Number) -> Decimal:
    if isinstance(amount, float):
        # str() gives the shortest repr, so 0.1 stays 0.1 instead of its binary expansion.
        return Decimal(str(amount))
    return Decimal(amount)


def to_base_units(amount: Number, decimals: int) -> str:
    """
    Convert a human readable amount to the integer amount of the token's smallest unit.

    Examples:
        to_base_units(1.5, 6) == '1500000'
        to_base_units('2', 18) == '2000000000000000000'
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        scaled = _to_decimal(amount).scaleb(decimals)
        return str(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_base_units(amount: Number) -> int:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return int(_to_decimal(amount).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_human(base_units: Number, decimals: int) -> float:
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return float(_to_decimal(base_units).scaleb(-decimals))


def is_dust(base_units: Number) -> bool:
    """Amounts that round to zero (or below) cannot be quoted."""
    return round_base_units(base_units) <= 0

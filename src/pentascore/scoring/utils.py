"""
Numeric helpers shared by the points calculators.

Raw performances arrive as floats (0.33s per obstacle point, 0.20s swim
bands), which do not divide cleanly in binary floating point. All formulas
convert through Decimal(str(x)) first so that 15.33s really is one band
above 15.00s, then round half up (toward +infinity), the convention the
rule tables were published with.
"""

from decimal import Decimal, ROUND_FLOOR
from numbers import Real


def to_decimal(value: Real) -> Decimal:
    """Convert an int/float to an exact Decimal via its shortest repr."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal) -> int:
    """
    Round to the nearest integer, halves toward +infinity.

    Examples:
        >>> round_half_up(Decimal("2.5"))
        3
        >>> round_half_up(Decimal("-2.5"))
        -2
        >>> round_half_up(Decimal("-2.6"))
        -3
    """
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def floor_at_zero(points: int) -> int:
    """No discipline awards negative points."""
    return max(0, points)

"""
Conversion between major currency units (dollars) and stored minor units (cents).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

MINOR_UNITS_PER_MAJOR = 100


def to_minor_units(amount: Union[int, float, Decimal, str], rounding: str = ROUND_HALF_UP) -> int:
    """
    Convert a major-unit amount to an integer count of minor units.

    Args:
        amount: Price in major units, e.g. 50 or "49.99"
        rounding: decimal rounding mode for fractional cents

    Returns:
        Integer minor units, rounded half up by default (49.995 -> 5000)
    """
    value = Decimal(str(amount)) * MINOR_UNITS_PER_MAJOR
    return int(value.to_integral_value(rounding=rounding))

from decimal import Decimal
from typing import Union

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Coerce a price to Decimal without binary float artefacts (0.1 -> Decimal('0.1'))."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))

CENT = Decimal("0.01")


def is_cent_precise(value: Decimal) -> bool:
    """Prices are stored as NUMERIC(10, 2); anything finer would be rounded on write."""
    return value == value.quantize(CENT)

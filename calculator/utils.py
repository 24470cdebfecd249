import enum
import math
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(x: float) -> str:
    """Integral values print without a fractional part, the rest in shortest positional form"""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x == 0:
        return "-0" if math.copysign(1.0, x) < 0 else "0"
    if x.is_integer():
        return str(int(x))
    return format(Decimal(repr(x)), "f")

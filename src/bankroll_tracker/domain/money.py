"""Amount coercion for decimal strings coming from the row store."""

import math
from decimal import ROUND_HALF_UP, Decimal

UNKNOWN_PLAYER = "Unknown"
CENT = Decimal("0.01")


def parse_amount(value: object) -> float:
    """Coerce a numeric or decimal-string value into a float.

    Anything that is not a finite number (None, blank strings, malformed
    strings, NaN) becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_optional_amount(value: object) -> float | None:
    """Coerce a nullable amount, keeping None for missing values."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_amount(value)


def to_cents(value: float) -> Decimal:
    """Return an amount as a Decimal rounded to whole cents."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)

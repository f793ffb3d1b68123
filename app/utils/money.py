from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_fixed(value: float) -> str:
    """Two decimals, exact ties rounded away from zero (0.125 -> "0.13")."""
    return str(Decimal(float(value)).quantize(CENTS, rounding=ROUND_HALF_UP))

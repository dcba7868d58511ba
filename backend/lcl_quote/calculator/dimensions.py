"""Pure volume functions for package dimensions: no I/O, safe to call from anywhere.

Dimensions are centimeters; volumes are cubic meters (CBM).
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

CM3_PER_CBM = 1_000_000


class PackageDimensions(Protocol):
    length: float | None
    width: float | None
    height: float | None
    qty: int | None


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a spreadsheet does (0.5 goes up), not banker's rounding."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def package_volume(
    length: float | None,
    width: float | None,
    height: float | None,
    qty: int | None,
) -> float:
    """CBM for one package line.

    Returns 0 when any input is missing, zero or negative. Eligibility of such
    a package is the validator's concern, not this function's.
    """
    values = (length, width, height, qty)
    if any(v is None or v <= 0 for v in values):
        return 0.0

    return round_half_up((length * width * height * qty) / CM3_PER_CBM, 3)


def total_volume(packages: Iterable[PackageDimensions]) -> float:
    """Sum of package volumes; an empty list is 0."""
    return sum(
        (package_volume(p.length, p.width, p.height, p.qty) for p in packages),
        0.0,
    )

"""Chargeable weight: the greater of volume (CBM) and weight in metric tons."""

import enum
from dataclasses import dataclass

KG_PER_TON = 1000


class ChargingBasis(str, enum.Enum):
    BY_VOLUME = "by_volume"
    BY_WEIGHT = "by_weight"


@dataclass(frozen=True)
class RevenueWeight:
    revenue_weight: float
    basis: ChargingBasis
    total_volume: float
    weight_in_tons: float


def resolve_revenue_weight(total_volume: float, gross_weight_kg: float) -> RevenueWeight:
    """Pick the chargeable measure.

    A tie between volume and tons is charged by volume so the same shipment
    always prices the same way.
    """
    weight_in_tons = gross_weight_kg / KG_PER_TON
    if total_volume >= weight_in_tons:
        return RevenueWeight(total_volume, ChargingBasis.BY_VOLUME, total_volume, weight_in_tons)
    return RevenueWeight(weight_in_tons, ChargingBasis.BY_WEIGHT, total_volume, weight_in_tons)

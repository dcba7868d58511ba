"""Indicative LCL price: revenue weight times the route's unit rate."""

from collections.abc import Iterable
from dataclasses import dataclass

from lcl_quote.calculator.dimensions import round_half_up
from lcl_quote.calculator.rates import FallbackRates, RateEntry, find_rate
from lcl_quote.calculator.revenue_weight import ChargingBasis, resolve_revenue_weight


@dataclass(frozen=True)
class QuoteResult:
    revenue_weight: float
    charging_basis: ChargingBasis
    unit_rate: float
    amount: int
    used_fallback: bool = False


def calculate_quote(revenue_weight: float, basis: ChargingBasis, rate: RateEntry) -> int:
    """Amount in whole currency units, rounded half-up."""
    unit_rate = rate.rate_per_cbm if basis == ChargingBasis.BY_VOLUME else rate.rate_per_ton
    return int(round_half_up(revenue_weight * unit_rate))


def quote_route(
    origin_code: str,
    destination_code: str,
    total_volume: float,
    gross_weight_kg: float,
    rate_table: Iterable[RateEntry],
    fallback: FallbackRates | None = None,
) -> QuoteResult | None:
    """Price a shipment on a route.

    Returns None when the route has no rate and no fallback is given. That is
    "no quote", which is different from a quote of 0.
    """
    rate = find_rate(origin_code, destination_code, rate_table)
    used_fallback = False
    if rate is None:
        if fallback is None:
            return None
        rate = fallback.as_rate_entry(origin_code, destination_code)
        used_fallback = True

    resolved = resolve_revenue_weight(total_volume, gross_weight_kg)
    unit_rate = rate.rate_per_cbm if resolved.basis == ChargingBasis.BY_VOLUME else rate.rate_per_ton

    return QuoteResult(
        revenue_weight=round_half_up(resolved.revenue_weight, 3),
        charging_basis=resolved.basis,
        unit_rate=unit_rate,
        amount=calculate_quote(resolved.revenue_weight, resolved.basis, rate),
        used_fallback=used_fallback,
    )

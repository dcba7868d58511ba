from lcl_quote.calculator.dimensions import package_volume, total_volume
from lcl_quote.calculator.quote import QuoteResult, calculate_quote, quote_route
from lcl_quote.calculator.rates import FallbackRates, RateEntry, find_rate
from lcl_quote.calculator.revenue_weight import ChargingBasis, RevenueWeight, resolve_revenue_weight

__all__ = [
    "package_volume",
    "total_volume",
    "ChargingBasis",
    "RevenueWeight",
    "resolve_revenue_weight",
    "RateEntry",
    "FallbackRates",
    "find_rate",
    "QuoteResult",
    "calculate_quote",
    "quote_route",
]
